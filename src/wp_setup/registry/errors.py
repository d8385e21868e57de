"""Exceptions raised by the configuration registry and its loaders."""

from pathlib import Path
from typing import Optional


class ConfigError(Exception):
    """Base class for every error raised by wp_setup."""


class InvalidKeyError(ConfigError, ValueError):
    """A configuration key was empty or not a string."""


class AlreadyCommittedError(ConfigError, RuntimeError):
    """Staging was attempted after the registry committed."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            f"Cannot stage '{key}' after the registry has been committed. "
            "Call stage() before commit()."
        )


class LoadError(ConfigError):
    """A configuration document could not be turned into a mapping.

    Attributes:
        path: The document that failed to load.
        reason: One of MISSING, UNREADABLE, MALFORMED, NOT_MAPPING.
    """

    MISSING = "missing"
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"
    NOT_MAPPING = "not_mapping"

    def __init__(self, message: str, path: Optional[Path] = None, reason: str = MALFORMED):
        self.path = path
        self.reason = reason
        super().__init__(message)


class CommitError(ConfigError):
    """The sink refused one or more keys during commit().

    Every other staged key was still attempted.

    Attributes:
        applied: Keys published by the failed commit, in staging order.
        failures: Key -> exception raised by the sink for that key.
    """

    def __init__(self, applied: dict, failures: dict):
        self.applied = applied
        self.failures = failures
        super().__init__(
            f"Failed to publish {len(failures)} constant(s): {', '.join(failures)}. "
            "Call commit() again to retry them."
        )
