"""Two-phase configuration registry: stage values, then commit them once."""

import logging
import threading
from typing import Any, Optional

from .errors import AlreadyCommittedError, CommitError, InvalidKeyError
from .sink import ConstantSink, MemorySink

logger = logging.getLogger(__name__)


class ConfigRegistry:
    """Stages named values and commits them into a write-once constant sink.

    Two namespaces are kept apart:
        staged    values declared with stage(), pushed to the sink by commit()
        resolved  values declared with set(), only visible through get()

    After commit() the registry refuses further staging. Staged entries stay
    inspectable; the sink keeps whatever was published, even across reset().
    """

    def __init__(self, sink: Optional[ConstantSink] = None):
        self.sink = sink if sink is not None else MemorySink()
        self._lock = threading.RLock()
        self._staged: dict = {}
        self._resolved: dict = {}
        self._committed = False

    def stage(self, key: str, value: Any) -> None:
        """Record a value to be published on commit.

        Staging the same key twice keeps the last value.

        Raises:
            InvalidKeyError: key is empty or not a string.
            AlreadyCommittedError: commit() has already run.
        """
        if not isinstance(key, str) or not key:
            raise InvalidKeyError("Configuration key must be a non-empty string")

        with self._lock:
            if self._committed:
                logger.warning(f"Rejected stage of '{key}': registry already committed")
                raise AlreadyCommittedError(key)
            self._staged[key] = value
        logger.debug(f"Staged: {key}")

    def set(self, key: str, value: Any) -> None:
        """Store a runtime value for get(). Never published, never blocked."""
        with self._lock:
            self._resolved[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored with set(), or default.

        Staged values are not visible here.
        """
        with self._lock:
            return self._resolved.get(key, default)

    def has(self, key: str) -> bool:
        """True if key is staged or set."""
        with self._lock:
            return key in self._staged or key in self._resolved

    def is_published(self, key: str) -> bool:
        """Ask the sink whether key is already fixed, regardless of this registry."""
        return self.sink.has(key)

    def commit(self) -> dict:
        """Publish every staged value the sink does not already hold.

        Keys the sink already has are skipped and left out of the result.
        The registry is committed afterwards even when nothing was staged;
        calling commit() again is harmless and returns an empty dict.

        Each key is published independently: if the sink raises for one key,
        the remaining keys are still attempted. Calling commit() again
        retries only the keys the sink still lacks.

        Returns:
            Dict of the keys newly published by this call, in staging order.

        Raises:
            CommitError: the sink raised for at least one key. Carries the
                keys that were published and the per-key exceptions.
        """
        applied = {}
        failures = {}
        with self._lock:
            for key, value in self._staged.items():
                try:
                    if self.sink.has(key):
                        logger.debug(f"Skipped: {key} (already published)")
                        continue
                    self.sink.publish(key, value)
                except Exception as e:
                    logger.error(f"Failed to publish {key}: {e}")
                    failures[key] = e
                    continue
                applied[key] = value
            self._committed = True
            skipped = len(self._staged) - len(applied) - len(failures)

        logger.info(
            f"Committed {len(applied)} constant(s), skipped {skipped}, failed {len(failures)}"
        )
        if failures:
            raise CommitError(applied, failures) from next(iter(failures.values()))
        return applied

    def remove(self, key: str) -> bool:
        """Drop key from staged, or failing that from resolved.

        Returns:
            True if something was removed.
        """
        with self._lock:
            if key in self._staged:
                del self._staged[key]
                return True
            if key in self._resolved:
                del self._resolved[key]
                return True
        return False

    def count(self) -> int:
        """Number of staged values."""
        with self._lock:
            return len(self._staged)

    def all_staged(self) -> dict:
        with self._lock:
            return dict(self._staged)

    def all_resolved(self) -> dict:
        with self._lock:
            return dict(self._resolved)

    @property
    def is_committed(self) -> bool:
        with self._lock:
            return self._committed

    def reset(self) -> None:
        """Return to the empty, uncommitted state.

        The sink is left alone, so anything already published stays
        published. Intended for test isolation.
        """
        with self._lock:
            self._staged.clear()
            self._resolved.clear()
            self._committed = False
        logger.info("Registry reset")

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return self.count()


# Short alias
Setup = ConfigRegistry


_default: Optional[ConfigRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> ConfigRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = ConfigRegistry()
        return _default


def reset_default_registry() -> None:
    """Discard the process-wide registry and its sink."""
    global _default
    with _default_lock:
        _default = None
