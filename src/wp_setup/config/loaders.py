"""Bulk loaders that stage configuration into a registry.

Each loader only calls ConfigRegistry.stage(), so the registry's rules
(non-empty keys, no staging after commit) apply unchanged. Loading stops at
the first rejected key; entries staged before it stay staged.
"""

import json
import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from ..registry.errors import LoadError
from ..registry.registry import ConfigRegistry
from .defaults import DEFAULT_ENV_PREFIX, DOCUMENT_ENCODING, SUPPORTED_SUFFIXES

logger = logging.getLogger(__name__)


def load_from_mapping(registry: ConfigRegistry, mapping: Mapping) -> None:
    """Stage every entry of mapping, in iteration order."""
    for key, value in mapping.items():
        registry.stage(key, value)


def read_document(path: Union[Path, str]) -> dict:
    """Parse a .json or .toml configuration document into a dict.

    Raises:
        LoadError: with reason MISSING, UNREADABLE, MALFORMED or NOT_MAPPING.
    """
    path = Path(path)
    if not path.exists():
        raise LoadError(f"Configuration file not found: {path}", path, LoadError.MISSING)

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise LoadError(
            f"Unsupported configuration format '{suffix}': {path} "
            f"(expected one of {', '.join(SUPPORTED_SUFFIXES)})",
            path,
            LoadError.MALFORMED,
        )

    try:
        text = path.read_bytes().decode(DOCUMENT_ENCODING)
    except FileNotFoundError as e:
        # Deleted between the exists() check and the read.
        raise LoadError(f"Configuration file not found: {path}", path, LoadError.MISSING) from e
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(
            f"Unable to read configuration file: {path} ({e})", path, LoadError.UNREADABLE
        ) from e

    try:
        if suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise LoadError(
            f"Invalid configuration file {path}: {e}", path, LoadError.MALFORMED
        ) from e

    if not isinstance(data, dict):
        raise LoadError(
            f"Configuration file must contain an object at the top level: {path}",
            path,
            LoadError.NOT_MAPPING,
        )
    return data


def load_from_file(
    registry: ConfigRegistry, path: Union[Path, str], required: bool = True
) -> bool:
    """Read a configuration document and stage its top-level entries.

    Args:
        registry: Registry to stage into.
        path: .json or .toml document.
        required: If False, a missing file is not an error.

    Returns:
        True if the document was loaded, False if it was absent and optional.
    """
    path = Path(path)
    if not required and not path.exists():
        logger.debug(f"Optional configuration file absent: {path}")
        return False

    data = read_document(path)
    load_from_mapping(registry, data)
    logger.debug(f"Loaded {len(data)} value(s) from {path}")
    return True


def load_from_env(
    registry: ConfigRegistry,
    prefix: str = DEFAULT_ENV_PREFIX,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Stage environment variables whose names start with prefix.

    Names are staged as-is, prefix included.

    Args:
        registry: Registry to stage into.
        prefix: Name filter. Defaults to DEFAULT_ENV_PREFIX.
        environ: Mapping to read instead of os.environ.

    Returns:
        Number of variables staged.
    """
    if environ is None:
        environ = os.environ

    staged = 0
    for key, value in environ.items():
        if key.startswith(prefix):
            registry.stage(key, value)
            staged += 1
    logger.debug(f"Staged {staged} environment variable(s) with prefix '{prefix}'")
    return staged
