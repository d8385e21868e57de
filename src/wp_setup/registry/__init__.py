"""Configuration registry: stage named values, commit them once."""

from .errors import (
    AlreadyCommittedError,
    CommitError,
    ConfigError,
    InvalidKeyError,
    LoadError,
)
from .registry import (
    ConfigRegistry,
    Setup,
    default_registry,
    reset_default_registry,
)
from .sink import ConstantSink, MemorySink, NamespaceSink
