"""Constant sinks: the write-once namespaces a registry commits into.

A sink answers two questions for the registry: is this name already fixed,
and fix this name to this value. The registry only ever publishes names the
sink reports as unset, so sinks do not need to guard against overwrites.
"""

import threading
from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class ConstantSink(Protocol):
    def has(self, key: str) -> bool:
        ...

    def publish(self, key: str, value: Any) -> None:
        ...


class MemorySink:
    """In-memory write-once namespace.

    Values passed as ``initial`` model constants fixed by the host before
    any registry runs.
    """

    def __init__(self, initial: Optional[dict] = None):
        self._lock = threading.Lock()
        self._values: dict = dict(initial or {})

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def publish(self, key: str, value: Any) -> None:
        with self._lock:
            # First write wins, even if two registries share this sink.
            self._values.setdefault(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def snapshot(self) -> dict:
        with self._lock:
            return dict(self._values)

    def clear(self) -> None:
        """Forget every published value. Only meant for tests."""
        with self._lock:
            self._values.clear()

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)


class NamespaceSink:
    """Publish constants as attributes of a module or any other object.

    Example:
        import myapp.constants
        registry = ConfigRegistry(sink=NamespaceSink(myapp.constants))
    """

    def __init__(self, target: Any):
        self.target = target

    def has(self, key: str) -> bool:
        return hasattr(self.target, key)

    def publish(self, key: str, value: Any) -> None:
        setattr(self.target, key, value)
