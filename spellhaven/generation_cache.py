"""Thread-safe cache that generates each entry at most once."""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


class _Entry(Generic[T]):
    __slots__ = ("lock", "value")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.value: Optional[T] = None


class GenerationCache(Generic[K, T]):
    """Maps keys to lazily generated values; ``factory(key, options)`` builds a value."""

    def __init__(self, factory: Callable[[K, Any], T]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._entries: dict[K, _Entry[T]] = {}

    def _entry(self, key: K) -> _Entry[T]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            return entry

    def get_cache_entry(self, key: K, generation_options: Any) -> T:
        """The value for ``key``, generating it if no thread has yet."""
        entry = self._entry(key)
        value = entry.value
        if value is not None:
            return value
        with entry.lock:
            if entry.value is None:
                entry.value = self._factory(key, generation_options)
            return entry.value

    def try_get_entry_no_lock(self, key: K) -> Optional[T]:
        """The value for ``key`` if it is ready and no lock is contended, else None."""
        if not self._lock.acquire(blocking=False):
            return None
        try:
            entry = self._entries.get(key)
        finally:
            self._lock.release()
        if entry is None:
            return None
        if not entry.lock.acquire(blocking=False):
            return None
        try:
            return entry.value
        finally:
            entry.lock.release()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
        return entry is not None and entry.value is not None