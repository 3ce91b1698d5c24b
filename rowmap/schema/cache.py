"""Compute-once cache of merged type metadata."""

import threading
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

from rowmap.log import get_logger

logger = get_logger(__name__)

V = TypeVar("V")


class SchemaCache(Generic[V]):
    """Process-wide cache keyed by type identity.

    The first request for a key runs its factory under a lock private to
    that key, so concurrent first resolutions of one type compute once and
    share the resulting instance while other keys proceed independently.
    Stored entries are never replaced and are read without locking. A key's
    lock is dropped once its computation returns or raises.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, V] = {}
        self._key_locks: dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, key: Hashable) -> V | None:
        """Return the cached entry for ``key`` or None."""
        return self._entries.get(key)

    def get_or_compute(self, key: Hashable, factory: Callable[[], V]) -> V:
        """Return the entry for ``key``, computing it on first request.

        Args:
            key: Cache key
            factory: Called at most once per key to build the entry

        Returns:
            The cached entry
        """
        try:
            return self._entries[key]
        except KeyError:
            pass

        with self._guard:
            lock = self._key_locks.setdefault(key, threading.Lock())

        try:
            with lock:
                if key in self._entries:
                    return self._entries[key]

                value = factory()
                self._entries[key] = value
                logger.debug(f"Cached schema entry for {key!r}")
        finally:
            with self._guard:
                if self._key_locks.get(key) is lock:
                    del self._key_locks[key]

        return value

    def keys(self) -> list[Hashable]:
        return list(self._entries)

    def reset(self) -> None:
        """Drop every entry."""
        with self._guard:
            self._entries.clear()
            self._key_locks.clear()
        logger.debug("Schema cache reset")

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
