"""Thread-safe in-memory key/value store used for definitions and instances.

Every operation takes the same lock, so each one is atomic with respect to the
others. Nothing is persisted; a restart starts from an empty store.
"""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class InMemoryStore(Generic[K, V]):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[K, V] = {}

    def insert_if_absent(self, key: K, value: V) -> bool:
        with self._lock:
            if key in self._items:
                return False
            self._items[key] = value
            return True

    def get(self, key: K) -> V | None:
        with self._lock:
            return self._items.get(key)

    def replace(self, key: K, value: V) -> None:
        """Unconditional overwrite (last writer wins)."""

        with self._lock:
            self._items[key] = value

    def compare_and_replace(self, key: K, expected: V, value: V) -> bool:
        """Overwrite only while the stored value is still `expected`.

        Compares by identity: `expected` must be the object previously returned
        by :meth:`get`.
        """

        with self._lock:
            if self._items.get(key) is not expected:
                return False
            self._items[key] = value
            return True

    def values(self) -> list[V]:
        with self._lock:
            return list(self._items.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
