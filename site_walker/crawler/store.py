# File: site_walker/crawler/store.py
"""
Insert-only, thread-safe set used for URL and content deduplication.
"""
from __future__ import annotations

import threading
from typing import Generic, Hashable, Set, TypeVar

K = TypeVar("K", bound=Hashable)


class DedupStore(Generic[K]):
    """A set that only grows. ``insert`` checks and records in one step."""

    def __init__(self) -> None:
        self._items: Set[K] = set()
        self._lock = threading.Lock()

    def insert(self, key: K) -> bool:
        """
        Record ``key``.

        Returns True if the key was not present before this call, False otherwise.
        Two concurrent callers with the same key never both get True.
        """
        with self._lock:
            if key in self._items:
                return False
            self._items.add(key)
            return True

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
