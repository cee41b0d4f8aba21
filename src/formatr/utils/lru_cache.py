"""Thread-safe LRU cache for compiled templates.

Recency is kept by ``OrderedDict`` order: the first entry is the least
recently used. A lock guards every read-modify-write so concurrent
renders of a cold template cannot corrupt the ordering.

Capacity semantics:
    - ``maxsize == 0`` disables storage (``set`` is a no-op, ``get`` misses)
    - ``set`` evicts at most one entry, the least recently used
    - lowering ``maxsize`` does not evict immediately
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Callable
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """Bounded least-recently-used map.

    Example:
        >>> cache: LRUCache[str, int] = LRUCache(maxsize=2)
        >>> cache.set("a", 1); cache.set("b", 2)
        >>> cache.get("a")
        1
        >>> cache.set("c", 3)  # evicts "b"
        >>> "b" in cache
        False

    """

    __slots__ = ("_data", "_hits", "_lock", "_maxsize", "_misses")

    def __init__(self, maxsize: int = 200):
        if maxsize < 0:
            raise ValueError("maxsize must be >= 0")
        self._maxsize = maxsize
        self._data: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def maxsize(self) -> int:
        return self._maxsize

    @maxsize.setter
    def maxsize(self, value: int) -> None:
        if value < 0:
            raise ValueError("maxsize must be >= 0")
        with self._lock:
            self._maxsize = value
            if value == 0:
                self._data.clear()

    def get(self, key: K) -> V | None:
        """Return the cached value (refreshing its recency) or ``None``."""
        with self._lock:
            try:
                value = self._data[key]
            except KeyError:
                self._misses += 1
                return None
            self._data.move_to_end(key)
            self._hits += 1
            return value

    def set(self, key: K, value: V) -> None:
        with self._lock:
            if self._maxsize <= 0:
                return
            if key in self._data:
                self._data.move_to_end(key)
            self._data[key] = value
            if len(self._data) > self._maxsize:
                self._data.popitem(last=False)

    def get_or_set(self, key: K, factory: Callable[[], V]) -> V:
        """Return the cached value, or build it with ``factory()`` and store it.

        The factory runs outside the lock; when two threads race on a cold
        key the first stored value wins and both callers receive it.
        """
        value = self.get(key)
        if value is not None:
            return value
        created = factory()
        with self._lock:
            if self._maxsize <= 0:
                return created
            existing = self._data.get(key)
            if existing is not None:
                self._data.move_to_end(key)
                return existing
            self._data[key] = created
            if len(self._data) > self._maxsize:
                self._data.popitem(last=False)
            return created

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "size": len(self._data),
                "maxsize": self._maxsize,
            }

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
