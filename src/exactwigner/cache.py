# -----------------------------------------------------------------------------
#  cache.py
#  Bounded LRU caches for computed coefficients, one per symbol kind
# -----------------------------------------------------------------------------

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from typing import Any

from exactwigner.runtime import CFG, debug

DEFAULT_MAXSIZE = 1_000_000

KINDS = ("3j", "6j", "9j")


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int
    maxsize: int


class LRUCache:
    """
    Thread-safe mapping with a maximum entry count and least-recently-used eviction.

    maxsize == 0 keeps nothing; every lookup misses.
    """

    def __init__(self, maxsize: int = DEFAULT_MAXSIZE, name: str = "") -> None:
        if maxsize < 0:
            raise ValueError(f"cache size must be >= 0, got {maxsize}")
        self.name = name
        self._maxsize = int(maxsize)
        self._data: OrderedDict[Hashable, Any] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

    def get(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            try:
                value = self._data[key]
            except KeyError:
                self._misses += 1
                return default
            self._data.move_to_end(key)
            self._hits += 1
            return value

    def find(self, keys: Iterable[Hashable], default: Any = None) -> tuple[Hashable | None, Any]:
        """
        Return (key, value) for the first of keys that is cached, else (None, default).

        Counts one hit or one miss for the whole search.
        """
        with self._lock:
            for key in keys:
                if key in self._data:
                    self._data.move_to_end(key)
                    self._hits += 1
                    return key, self._data[key]
            self._misses += 1
            return None, default

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock:
            if self._maxsize == 0:
                return
            self._data[key] = value
            self._data.move_to_end(key)
            self._evict()

    def resize(self, maxsize: int) -> None:
        if maxsize < 0:
            raise ValueError(f"cache size must be >= 0, got {maxsize}")
        with self._lock:
            self._maxsize = int(maxsize)
            dropped = self._evict()
        debug(f"cache {self.name or '?'} resized to {maxsize} ({dropped} entries evicted)")

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._hits = self._misses = 0

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(self._hits, self._misses, len(self._data), self._maxsize)

    def _evict(self) -> int:
        dropped = 0
        while len(self._data) > self._maxsize:
            self._data.popitem(last=False)
            dropped += 1
        return dropped


CACHES: dict[str, LRUCache] = {
    kind: LRUCache(int(CFG(f"CACHE.MAX_{kind.upper()}", DEFAULT_MAXSIZE)), name=kind)
    for kind in KINDS
}


def _cache(kind: str) -> LRUCache:
    try:
        return CACHES[str(kind).lower()]
    except KeyError:
        raise ValueError(f"unknown symbol kind {kind!r}; expected one of {', '.join(KINDS)}") from None


def set_cache_capacity(kind: str, maxsize: int) -> None:
    """Resize the cache of one symbol kind ("3j", "6j" or "9j")."""
    _cache(kind).resize(maxsize)


def cache_capacity(kind: str) -> int:
    return _cache(kind).maxsize


def cache_stats(kind: str) -> CacheStats:
    return _cache(kind).stats()


def clear_caches() -> None:
    for c in CACHES.values():
        c.clear()
