"""Bounded FIFO cache for translation results."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Dict, Iterator, Optional, Tuple

from lexifeed.config_manager.constants import DEFAULT_TRANSLATION_CACHE_SIZE

CacheKey = Tuple[str, str, str]


def make_cache_key(text: str, source_lang: str, target_lang: str) -> CacheKey:
    """Return the composite cache key for a translation request."""

    return (
        (source_lang or "").strip().lower(),
        (target_lang or "").strip().lower(),
        (text or "").strip().lower(),
    )


class FifoTranslationCache:
    """Fixed-capacity cache that evicts the earliest-inserted surviving entry.

    Reads never change eviction order, and overwriting an existing key keeps
    its original insertion position.
    """

    def __init__(self, max_size: int = DEFAULT_TRANSLATION_CACHE_SIZE) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be greater than zero")
        self.max_size = max_size
        self._entries: "OrderedDict[CacheKey, str]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: CacheKey) -> Optional[str]:
        with self._lock:
            value = self._entries.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def set(self, key: CacheKey, value: str) -> Optional[CacheKey]:
        """Store ``value`` under ``key`` and return the evicted key, if any."""

        with self._lock:
            if key in self._entries:
                self._entries[key] = value
                return None
            evicted: Optional[CacheKey] = None
            if len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
            self._entries[key] = value
            return evicted

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def keys(self) -> Iterator[CacheKey]:
        with self._lock:
            return iter(list(self._entries))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> Dict[str, int]:
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
        }


__all__ = ["CacheKey", "FifoTranslationCache", "make_cache_key"]
