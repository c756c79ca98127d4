"""Bounded LRU cache keyed by content fingerprints.

Generated artifacts (exported code) are pure functions of their input, so
entries never expire; they are only evicted when the cache is full.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import xxhash

T = TypeVar("T")


def fingerprint(*parts: bytes | str) -> str:
    """
    Fast non-cryptographic digest of one or more parts.

    Args:
        *parts: Byte or text chunks, hashed in order with a separator

    Returns:
        16-character hex digest
    """
    hasher = xxhash.xxh64()
    for part in parts:
        hasher.update(part.encode("utf-8") if isinstance(part, str) else part)
        hasher.update(b"\x00")
    return hasher.hexdigest()


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate (0.0 to 1.0)."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hit_rate,
        }


class LRUCache(Generic[T]):
    """
    Least-recently-used cache with hit/miss statistics.

    Examples:
        >>> cache = LRUCache[str](max_size=2)
        >>> cache.set("a", "value")
        >>> cache.get("a")
        'value'
    """

    def __init__(self, max_size: int = 64):
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self._entries: OrderedDict[str, T] = OrderedDict()
        self._stats = Stats(max_size=max_size)

    def get(self, key: str) -> T | None:
        """Return the cached value and mark it most recently used."""
        if key in self._entries:
            self._entries.move_to_end(key)
            self._stats.hits += 1
            return self._entries[key]

        self._stats.misses += 1
        return None

    def set(self, key: str, value: T) -> None:
        """Insert or refresh a value, evicting the least recently used entry."""
        if key in self._entries:
            self._entries.move_to_end(key)
        self._entries[key] = value

        if len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
            self._stats.evictions += 1

        self._stats.size = len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._stats.size = 0

    @property
    def stats(self) -> Stats:
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        """Membership test (doesn't update LRU order)."""
        return key in self._entries


__all__ = ["LRUCache", "Stats", "fingerprint"]
