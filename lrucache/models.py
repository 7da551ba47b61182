"""
Data models for the LRU cache
Copyright 2025 Jurden Bruce
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Hashable, Optional


@dataclass
class Node:
    """One cache entry, stored in an arena slot"""
    key: Hashable
    value: Any
    # Arena indices of the neighbours in recency order (None at either end)
    prev: Optional[int] = None
    next: Optional[int] = None

    def unlink(self):
        self.prev = None
        self.next = None


@dataclass
class CacheStats:
    """Running counters for a cache instance"""
    hits: int = 0
    misses: int = 0
    inserts: int = 0
    updates: int = 0
    evictions: int = 0

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Fraction of get() calls that found their key, 0.0 before any lookup"""
        if not self.lookups:
            return 0.0
        return self.hits / self.lookups

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["lookups"] = self.lookups
        data["hit_rate"] = round(self.hit_rate, 4)
        return data
