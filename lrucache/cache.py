"""
LRU Cache implementation
Copyright 2025 Jurden Bruce

Hash index plus a doubly linked recency chain. Nodes live in a flat arena
and refer to each other by slot index, so there is no shared ownership.
"""

import copy
import logging
from typing import Any, Dict, Hashable, Iterator, List, Optional

from .models import Node, CacheStats

logger = logging.getLogger("lrucache.cache")


class LRUCache:
    """Fixed capacity key-value cache with least-recently-used eviction

    get() promotes the entry it finds; put() inserts or overwrites and
    promotes, evicting the least recently used entry once the cache
    would grow past capacity.

    Not thread-safe. Callers sharing an instance need their own lock.
    """

    def __init__(self, capacity: int, copy_on_read: bool = True):
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise TypeError(f"capacity must be an int, got {type(capacity).__name__}")
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")

        self._capacity = capacity
        self.copy_on_read = copy_on_read
        self._index: Dict[Hashable, int] = {}
        self._nodes: List[Optional[Node]] = []
        self._free: List[int] = []
        self._head: Optional[int] = None
        self._tail: Optional[int] = None
        self.stats = CacheStats()

        logger.info(f"LRUCache created with capacity {capacity} (copy_on_read={copy_on_read})")

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "LRUCache":
        """Build a cache from a load_config() dict"""
        if config is None:
            from .config import load_config
            config = load_config()
        return cls(config["capacity"], copy_on_read=config.get("copy_on_read", True))

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key) -> bool:
        # Membership only; does not touch recency
        return key in self._index

    def __repr__(self) -> str:
        return f"LRUCache(capacity={self._capacity}, size={len(self._index)})"

    # ===== PUBLIC OPERATIONS =====

    def get(self, key, default=None):
        """Look up key and promote it to most recently used

        Returns a shallow copy of the stored value (or the value itself when
        copy_on_read is off), or default when the key is absent.
        """
        slot = self._index.get(key)
        if slot is None:
            self.stats.misses += 1
            return default

        # Copy before touching order or counters
        value = self._nodes[slot].value
        if self.copy_on_read:
            value = copy.copy(value)

        self.stats.hits += 1
        self._move_to_head(slot)
        return value

    def put(self, key, value) -> None:
        """Insert or overwrite key, promote it, and evict the LRU entry on overflow"""
        slot = self._index.get(key)
        if slot is not None:
            self._nodes[slot].value = value
            self._move_to_head(slot)
            self.stats.updates += 1
            return

        node = Node(key=key, value=value)
        if self._free:
            slot = self._free.pop()
            self._nodes[slot] = node
        else:
            slot = len(self._nodes)
            self._nodes.append(node)

        self._index[key] = slot
        self._attach_to_head(slot)
        self.stats.inserts += 1

        if len(self._index) > self._capacity:
            self._evict_tail()

    # ===== CHAIN MAINTENANCE =====

    def _move_to_head(self, slot: int):
        if slot == self._head:
            return
        self._detach(slot)
        self._attach_to_head(slot)

    def _detach(self, slot: int):
        """Unlink a node from the chain, leaving the index alone"""
        node = self._nodes[slot]

        if node.prev is not None:
            self._nodes[node.prev].next = node.next
        else:
            self._head = node.next

        if node.next is not None:
            self._nodes[node.next].prev = node.prev
        else:
            self._tail = node.prev

        node.unlink()

    def _attach_to_head(self, slot: int):
        """Link an unlinked node in front of the current head"""
        node = self._nodes[slot]
        node.prev = None
        node.next = self._head

        if self._head is not None:
            self._nodes[self._head].prev = slot
        self._head = slot
        if self._tail is None:
            self._tail = slot

    def _evict_tail(self):
        slot = self._tail
        node = self._nodes[slot]
        self._detach(slot)
        del self._index[node.key]
        self._nodes[slot] = None
        self._free.append(slot)
        self.stats.evictions += 1
        logger.debug(f"Evicted key {node.key!r} from slot {slot}")

    def _chain_slots(self) -> Iterator[int]:
        # Bounded by arena size so a corrupted (cyclic) chain still terminates
        slot = self._head
        steps = 0
        while slot is not None and steps <= len(self._nodes):
            yield slot
            node = self._nodes[slot]
            slot = node.next if node is not None else None
            steps += 1

    def _chain_keys(self) -> List[Hashable]:
        """Keys from most to least recently used"""
        return [self._nodes[slot].key for slot in self._chain_slots() if self._nodes[slot] is not None]

    # ===== DIAGNOSTICS =====

    def validate(self) -> List[str]:
        """Check the index and chain against each other

        Returns:
            List of problems found; empty when the structure is consistent
        """
        problems = []

        if (self._head is None) != (self._tail is None):
            problems.append(f"head={self._head} and tail={self._tail} disagree on emptiness")

        if len(self._index) > self._capacity:
            problems.append(f"size {len(self._index)} exceeds capacity {self._capacity}")

        seen_slots = set()
        seen_keys = set()
        prev_slot = None
        for slot in self._chain_slots():
            node = self._nodes[slot]
            if node is None:
                problems.append(f"chain reaches empty slot {slot}")
                break
            if slot in seen_slots:
                problems.append(f"chain cycles back to slot {slot}")
                break
            if node.prev != prev_slot:
                problems.append(f"slot {slot} has prev={node.prev}, expected {prev_slot}")
            if node.key in seen_keys:
                problems.append(f"key {node.key!r} appears twice in chain")
            seen_slots.add(slot)
            seen_keys.add(node.key)
            prev_slot = slot

        if prev_slot != self._tail:
            problems.append(f"chain ends at slot {prev_slot}, tail is {self._tail}")

        if len(seen_slots) != len(self._index):
            problems.append(f"chain length {len(seen_slots)} != index size {len(self._index)}")

        for key, slot in self._index.items():
            node = self._nodes[slot] if 0 <= slot < len(self._nodes) else None
            if node is None or node.key != key:
                problems.append(f"index entry {key!r} -> slot {slot} does not hold that key")

        if len(self._index) + len(self._free) != len(self._nodes):
            problems.append(
                f"arena has {len(self._nodes)} slots but {len(self._index)} live + {len(self._free)} free"
            )

        return problems

    def get_statistics(self) -> Dict[str, Any]:
        """Size, arena usage and hit/miss counters as a JSON-friendly dict"""
        return {
            "size": len(self._index),
            "capacity": self._capacity,
            "arena_slots": len(self._nodes),
            "free_slots": len(self._free),
            "copy_on_read": self.copy_on_read,
            **self.stats.to_dict(),
        }
