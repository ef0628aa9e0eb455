from __future__ import annotations

from collections import OrderedDict
from typing import Dict, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUTable(Generic[K, V]):
    """
    Bounded mapping with least-recently-used eviction.
    Used for:
      - the evaluator's suit-isomorphism memo
      - the hot layer in front of the persisted equity store
    """
    def __init__(self, capacity: int = 200_000):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._od: "OrderedDict[K, V]" = OrderedDict()

        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._od)

    def __contains__(self, key: object) -> bool:
        return key in self._od

    def get(self, key: K) -> Optional[V]:
        v = self._od.get(key)
        if v is None:
            self.misses += 1
            return None
        self.hits += 1
        self._od.move_to_end(key, last=True)
        return v

    def put(self, key: K, value: V) -> None:
        self._od[key] = value
        self._od.move_to_end(key, last=True)
        self._evict_if_needed()

    def pop(self, key: K) -> Optional[V]:
        return self._od.pop(key, None)

    def _evict_if_needed(self) -> None:
        while len(self._od) > self.capacity:
            self._od.popitem(last=False)
            self.evictions += 1

    def clear(self) -> None:
        self._od.clear()
        self.hits = self.misses = self.evictions = 0

    def stats(self) -> Dict[str, int]:
        return {
            "size": len(self._od),
            "capacity": self.capacity,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
        }
