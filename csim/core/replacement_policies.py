"""Recency tracking for one cache set.

LRUReplacement keeps the way indices of a set ordered from least to most
recently used. The owning CacheSet stores the lines themselves; this class
only knows about way numbers.

API (methods):
- access(way): mark `way` most recently used, inserting it if unseen
- evict(): remove and return the least recently used way
- peek(): ways from LRU to MRU (for tests and debugging)
- reset(): clear all state
"""

from collections import OrderedDict
from typing import List, Optional


class LRUReplacement:
    """Least-Recently-Used ordering using OrderedDict.

    OrderedDict keeps insertion order; accessed ways move to the end so the
    least recently used way is always at the beginning. Every operation is
    O(1).
    """

    def __init__(self, capacity: int):
        self.capacity = int(capacity)
        self._od = OrderedDict()

    def __len__(self):
        return len(self._od)

    def __contains__(self, way):
        return way in self._od

    def access(self, way: int) -> None:
        """Register access to `way`"""
        if way in self._od:
            # mark as most recently used
            self._od.move_to_end(way)
            return
        if len(self._od) >= self.capacity:
            raise ValueError(f"recency list already holds {self.capacity} ways")
        self._od[way] = True

    def evict(self) -> Optional[int]:
        """Remove the LRU way and return it, or None if empty."""
        if not self._od:
            return None
        way, _ = self._od.popitem(last=False)
        return way

    def peek(self) -> List[int]:
        """Return ways from LRU->MRU as list."""
        return list(self._od.keys())

    def reset(self) -> None:
        self._od.clear()


__all__ = ["LRUReplacement"]
