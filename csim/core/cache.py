"""Core cache implementation

A set-associative, write-back, write-allocate cache with LRU replacement.

- The cache is composed of ``2**s`` sets, created on first touch; each set
  holds at most ``E`` lines.
- An address is decoded into ``tag = address >> (s + b)`` and
  ``set_index = (address >> b) & (2**s - 1)``; the block offset never
  influences a hit or miss.
- Each set owns its lines in a small arena of ways. A dict maps tag -> way
  for O(1) lookup and an LRUReplacement orders the ways by recency.
- Dirty bytes are accounted per block: a line becomes dirty on the first
  store that creates or hits it and stays dirty until it is evicted.

Cache.access returns a tuple
(hit: bool, set_index: int, way_index: int, evicted: Optional[CacheLine], cold: bool)
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from csim.core.address import decode
from csim.core.config import CacheConfig
from csim.core.errors import ResourceExhausted
from csim.core.replacement_policies import LRUReplacement
from csim.data.stats_export import Statistics

LOAD = "L"
STORE = "S"


@dataclass
class CacheLine:
    """A resident block.

    Fields:
    - tag: upper address bits beyond set index and block offset
    - dirty: the block was written since it was brought in
    """

    tag: int
    dirty: bool = False


class CacheSet:
    """Bounded, recency-ordered collection of lines for one set index."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        # arena of lines; a None slot was freed by an eviction
        self.ways: List[Optional[CacheLine]] = []
        self._free: List[int] = []
        self._by_tag: Dict[int, int] = {}
        self._recency = LRUReplacement(capacity)

    def __len__(self):
        return len(self._by_tag)

    def __contains__(self, tag):
        return tag in self._by_tag

    def is_full(self) -> bool:
        return len(self._by_tag) >= self.capacity

    def is_empty(self) -> bool:
        return not self._by_tag

    def lookup(self, tag: int) -> Optional[CacheLine]:
        way = self._by_tag.get(tag)
        if way is None:
            return None
        return self.ways[way]

    def touch(self, line: CacheLine) -> int:
        """Move a resident line to the most recently used end."""
        way = self._by_tag[line.tag]
        self._recency.access(way)
        return way

    def insert_most_recent(self, line: CacheLine) -> int:
        """Place a new line at the MRU end and return its way index.

        The caller must evict first when the set is full.
        """
        if self.is_full():
            raise ValueError("cannot insert into a full set; evict first")
        if line.tag in self._by_tag:
            raise ValueError(f"tag {line.tag:#x} is already resident")
        if self._free:
            way = self._free.pop()
            self.ways[way] = line
        else:
            way = len(self.ways)
            self.ways.append(line)
        self._by_tag[line.tag] = way
        self._recency.access(way)
        return way

    def evict_least_recent(self) -> Tuple[int, CacheLine]:
        """Remove the LRU line; returns (way_index, line)."""
        way = self._recency.evict()
        if way is None:
            raise ValueError("cannot evict from an empty set")
        line = self.ways[way]
        self.ways[way] = None
        self._free.append(way)
        del self._by_tag[line.tag]
        return way, line

    def lines(self) -> List[CacheLine]:
        """Resident lines ordered from least to most recently used."""
        return [self.ways[w] for w in self._recency.peek()]

    def tags(self) -> List[int]:
        return [line.tag for line in self.lines()]

    def dirty_count(self) -> int:
        return sum(1 for line in self.lines() if line.dirty)

    def reset(self):
        self.ways = []
        self._free = []
        self._by_tag = {}
        self._recency.reset()


class Cache:
    """Set-associative cache model with embedded statistics."""

    def __init__(self, config: CacheConfig, stats: Optional[Statistics] = None):
        self.config = config
        self.s = config.set_index_bits
        self.b = config.block_offset_bits
        self.associativity = config.lines_per_set
        self.num_sets = config.set_count
        self.block_size = config.block_size
        self.stats = stats or Statistics()
        # set index -> CacheSet; a set is created when first touched
        self.sets: Dict[int, CacheSet] = {}

    def get_set(self, set_index: int) -> CacheSet:
        cache_set = self.sets.get(set_index)
        if cache_set is None:
            try:
                cache_set = CacheSet(self.associativity)
            except MemoryError as exc:
                raise ResourceExhausted(f"cannot allocate cache set {set_index}") from exc
            self.sets[set_index] = cache_set
        return cache_set

    def occupied_sets(self) -> List[CacheSet]:
        return list(self.sets.values())

    def _decode(self, address: int) -> Tuple[int, int]:
        """Decode address into (tag, set_index)."""
        return decode(address, self.s, self.b)

    def access(self, op: str, address: int):
        """Perform one load or store.

        Returns (hit, set_index, way_index, evicted, cold):
        - hit: whether the tag was resident
        - way_index: slot now holding the block
        - evicted: the line removed to make room, if any
        - cold: the miss found its set empty
        """
        is_write = op == STORE
        tag, set_index = self._decode(address)
        cache_set = self.get_set(set_index)

        line = cache_set.lookup(tag)
        if line is not None:
            self.stats.record_hit()
            if is_write and not line.dirty:
                line.dirty = True
                self.stats.record_dirtied(self.block_size)
            way = cache_set.touch(line)
            return True, set_index, way, None, False

        self.stats.record_miss()
        cold = cache_set.is_empty()
        evicted = None
        if cache_set.is_full():
            _, evicted = cache_set.evict_least_recent()
            self.stats.record_eviction(self.block_size if evicted.dirty else 0)

        try:
            line = CacheLine(tag=tag, dirty=is_write)
        except MemoryError as exc:
            raise ResourceExhausted(f"cannot allocate a cache line for address {address:#x}") from exc
        if line.dirty:
            self.stats.record_dirtied(self.block_size)
        way = cache_set.insert_most_recent(line)
        return False, set_index, way, evicted, cold

    def resident_lines(self) -> int:
        return sum(len(s) for s in self.occupied_sets())

    def dirty_lines(self) -> int:
        return sum(s.dirty_count() for s in self.occupied_sets())

    def reset(self):
        """Drop every line and zero the statistics."""
        self.sets.clear()
        self.stats.reset()


__all__ = ["LOAD", "STORE", "CacheLine", "CacheSet", "Cache"]
