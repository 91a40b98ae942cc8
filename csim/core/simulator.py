"""CacheSimulator feeds trace records into the Cache in program order.

It can step through a loaded sequence one access at a time, or stream a
(possibly lazy) iterable of records with `replay`. Either way each access
produces an info dict describing what happened.
"""
import logging
from typing import Callable, Iterable, List, Optional

from .cache import Cache
from .trace import TraceRecord

logger = logging.getLogger(__name__)


def result_label(hit: bool, evicted, cold: bool) -> str:
    if hit:
        return 'hit'
    if evicted is not None:
        return 'miss eviction'
    return 'cold miss' if cold else 'miss'


class CacheSimulator:
    def __init__(self, cache: Cache, record_history: bool = False):
        self.cache = cache
        self.stats = cache.stats
        self.sequence: List[TraceRecord] = []
        self.index = 0
        # per-access hit rate, kept only when a chart or JSON export wants it
        self.record_history = record_history
        self.hit_rate_history: List[float] = []

    def reset(self):
        # clear stats and cache contents, rewind the sequence pointer
        self.cache.reset()
        self.index = 0
        self.hit_rate_history = []

    def load_sequence(self, records: Iterable[TraceRecord]):
        self.sequence = list(records)
        self.index = 0

    def has_next(self) -> bool:
        return self.index < len(self.sequence)

    def step(self) -> Optional[dict]:
        if not self.has_next():
            return None
        record = self.sequence[self.index]
        self.index += 1
        return self.apply(record)

    def _access(self, record: TraceRecord):
        result = self.cache.access(record.op, record.address)
        if self.record_history:
            self.hit_rate_history.append(self.stats.hit_rate)
        return result

    def apply(self, record: TraceRecord) -> dict:
        """Run one record through the cache and describe the outcome."""
        hit, set_index, way_index, evicted, cold = self._access(record)
        label = result_label(hit, evicted, cold)
        logger.debug("%s %x,%d -> %s (set %d, way %d)",
                     record.op, record.address, record.size, label, set_index, way_index)
        return {
            'op': record.op,
            'address': record.address,
            'size': record.size,
            'lineno': record.lineno,
            'hit': hit,
            'result': label,
            'set_index': set_index,
            'way_index': way_index,
            'evicted': evicted,
            'stats': self.stats.as_dict(),
        }

    def run_all(self, callback: Optional[Callable[[dict], None]] = None):
        while self.has_next():
            info = self.step()
            if callback:
                callback(info)

    def replay(self, records: Iterable[TraceRecord], callback: Optional[Callable[[dict], None]] = None) -> int:
        """Apply records as they are produced; returns the number applied.

        Errors raised by the iterable (for instance a malformed trace line)
        propagate after every earlier record has been applied and reported.
        """
        count = 0
        for record in records:
            if callback:
                callback(self.apply(record))
            else:
                self._access(record)
            count += 1
        logger.debug("replayed %d accesses", count)
        return count
