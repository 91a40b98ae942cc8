"""Statistics and exporter.
"""
import csv
import json
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

FIELDS = ['hits', 'misses', 'evictions', 'dirty_bytes_resident', 'dirty_bytes_evicted']


def export_chart_pdf(hit_rate_history: List[float], fpath: str) -> str:
    """Render the hit-rate history to a PDF using matplotlib and save it.

    Returns the saved file path.
    """
    # Use matplotlib without a display
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    data = list(hit_rate_history) or [0]
    fig, ax = plt.subplots(figsize=(6, 2))
    ax.plot(range(len(data)), data, color='#FFA500', linewidth=2)
    ax.fill_between(range(len(data)), data, color='#FFA500', alpha=0.1)
    ax.set_ylim(0, 1)
    ax.set_xlabel('Access')
    ax.set_ylabel('Hit rate')
    ax.grid(False)
    fig.tight_layout()
    fig.savefig(fpath, format='pdf', dpi=150)
    plt.close(fig)
    logger.debug("wrote hit-rate chart with %d samples to %s", len(data), fpath)
    return fpath


class Statistics:
    """Counters updated by Cache.access.

    dirty_bytes_resident always equals block_size times the number of dirty
    lines currently in the cache; the other counters only grow.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        # counters start from zero
        self.accesses = 0
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.dirty_bytes_resident = 0
        self.dirty_bytes_evicted = 0

    def record_hit(self):
        self.accesses += 1
        self.hits += 1

    def record_miss(self):
        self.accesses += 1
        self.misses += 1

    def record_dirtied(self, nbytes: int):
        # a clean line turned dirty, or a store created a line
        self.dirty_bytes_resident += nbytes

    def record_eviction(self, dirty_bytes: int = 0):
        # dirty_bytes is the block size for a dirty victim, 0 for a clean one
        self.evictions += 1
        if dirty_bytes:
            self.dirty_bytes_evicted += dirty_bytes
            self.dirty_bytes_resident -= dirty_bytes

    @property
    def hit_rate(self):
        return (self.hits / self.accesses) if self.accesses else 0.0

    @property
    def miss_rate(self):
        return (self.misses / self.accesses) if self.accesses else 0.0

    def as_dict(self) -> Dict[str, float]:
        d = {name: getattr(self, name) for name in FIELDS}
        d['accesses'] = self.accesses
        d['hit_rate'] = self.hit_rate
        d['miss_rate'] = self.miss_rate
        return d

    def summary(self) -> str:
        return (
            f"hits:{self.hits} misses:{self.misses} evictions:{self.evictions} "
            f"dirty_bytes_in_cache:{self.dirty_bytes_resident} "
            f"dirty_bytes_evicted:{self.dirty_bytes_evicted}"
        )


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, stats: Statistics):
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['accesses'] + FIELDS + ['hit_rate', 'miss_rate'])
            writer.writerow(
                [stats.accesses] + [getattr(stats, name) for name in FIELDS]
                + [stats.hit_rate, stats.miss_rate]
            )

    @staticmethod
    def export_stats_json(path: str, stats: Statistics, hit_rate_history: Optional[List[float]] = None):
        data = {
            'stats': stats.as_dict(),
            'hit_rate_history': list(hit_rate_history or []),
        }
        with open(path, 'w', encoding='utf-8') as fh:
            json.dump(data, fh, indent=2)

    @staticmethod
    def write_results_file(path: str, stats: Statistics):
        """One line with the five counters, in the order of FIELDS."""
        with open(path, 'w', encoding='utf-8') as fh:
            fh.write(' '.join(str(getattr(stats, name)) for name in FIELDS) + '\n')
