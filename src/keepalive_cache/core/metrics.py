"""
In-memory cache counters (hits, misses, purges) with rough purge p50/p95.
Why: see whether purging keeps up without pulling in Prometheus.
"""

import threading
from collections import deque
from typing import Deque, Dict, List

_MAX_SAMPLES = 1024


def _percentile(values: List[int], p: float) -> int:
    if not values:
        return 0
    idx = max(0, min(len(values) - 1, int(len(values) * p)))
    return sorted(values)[idx]


class CacheMetrics:
    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0
        self.purge_runs = 0
        self.purged_entries = 0
        self._purge_durations: Deque[int] = deque(maxlen=_MAX_SAMPLES)
        self._lock = threading.Lock()

    def record_hit(self) -> None:
        with self._lock:
            self.hits += 1

    def record_miss(self) -> None:
        with self._lock:
            self.misses += 1

    def record_purge(self, removed: int, duration_ms: int) -> None:
        with self._lock:
            self.purge_runs += 1
            self.purged_entries += removed
            self._purge_durations.append(duration_ms)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            durations = list(self._purge_durations)
            return {
                "hits": self.hits,
                "misses": self.misses,
                "purge_runs": self.purge_runs,
                "purged_entries": self.purged_entries,
                "purge_p50_ms": _percentile(durations, 0.50),
                "purge_p95_ms": _percentile(durations, 0.95),
            }
