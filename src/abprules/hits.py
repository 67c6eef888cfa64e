"""
Hit statistics for filters.

Filter descriptors are immutable, so hit counts are kept in a separate table
owned by the caller and keyed by filter text.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .filters import ActiveFilter


@dataclass(frozen=True)
class HitStats:
    """Hit statistics of one filter."""

    hit_count: int = 0
    last_hit: int = 0  # milliseconds since the epoch, 0 if never hit


class HitCounter:
    """Thread-safe table of filter hit counts."""

    def __init__(self) -> None:
        self._stats: dict[str, HitStats] = {}
        self._lock = threading.Lock()

    def record_hit(self, f: ActiveFilter, timestamp: int | None = None) -> HitStats:
        """Count a hit on a filter.

        Args:
            f: The filter that matched.
            timestamp: Time of the hit in milliseconds since the epoch.
                Defaults to now.

        Returns:
            The updated statistics.
        """
        if timestamp is None:
            timestamp = int(time.time() * 1000)

        with self._lock:
            current = self._stats.get(f.text, HitStats())
            updated = HitStats(current.hit_count + 1, timestamp)
            self._stats[f.text] = updated
        return updated

    def get(self, f: ActiveFilter) -> HitStats:
        with self._lock:
            return self._stats.get(f.text, HitStats())

    def reset(self, f: ActiveFilter | None = None) -> None:
        """Forget the statistics of one filter, or of all filters."""
        with self._lock:
            if f is None:
                self._stats.clear()
            else:
                self._stats.pop(f.text, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._stats)
