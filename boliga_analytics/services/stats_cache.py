"""
Stats Cache - Pre-computes baseline analytics once per dataset load

Baseline aggregates over the full normalized dataset do not depend on the
user's filters, so they are computed once and reused until a different
dataset (or reference date) is supplied.

Single-slot memoization keyed by dataset identity (the list object itself,
not its contents) and the reference date. Filtered aggregates are deliberately
NOT cached; they are recomputed fresh by the caller on every criteria change.
"""

import logging
import time
from datetime import date
from typing import Any, Callable, Dict, Optional, Sequence

from boliga_analytics.models import AggregateStats, PropertyRecord
from boliga_analytics.services.aggregation_service import compute_aggregate_stats

logger = logging.getLogger('stats_cache')


class StatsCache:
    """Single-slot cache of AggregateStats for the most recent dataset."""

    def __init__(
        self,
        compute: Callable[..., AggregateStats] = compute_aggregate_stats,
        **compute_options: Any
    ):
        self._compute = compute
        self._compute_options = compute_options
        self._dataset: Optional[Sequence[PropertyRecord]] = None
        self._today: Optional[date] = None
        self._stats: Optional[AggregateStats] = None
        self._computed_at: Optional[float] = None
        self._hits = 0
        self._misses = 0

    def get(
        self,
        records: Sequence[PropertyRecord],
        today: Optional[date] = None
    ) -> AggregateStats:
        """
        Return baseline stats for `records`, computing them on first use.

        The slot is keyed by dataset identity plus the reference date, since
        the trailing volume depends on `today`. A different dataset object
        replaces the slot even when its contents are equal.
        """
        if today is None:
            today = date.today()

        if self._stats is not None and records is self._dataset and today == self._today:
            self._hits += 1
            return self._stats

        self._misses += 1
        start = time.perf_counter()
        stats = self._compute(records, today=today, **self._compute_options)
        elapsed = (time.perf_counter() - start) * 1000

        self._dataset = records
        self._today = today
        self._stats = stats
        self._computed_at = time.time()
        logger.info(f"Baseline stats computed for {len(records)} records in {elapsed:.1f}ms")
        return stats

    def clear(self) -> None:
        self._dataset = None
        self._today = None
        self._stats = None
        self._computed_at = None
        logger.info("Stats cache cleared")

    def stats(self) -> Dict[str, Any]:
        return {
            'cached': self._stats is not None,
            'dataset_size': len(self._dataset) if self._dataset is not None else 0,
            'computed_at': self._computed_at,
            'hits': self._hits,
            'misses': self._misses,
        }
