"""
Dashboard Service - single entry point for presentation layers

Wires the pipeline together around an injected DataSource:

    raw rows → normalize (once per load) → baseline stats (cached once)
                                        ↘ filter (every criteria change) → aggregate (fresh)

Usage:
    from boliga_analytics.services.dashboard_service import PropertyAnalyticsService
    from boliga_analytics.services.data_loader import CsvDataSource

    service = PropertyAnalyticsService(CsvDataSource('data/boliga_sales.csv'))
    baseline = service.baseline_stats()
    result = service.query(FilterCriteria(districts={'København Ø'}))
    result.stats.summary.avg_price
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import date
from functools import wraps
from typing import Any, Dict, List, Optional

from boliga_analytics.config import Config
from boliga_analytics.models import AggregateStats, FilterCriteria, PropertyRecord
from boliga_analytics.services.aggregation_service import compute_aggregate_stats
from boliga_analytics.services.comparison_service import (
    compare_property_types,
    get_comparison_metrics,
)
from boliga_analytics.services.data_loader import DataSource, load_records
from boliga_analytics.services.filter_options import get_filter_options
from boliga_analytics.services.filter_service import filter_records
from boliga_analytics.services.stats_cache import StatsCache
from boliga_analytics.utils.formatting import Formatter, format_dkk

logger = logging.getLogger('dashboard')

SLOW_OPERATION_MS = 1000


def log_timing(operation: str):
    """Decorator to log operation timing."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                elapsed = (time.perf_counter() - start) * 1000
                logger.debug(f"{operation} completed in {elapsed:.1f}ms")
                if elapsed > SLOW_OPERATION_MS:
                    logger.warning(f"SLOW OPERATION: {operation} took {elapsed:.1f}ms")
                return result
            except Exception as e:
                elapsed = (time.perf_counter() - start) * 1000
                logger.error(f"{operation} failed after {elapsed:.1f}ms: {e}")
                raise
        return wrapper
    return decorator


@dataclass(frozen=True)
class DashboardResult:
    """Filtered view plus its freshly computed aggregates."""
    records: List[PropertyRecord]
    stats: AggregateStats
    meta: Dict[str, Any] = field(default_factory=dict)


class PropertyAnalyticsService:
    """
    Analytics over one dataset loaded from an injected data source.

    The normalized record list is created once per load and never modified.
    Calling load() again (or reload()) replaces it, which also invalidates
    the baseline stats cache because the cache is keyed by list identity.
    """

    def __init__(
        self,
        source: DataSource,
        *,
        max_rows: Optional[int] = Config.MAX_ROWS,
        apply_range_filters: bool = Config.APPLY_RANGE_FILTERS,
        formatter: Formatter = format_dkk,
        bucket_width: int = Config.PRICE_BUCKET_WIDTH,
        trailing_days: int = Config.TRAILING_VOLUME_DAYS
    ):
        self.source = source
        self.max_rows = max_rows
        self.apply_range_filters = apply_range_filters
        self.formatter = formatter
        self.trailing_days = trailing_days
        self._aggregate_options = {
            'bucket_width': bucket_width,
            'trailing_days': trailing_days,
            'formatter': formatter,
        }
        self._records: Optional[List[PropertyRecord]] = None
        self._stats_cache = StatsCache(**self._aggregate_options)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @log_timing("load_records")
    def load(self) -> List[PropertyRecord]:
        """Fetch and normalize the dataset if not loaded yet."""
        if self._records is None:
            self._records = load_records(self.source, self.max_rows, self.formatter)
        return self._records

    def reload(self) -> List[PropertyRecord]:
        """Discard the current dataset and load it again from the source."""
        self._records = None
        self._stats_cache.clear()
        return self.load()

    @property
    def records(self) -> List[PropertyRecord]:
        return self.load()

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    def baseline_stats(self, today: Optional[date] = None) -> AggregateStats:
        """Aggregates over the full dataset, computed once per load."""
        return self._stats_cache.get(self.records, today=today)

    def filter(self, criteria: FilterCriteria, today: Optional[date] = None) -> List[PropertyRecord]:
        return filter_records(
            self.records,
            criteria,
            today=today,
            apply_range_filters=self.apply_range_filters,
        )

    @log_timing("dashboard_query")
    def query(self, criteria: FilterCriteria, today: Optional[date] = None) -> DashboardResult:
        """
        Filter the dataset and aggregate the filtered view.

        Filtered aggregates are always recomputed; only baseline_stats() is
        cached.
        """
        start = time.perf_counter()
        matched = self.filter(criteria, today)
        stats = compute_aggregate_stats(matched, today=today, **self._aggregate_options)
        elapsed = (time.perf_counter() - start) * 1000

        meta = {
            'total_records': len(self.records),
            'matched_records': len(matched),
            'filters_applied': criteria.to_dict(),
            'range_filters_applied': self.apply_range_filters,
            'elapsed_ms': round(elapsed, 1),
        }
        logger.info(f"Dashboard computed in {elapsed:.1f}ms, {len(matched)} records matched")
        return DashboardResult(records=matched, stats=stats, meta=meta)

    def filter_options(self) -> Dict[str, Any]:
        return get_filter_options(self.records)

    def property_type_comparison(
        self,
        criteria: Optional[FilterCriteria] = None,
        today: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        """Per-type comparison over the filtered view (or the full dataset)."""
        records = self.records if criteria is None else self.filter(criteria, today)
        return compare_property_types(records)

    def comparison_metrics(
        self,
        criteria: Optional[FilterCriteria] = None,
        today: Optional[date] = None
    ) -> Dict[str, float]:
        """Year-over-year changes over the filtered view (or the full dataset)."""
        records = self.records if criteria is None else self.filter(criteria, today)
        return get_comparison_metrics(records, today)

    def cache_stats(self) -> Dict[str, Any]:
        return self._stats_cache.stats()
