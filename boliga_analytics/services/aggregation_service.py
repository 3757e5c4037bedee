"""
Aggregation Service - Pure Functions over record collections

All functions are pure (no I/O, no hidden state) and never reorder or mutate
the collection they are given. Empty input returns zero/empty results; no
metric is ever NaN.

Usage:
    from boliga_analytics.services.aggregation_service import compute_aggregate_stats

    stats = compute_aggregate_stats(filtered_records, today=date(2026, 10, 18))
    stats.summary.avg_price
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence

from boliga_analytics.config import Config
from boliga_analytics.models import AggregateStats, PropertyRecord, SummaryMetrics
from boliga_analytics.utils.formatting import Formatter, format_dkk, format_price_range
from boliga_analytics.utils.normalize import parse_record_date

logger = logging.getLogger(__name__)


def safe_divide(numerator: float, denominator: float) -> float:
    """Division that returns 0 for a zero denominator."""
    if not denominator:
        return 0
    return numerator / denominator


# =============================================================================
# PRICE HISTOGRAM
# =============================================================================

def price_bucket_bounds(price: float, width: int = Config.PRICE_BUCKET_WIDTH) -> tuple:
    """
    Fixed-width bucket for a price: [floor(price / width) * width, + width).

    Example:
        >>> price_bucket_bounds(499_999)
        (0, 500000)
        >>> price_bucket_bounds(500_000)
        (500000, 1000000)
    """
    lower = int(price // width) * width
    return lower, lower + width


def compute_price_histogram(
    records: Sequence[PropertyRecord],
    width: int = Config.PRICE_BUCKET_WIDTH,
    formatter: Formatter = format_dkk
) -> List[Dict[str, Any]]:
    """
    Count records per fixed-width price bucket.

    Buckets are emitted in ascending price order; empty buckets are omitted.

    Returns:
        [{'range': '<lower> - <upper>', 'count': n}, ...]
    """
    counts: Dict[tuple, int] = {}
    # sorted() copies; the caller's sequence keeps its order
    for record in sorted(records, key=lambda r: r.price):
        bounds = price_bucket_bounds(record.price, width)
        counts[bounds] = counts.get(bounds, 0) + 1

    return [
        {'range': format_price_range(lower, upper, formatter), 'count': count}
        for (lower, upper), count in counts.items()
    ]


# =============================================================================
# GROUPED COUNTS AND AVERAGES
# =============================================================================

def compute_property_type_counts(records: Sequence[PropertyRecord]) -> Dict[str, int]:
    """Count records per property type, keyed in first-seen order."""
    counts: Dict[str, int] = {}
    for record in records:
        counts[record.property_type] = counts.get(record.property_type, 0) + 1
    return counts


def compute_district_avg_price(records: Sequence[PropertyRecord]) -> List[Dict[str, Any]]:
    """
    Average price per district, highest first.

    Ties keep first-seen order (stable sort).
    """
    totals: Dict[str, List[float]] = {}
    for record in records:
        bucket = totals.setdefault(record.district, [0, 0])
        bucket[0] += record.price
        bucket[1] += 1

    averages = [
        {'district': district, 'avg_price': safe_divide(total, count)}
        for district, (total, count) in totals.items()
    ]
    return sorted(averages, key=lambda row: row['avg_price'], reverse=True)


def compute_district_sales(records: Sequence[PropertyRecord]) -> List[Dict[str, Any]]:
    """Number of sales per district, most sales first."""
    counts: Dict[str, int] = {}
    for record in records:
        counts[record.district] = counts.get(record.district, 0) + 1

    sales = [{'district': district, 'sales': count} for district, count in counts.items()]
    return sorted(sales, key=lambda row: row['sales'], reverse=True)


# =============================================================================
# SUMMARY METRICS
# =============================================================================

def count_trailing_volume(
    records: Sequence[PropertyRecord],
    today: Optional[date] = None,
    days: int = Config.TRAILING_VOLUME_DAYS
) -> int:
    """Number of records dated within the last `days` days (inclusive)."""
    if today is None:
        today = date.today()
    cutoff = today - timedelta(days=days)

    volume = 0
    for record in records:
        sale_date = parse_record_date(record.date)
        if sale_date is not None and sale_date >= cutoff:
            volume += 1
    return volume


def compute_summary(
    records: Sequence[PropertyRecord],
    today: Optional[date] = None,
    trailing_days: int = Config.TRAILING_VOLUME_DAYS
) -> SummaryMetrics:
    """
    Headline metrics for a record collection.

    avg_price_per_m2 is avg_price / avg_size (a ratio of means), NOT the mean
    of the stored per-record price_per_m2 values.
    """
    total = len(records)
    if total == 0:
        return SummaryMetrics()

    avg_price = sum(r.price for r in records) / total
    avg_size = sum(r.size_m2 for r in records) / total

    return SummaryMetrics(
        total_count=total,
        avg_price=avg_price,
        avg_size=avg_size,
        avg_price_per_m2=safe_divide(avg_price, avg_size),
        trailing_volume=count_trailing_volume(records, today, trailing_days),
    )


# =============================================================================
# FULL AGGREGATE
# =============================================================================

def compute_aggregate_stats(
    records: Sequence[PropertyRecord],
    *,
    today: Optional[date] = None,
    bucket_width: int = Config.PRICE_BUCKET_WIDTH,
    trailing_days: int = Config.TRAILING_VOLUME_DAYS,
    formatter: Formatter = format_dkk
) -> AggregateStats:
    """
    Compute every aggregate for a record collection (full or filtered).

    Deterministic for a given input and `today`.
    """
    stats = AggregateStats(
        price_histogram=compute_price_histogram(records, bucket_width, formatter),
        property_type_counts=compute_property_type_counts(records),
        district_avg_price=compute_district_avg_price(records),
        district_sales=compute_district_sales(records),
        summary=compute_summary(records, today, trailing_days),
    )
    logger.debug(
        f"Aggregated {stats.summary.total_count} records into "
        f"{len(stats.price_histogram)} price buckets, {len(stats.district_sales)} districts"
    )
    return stats
