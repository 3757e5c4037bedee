"""
Comparison Service - property-type and year-over-year comparisons

Pure functions, same conventions as aggregation_service: empty input gives
zeros, division by zero gives 0.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from boliga_analytics.models import PropertyRecord
from boliga_analytics.services.aggregation_service import safe_divide
from boliga_analytics.utils.normalize import parse_record_date


# =============================================================================
# PROPERTY TYPE COMPARISON
# =============================================================================

def compare_property_types(records: Sequence[PropertyRecord]) -> List[Dict[str, Any]]:
    """
    Side-by-side metrics per property type, in first-seen order.

    Returns:
        List of dicts with:
            - type: property type
            - count: number of sales
            - avg_price / avg_size: means over the type's sales
            - price_per_m2: total price / total size (0 if no size data)
            - median_price: upper median (element n // 2 of sorted prices)
    """
    groups: Dict[str, Dict[str, Any]] = {}
    for record in records:
        group = groups.setdefault(
            record.property_type,
            {'total_price': 0, 'total_size': 0, 'count': 0, 'prices': []}
        )
        group['total_price'] += record.price
        group['total_size'] += record.size_m2
        group['count'] += 1
        group['prices'].append(record.price)

    comparison = []
    for property_type, group in groups.items():
        prices = sorted(group['prices'])
        comparison.append({
            'type': property_type,
            'count': group['count'],
            'avg_price': safe_divide(group['total_price'], group['count']),
            'avg_size': safe_divide(group['total_size'], group['count']),
            'price_per_m2': safe_divide(group['total_price'], group['total_size']),
            'median_price': prices[len(prices) // 2],
        })
    return comparison


# =============================================================================
# YEAR-OVER-YEAR
# =============================================================================

def calculate_yoy_change(current: float, previous: float) -> float:
    """Percentage change from previous to current; 0 when there is no baseline."""
    if not previous:
        return 0
    return ((current - previous) / previous) * 100


def _mean(values: List[float]) -> float:
    return safe_divide(sum(values), len(values))


def get_comparison_metrics(
    records: Sequence[PropertyRecord],
    today: Optional[date] = None
) -> Dict[str, float]:
    """
    Compare the last 12 months against the 12 months before.

    Periods (by sale date):
        current:  after today - 1 year (later-dated sales included)
        previous: (today - 2 years, today - 1 year]

    price_per_m2_change uses the mean of the stored per-record price_per_m2.

    Returns:
        {'price_change', 'price_per_m2_change', 'volume_change'} in percent
    """
    if today is None:
        today = date.today()
    one_year_ago = today - relativedelta(years=1)
    two_years_ago = today - relativedelta(years=2)

    current: List[PropertyRecord] = []
    previous: List[PropertyRecord] = []
    for record in records:
        sale_date = parse_record_date(record.date)
        if sale_date is None:
            continue
        if sale_date > one_year_ago:
            current.append(record)
        elif sale_date > two_years_ago:
            previous.append(record)

    return {
        'price_change': calculate_yoy_change(
            _mean([r.price for r in current]),
            _mean([r.price for r in previous]),
        ),
        'price_per_m2_change': calculate_yoy_change(
            _mean([r.price_per_m2 for r in current]),
            _mean([r.price_per_m2 for r in previous]),
        ),
        'volume_change': calculate_yoy_change(len(current), len(previous)),
    }
