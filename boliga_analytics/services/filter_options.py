"""
Filter options - the choices a filter panel offers for a dataset.
"""

from typing import Any, Dict, Sequence, Tuple

from boliga_analytics.constants import DATE_WINDOW_LABELS, DATE_WINDOW_OPTIONS
from boliga_analytics.models import PropertyRecord


def _bounds(values) -> Tuple[float, float]:
    # Zero means "unknown" after normalization, so it never sets a bound
    present = [v for v in values if v]
    if not present:
        return (0, 0)
    return (min(present), max(present))


def get_filter_options(records: Sequence[PropertyRecord]) -> Dict[str, Any]:
    """
    Distinct values and bounds available for filtering.

    Returns:
        {
            'districts': sorted distinct non-empty districts,
            'property_types': sorted distinct non-empty property types,
            'price_bounds': (min, max) of non-zero prices,
            'room_bounds': (min, max) of non-zero room counts,
            'date_windows': [{'value': 3, 'label': 'Last 3 months'}, ...],
        }
    """
    return {
        'districts': sorted({r.district for r in records if r.district}),
        'property_types': sorted({r.property_type for r in records if r.property_type}),
        'price_bounds': _bounds(r.price for r in records),
        'room_bounds': _bounds(r.rooms for r in records),
        'date_windows': [
            {'value': window, 'label': DATE_WINDOW_LABELS[window]}
            for window in DATE_WINDOW_OPTIONS
        ],
    }
