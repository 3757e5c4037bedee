"""
Filter builder utilities.

Provides a single source of truth for turning FilterCriteria into record
predicates. Each predicate is a (name, callable) pair; a record matches when
every predicate returns True.
"""

from datetime import date
from typing import Any, Callable, Iterable, List, Optional, Set, Tuple

from boliga_analytics.constants import resolve_date_window
from boliga_analytics.models import FilterCriteria, PropertyRecord
from boliga_analytics.utils.normalize import parse_record_date

Predicate = Callable[[PropertyRecord], bool]


def _expand_members(value: Any) -> Set[str]:
    if not value:
        return set()
    items = [value] if isinstance(value, str) else list(value)
    return {str(item) for item in items}


def _in_range(value: float, bounds: Tuple[float, float]) -> bool:
    low, high = bounds
    return low <= value <= high


def _date_predicate(cutoff: date) -> Predicate:
    def matches(record: PropertyRecord) -> bool:
        sale_date = parse_record_date(record.date)
        # Unknown dates cannot be placed inside a window
        return sale_date is not None and sale_date >= cutoff
    return matches


def _search_predicate(search: str) -> Predicate:
    needle = search.lower()

    def matches(record: PropertyRecord) -> bool:
        return needle in record.address.lower() or needle in record.district.lower()
    return matches


def build_predicates(
    criteria: FilterCriteria,
    *,
    today: Optional[date] = None,
    apply_range_filters: bool = False
) -> List[Tuple[str, Predicate]]:
    """
    Build record predicates from filter criteria.

    Inactive criteria (empty search, empty sets, 'all' window) produce no
    predicate. Price is always range-checked (inclusive both ends).

    Room, size and year-built ranges are only applied when
    apply_range_filters is True.

    Returns:
        List of (name, predicate) pairs to be combined with AND.
    """
    predicates: List[Tuple[str, Predicate]] = []

    # Date window
    cutoff = resolve_date_window(criteria.date_window_months, today)
    if cutoff is not None:
        predicates.append(('date_window', _date_predicate(cutoff)))

    # Free-text search over street and district
    if criteria.search:
        predicates.append(('search', _search_predicate(criteria.search)))

    # Postcode (substring, so "21" matches "2100")
    if criteria.postcode:
        postcode = criteria.postcode
        predicates.append(('postcode', lambda r: postcode in r.postcode))

    # Property types
    property_types = _expand_members(criteria.property_types)
    if property_types:
        predicates.append(('property_type', lambda r: r.property_type in property_types))

    # Price range
    price_range = tuple(criteria.price_range)
    predicates.append(('price_range', lambda r: _in_range(r.price, price_range)))

    # Districts
    districts = _expand_members(criteria.districts)
    if districts:
        predicates.append(('district', lambda r: r.district in districts))

    if apply_range_filters:
        room_range = tuple(criteria.room_range)
        size_range = tuple(criteria.size_range)
        year_range = tuple(criteria.year_built_range)
        predicates.append(('room_range', lambda r: _in_range(r.rooms, room_range)))
        predicates.append(('size_range', lambda r: _in_range(r.size_m2, size_range)))
        predicates.append(('year_built_range', lambda r: _in_range(r.year_built, year_range)))

    return predicates


def describe_predicates(predicates: Iterable[Tuple[str, Predicate]]) -> List[str]:
    """Names of the active predicates, for logging and result metadata."""
    return [name for name, _ in predicates]
