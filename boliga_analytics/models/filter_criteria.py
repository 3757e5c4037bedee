"""
FilterCriteria - the user-adjustable predicates narrowing the visible records.

Owned by the caller and changed on every interaction. The filter engine only
reads it. Empty `property_types` / `districts` mean "no restriction".
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Set, Tuple, Union

from boliga_analytics.constants import (
    DEFAULT_DATE_WINDOW_MONTHS,
    DEFAULT_PRICE_RANGE,
    DEFAULT_ROOM_RANGE,
    DEFAULT_SIZE_RANGE,
    DEFAULT_YEAR_BUILT_RANGE,
    normalize_date_window,
)
from boliga_analytics.utils.normalize import to_float, to_list, to_str

Range = Tuple[float, float]


@dataclass
class FilterCriteria:
    search: str = ''
    postcode: str = ''
    property_types: Set[str] = field(default_factory=set)
    price_range: Range = DEFAULT_PRICE_RANGE
    room_range: Range = DEFAULT_ROOM_RANGE
    size_range: Range = DEFAULT_SIZE_RANGE
    year_built_range: Range = DEFAULT_YEAR_BUILT_RANGE
    districts: Set[str] = field(default_factory=set)
    date_window_months: Union[int, str] = DEFAULT_DATE_WINDOW_MONTHS

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> 'FilterCriteria':
        """
        Build criteria from request-style parameters.

        Accepted keys (all optional):
            search, postcode, property_types|property_type, districts|district,
            price_min, price_max, room_min, room_max, size_min, size_max,
            year_built_min, year_built_max, date_window

        List values may be lists or comma-separated strings.

        Raises:
            ValidationError: If a numeric bound cannot be parsed
        """
        def _range(prefix: str, default: Range) -> Range:
            return (
                to_float(params.get(f'{prefix}_min'), default=default[0], field=f'{prefix}_min'),
                to_float(params.get(f'{prefix}_max'), default=default[1], field=f'{prefix}_max'),
            )

        property_types = params.get('property_types') or params.get('property_type')
        districts = params.get('districts') or params.get('district')
        date_window = params.get('date_window')

        return cls(
            search=to_str(params.get('search'), default=''),
            postcode=to_str(params.get('postcode'), default=''),
            property_types=set(to_list(property_types, field='property_types')),
            price_range=_range('price', DEFAULT_PRICE_RANGE),
            room_range=_range('room', DEFAULT_ROOM_RANGE),
            size_range=_range('size', DEFAULT_SIZE_RANGE),
            year_built_range=_range('year_built', DEFAULT_YEAR_BUILT_RANGE),
            districts=set(to_list(districts, field='districts')),
            date_window_months=(
                normalize_date_window(date_window)
                if date_window not in (None, '') else DEFAULT_DATE_WINDOW_MONTHS
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'search': self.search,
            'postcode': self.postcode,
            'property_types': sorted(self.property_types),
            'price_range': list(self.price_range),
            'room_range': list(self.room_range),
            'size_range': list(self.size_range),
            'year_built_range': list(self.year_built_range),
            'districts': sorted(self.districts),
            'date_window_months': self.date_window_months,
        }
