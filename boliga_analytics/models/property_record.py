"""
PropertyRecord - one normalized property sale.

Records are created once per raw load by the record normalizer and are
read-only afterwards. `price_per_m2` is the value supplied by the source and
is NOT recomputed from price / size_m2, so the two may disagree.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class PropertyRecord:
    property_type: str = ''
    address: str = ''          # street only, after address parsing
    postcode: str = ''         # 4-digit code or ''
    district: str = ''
    price: float = 0
    date: str = ''             # ISO-parsable sale date as supplied
    sale_type: str = ''
    size_m2: float = 0
    price_per_m2: float = 0
    rooms: int = 0
    year_built: int = 0
    formatted_price: str = ''
    formatted_price_per_m2: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
