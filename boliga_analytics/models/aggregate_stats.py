"""
Aggregate output shapes.

AggregateStats is derived data: it is recomputed from whatever record
collection it is given and never updated in place.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class SummaryMetrics:
    total_count: int = 0
    avg_price: float = 0
    avg_size: float = 0
    avg_price_per_m2: float = 0    # avg_price / avg_size (ratio of means)
    trailing_volume: int = 0       # sales in the trailing window (30 days)


@dataclass(frozen=True)
class AggregateStats:
    # [{'range': '0 kr. - 500.000 kr.', 'count': 3}, ...] ascending by bucket
    price_histogram: List[Dict[str, Any]] = field(default_factory=list)
    # {property_type: count} in first-seen order
    property_type_counts: Dict[str, int] = field(default_factory=dict)
    # [{'district': ..., 'avg_price': ...}] descending by avg_price
    district_avg_price: List[Dict[str, Any]] = field(default_factory=list)
    # [{'district': ..., 'sales': ...}] descending by sales
    district_sales: List[Dict[str, Any]] = field(default_factory=list)
    summary: SummaryMetrics = field(default_factory=SummaryMetrics)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
