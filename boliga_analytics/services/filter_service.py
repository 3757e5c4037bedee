"""
Filter Service - produces the filtered view for the current FilterCriteria.

Every criteria change yields a fresh, independent list. The input sequence is
never modified and matching records keep their relative order.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence

from boliga_analytics.config import Config
from boliga_analytics.models import FilterCriteria, PropertyRecord
from boliga_analytics.utils.filter_builder import build_predicates, describe_predicates

logger = logging.getLogger(__name__)


def filter_records(
    records: Sequence[PropertyRecord],
    criteria: FilterCriteria,
    *,
    today: Optional[date] = None,
    apply_range_filters: Optional[bool] = None
) -> List[PropertyRecord]:
    """
    Return the records matching ALL active criteria (stable filter).

    Args:
        records: Normalized records (not modified)
        criteria: Filter criteria (not modified)
        today: Reference date for the date window (defaults to today)
        apply_range_filters: Apply room/size/year-built ranges. Defaults to
            Config.APPLY_RANGE_FILTERS.

    Returns:
        New list containing the matching records in input order
    """
    if apply_range_filters is None:
        apply_range_filters = Config.APPLY_RANGE_FILTERS

    if not records:
        return []

    predicates = build_predicates(
        criteria,
        today=today,
        apply_range_filters=apply_range_filters,
    )
    checks = [predicate for _, predicate in predicates]

    matched = [record for record in records if all(check(record) for check in checks)]

    logger.debug(
        f"Filtered {len(records)} → {len(matched)} records "
        f"(active: {', '.join(describe_predicates(predicates))})"
    )
    return matched
