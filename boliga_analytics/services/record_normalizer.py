"""
Record Normalizer - raw loader rows to typed PropertyRecord objects.

Raw Field Mapping:
  Raw key          → PropertyRecord field     Transformation
  ──────────────────────────────────────────────────────────────
  property_type    → property_type            coerce_str
  address          → address/postcode/district parse_address
  price            → price                    coerce_number (0 if bad)
  date             → date                     coerce_str
  sale_type        → sale_type                coerce_str
  size_m2          → size_m2                  coerce_number
  price_per_m2     → price_per_m2             coerce_number (not recomputed)
  rooms            → rooms                    coerce_int
  year_built       → year_built               coerce_int
  (computed)       → formatted_price          formatter(price)
  (computed)       → formatted_price_per_m2   formatter(price_per_m2)

Normalization never raises for data-quality problems. Malformed and absent
numeric fields are counted so the loader can report them.
"""

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Optional

from boliga_analytics.models import PropertyRecord
from boliga_analytics.utils.address import parse_address
from boliga_analytics.utils.formatting import Formatter, format_dkk
from boliga_analytics.utils.normalize import (
    FieldState,
    coerce_int,
    coerce_number,
    coerce_str,
    inspect_field,
)

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ('price', 'size_m2', 'price_per_m2', 'rooms', 'year_built')


def normalize_record(
    raw: Mapping[str, Any],
    formatter: Formatter = format_dkk
) -> PropertyRecord:
    """
    Convert one raw row into a PropertyRecord.

    Args:
        raw: Mapping with loosely-typed values (strings, numbers, None, NaN)
        formatter: Currency formatter used for the display strings

    Returns:
        PropertyRecord with every field populated (defaults: 0 / '')
    """
    parsed = parse_address(coerce_str(raw.get('address')))

    price = coerce_number(raw.get('price'))
    price_per_m2 = coerce_number(raw.get('price_per_m2'))

    return PropertyRecord(
        property_type=coerce_str(raw.get('property_type')),
        address=parsed.street,
        postcode=parsed.postcode,
        district=parsed.district,
        price=price,
        date=coerce_str(raw.get('date')),
        sale_type=coerce_str(raw.get('sale_type')),
        size_m2=coerce_number(raw.get('size_m2')),
        price_per_m2=price_per_m2,
        rooms=coerce_int(raw.get('rooms')),
        year_built=coerce_int(raw.get('year_built')),
        formatted_price=formatter(price),
        formatted_price_per_m2=formatter(price_per_m2),
    )


def field_diagnostics(rows: Iterable[Mapping[str, Any]]) -> Dict[str, Dict[str, int]]:
    """
    Count absent and malformed numeric fields across raw rows.

    Returns:
        {'absent': {field: count}, 'malformed': {field: count}} with only
        non-zero counts present.
    """
    absent: Counter = Counter()
    malformed: Counter = Counter()
    for raw in rows:
        for name in NUMERIC_FIELDS:
            state = inspect_field(raw.get(name)).state
            if state is FieldState.ABSENT:
                absent[name] += 1
            elif state is FieldState.MALFORMED:
                malformed[name] += 1
    return {'absent': dict(absent), 'malformed': dict(malformed)}


def normalize_records(
    rows: Iterable[Mapping[str, Any]],
    formatter: Optional[Formatter] = None
) -> List[PropertyRecord]:
    """
    Normalize a batch of raw rows, preserving their order.

    No row limit is applied here; capping is the loader's job.
    """
    rows = list(rows)
    formatter = formatter or format_dkk
    records = [normalize_record(raw, formatter) for raw in rows]

    diagnostics = field_diagnostics(rows)
    if diagnostics['malformed']:
        logger.info(f"Coerced malformed numeric fields to 0: {diagnostics['malformed']}")
    if diagnostics['absent']:
        logger.debug(f"Missing numeric fields defaulted to 0: {diagnostics['absent']}")
    unparsed = sum(1 for r in records if r.address and not r.postcode)
    if unparsed:
        logger.debug(f"{unparsed} of {len(records)} addresses had no postcode/district")

    logger.info(f"Normalized {len(records)} records")
    return records
