"""
Input Normalization Utilities
=============================

Single source of truth for input normalization.
All parsing of external inputs happens here, nowhere else.

Two families of helpers live in this module:

1. Lenient RECORD coercion (inspect_field, coerce_number, coerce_str,
   parse_record_date). Raw sale records are noisy, human-entered data, so
   these never raise: every raw value is classified as PRESENT, MALFORMED or
   ABSENT and then mapped to a typed value explicitly.

2. Strict REQUEST coercion (to_int, to_float, to_str, to_list, to_date).
   Filter parameters, CLI options and environment settings are validated and
   raise ValidationError when they cannot be converted.

Usage:
    from boliga_analytics.utils.normalize import coerce_number, to_float, ValidationError

    price = coerce_number(raw.get('price'))          # never raises, 0 on bad input

    try:
        price_min = to_float(params.get('price_min'), default=0, field='price_min')
    except ValidationError as e:
        return {"error": str(e), "field": e.field}
"""

import math
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, NamedTuple, Optional, Union

from dateutil import parser as date_parser

# Plain decimal notation: digits with optional fraction and exponent.
# float() alone would also take "1_000", "nan", "inf" and non-ASCII digits.
_NUMERIC_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class ValidationError(ValueError):
    """Raised when input cannot be normalized to expected type."""

    def __init__(self, message: str, field: str = None, received_value=None):
        super().__init__(message)
        self.field = field
        self.received_value = received_value


# ============================================================================
# RAW RECORD FIELDS (lenient)
# ============================================================================

class FieldState(Enum):
    """How a raw field arrived from the loader."""
    PRESENT = 'present'
    MALFORMED = 'malformed'
    ABSENT = 'absent'


class RawField(NamedTuple):
    state: FieldState
    value: Any = None


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    # pandas represents empty cells as float NaN
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


def inspect_field(value: Any) -> RawField:
    """
    Classify a raw numeric field.

    - ABSENT: None, NaN, empty/whitespace-only string
    - PRESENT: finite int/float, or a string in plain decimal notation
      ("2100000", " 42 ", "-1.5", "1e6") with a finite value
    - MALFORMED: anything else (text, inf, bools, objects)

    Returns:
        RawField(state, value) where value is a float for PRESENT fields and
        the original input otherwise.
    """
    if _is_missing(value):
        return RawField(FieldState.ABSENT, value)
    if isinstance(value, bool):
        return RawField(FieldState.MALFORMED, value)

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_PATTERN.fullmatch(text):
            return RawField(FieldState.MALFORMED, value)
        number = float(text)
    else:
        try:
            # numpy scalars, Decimal
            number = float(value)
        except (TypeError, ValueError):
            return RawField(FieldState.MALFORMED, value)

    if not math.isfinite(number):
        return RawField(FieldState.MALFORMED, value)
    return RawField(FieldState.PRESENT, number)


def coerce_number(value: Any, *, default: float = 0) -> float:
    """Parse as a number; anything that is not a finite number becomes `default`."""
    field = inspect_field(value)
    if field.state is FieldState.PRESENT:
        return field.value
    return default


def coerce_int(value: Any, *, default: int = 0) -> int:
    """Like coerce_number() but truncated to int (room counts, years)."""
    field = inspect_field(value)
    if field.state is FieldState.PRESENT:
        return int(field.value)
    return default


def coerce_str(value: Any, *, default: str = "") -> str:
    """
    Use the value as-is; absent values become `default`.

    Non-string values (e.g. a year typed as a number by the CSV reader) are
    converted with str(). Surrounding whitespace is preserved.
    """
    if value is None:
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    if isinstance(value, str):
        return value
    return str(value)


def parse_record_date(value: Union[str, date, None]) -> Optional[date]:
    """
    Leniently parse a record's sale date.

    Accepts ISO 8601 dates and datetimes ("2024-03-01", "2024-03-01T10:00:00")
    and date/datetime objects. Returns None when the value cannot be parsed;
    callers decide what an unknown date means.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date_parser.isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        return None


# ============================================================================
# REQUEST PARAMETERS (strict)
# ============================================================================

def to_int(
    value: Union[str, int, None],
    *,
    default: Optional[int] = None,
    field: str = None
) -> Optional[int]:
    """
    Parse a whole number from a setting or request value.

    Used for environment settings (row cap, bucket width, trailing days), so
    a typo in .env names the offending variable instead of failing with a
    bare int() error.

    Raises:
        ValidationError: If value is not a whole number ("12", " 30 ", 500000)
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError(f"Expected int, got bool: {value!r}", field=field, received_value=value)
    if isinstance(value, int):
        return value

    text = str(value).strip()
    if text == "":
        return default
    if not _INT_PATTERN.fullmatch(text):
        raise ValidationError(
            f"Expected int, got {type(value).__name__}: {value!r}",
            field=field,
            received_value=value
        )
    return int(text)


def to_float(
    value: Optional[str],
    *,
    default: Optional[float] = None,
    field: str = None
) -> Optional[float]:
    """
    Convert string to float, with explicit None handling.

    Raises:
        ValidationError: If value cannot be converted to a finite float
    """
    if value is None or value == "":
        return default
    try:
        result = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"Expected float, got {type(value).__name__}: {value!r}",
            field=field,
            received_value=value
        )
    if not math.isfinite(result):
        raise ValidationError(
            f"Expected finite float, got: {value!r}",
            field=field,
            received_value=value
        )
    return result


def to_str(
    value: Optional[str],
    *,
    default: Optional[str] = None,
    strip: bool = True,
    field: str = None
) -> Optional[str]:
    """
    Normalize string input, optionally stripping whitespace.

    Whitespace-only input is treated as empty and returns `default`.
    """
    if value is None or value == "":
        return default
    result = str(value)
    if strip:
        result = result.strip()
    if result == "":
        return default
    return result


def to_list(
    value,
    *,
    default: Optional[list] = None,
    separator: str = ",",
    item_type: type = str,
    field: str = None
) -> Optional[list]:
    """
    Convert comma-separated string (or a list of them) to a list.

    Args:
        value: Input string (e.g., "Villa,Lejlighed") or list of strings
        default: Value to return if input is None or empty
        separator: Separator character
        item_type: Type to convert each item to (str, int, float)
        field: Field name for error messages

    Raises:
        ValidationError: If any item cannot be converted
    """
    if value is None or value == "" or value == []:
        return default if default is not None else []

    raw_items = value if isinstance(value, (list, tuple, set, frozenset)) else [value]
    items = []
    for raw in raw_items:
        if raw is None:
            continue
        items.extend(part.strip() for part in str(raw).split(separator) if part.strip())

    if item_type == str:
        return items

    try:
        return [item_type(item) for item in items]
    except (ValueError, TypeError):
        raise ValidationError(
            f"Expected list of {item_type.__name__}, got invalid item in: {value!r}",
            field=field,
            received_value=value
        )


def to_date(
    value: Optional[Union[str, date]],
    *,
    default: Optional[date] = None,
    field: str = None
) -> Optional[date]:
    """
    Parse a reference date ("as of") supplied by a caller.

    Same ISO 8601 reading as parse_record_date(), but strict: a caller asking
    for a specific reference date gets an error instead of silently falling
    back to today. "2026-10" means the first of the month.

    Raises:
        ValidationError: If value cannot be parsed as an ISO date
    """
    if value is None or value == "":
        return default
    if isinstance(value, (date, str)):
        parsed = parse_record_date(value)
        if parsed is not None:
            return parsed
    raise ValidationError(
        f"Expected date (YYYY-MM-DD), got {type(value).__name__}: {value!r}",
        field=field,
        received_value=value
    )
