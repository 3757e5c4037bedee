"""
Utility modules for the analytics core.
"""
from .address import ParsedAddress, parse_address
from .formatting import format_dkk, format_price_range
from .normalize import (
    FieldState,
    RawField,
    ValidationError,
    coerce_int,
    coerce_number,
    coerce_str,
    inspect_field,
    parse_record_date,
)

__all__ = [
    'ParsedAddress',
    'parse_address',
    'format_dkk',
    'format_price_range',
    'FieldState',
    'RawField',
    'ValidationError',
    'coerce_int',
    'coerce_number',
    'coerce_str',
    'inspect_field',
    'parse_record_date',
]
