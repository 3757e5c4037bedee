"""
Currency formatting for display strings.

Every consumer (record normalization, histogram labels, CLI output) formats
through format_dkk() so that amounts are byte-identical everywhere:

    format_dkk(1234567)  → "1.234.567 kr."   (no-break space before "kr.")
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable

from boliga_analytics.constants import (
    CURRENCY_SPACER,
    CURRENCY_SYMBOL,
    THOUSANDS_SEPARATOR,
)

# Signature of a swappable formatter
Formatter = Callable[[float], str]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (Intl semantics)."""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def format_dkk(value: float) -> str:
    """
    Format an amount as Danish kroner with zero decimal places.

    Non-finite or non-numeric input is formatted as 0.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = 0.0
    if not math.isfinite(number):
        number = 0.0

    amount = round_half_up(number)
    grouped = f"{abs(amount):,}".replace(',', THOUSANDS_SEPARATOR)
    sign = '-' if amount < 0 else ''
    return f"{sign}{grouped}{CURRENCY_SPACER}{CURRENCY_SYMBOL}"


def format_price_range(lower: float, upper: float, formatter: Formatter = format_dkk) -> str:
    """Histogram bucket label, e.g. "500.000 kr. - 1.000.000 kr."."""
    return f"{formatter(lower)} - {formatter(upper)}"
