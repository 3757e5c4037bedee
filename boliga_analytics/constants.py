"""
Centralized Constants - SINGLE SOURCE OF TRUTH

Filter defaults, date-window choices and currency conventions used by the
analytics core. Import from here rather than re-declaring values elsewhere.
"""

from datetime import date
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

# =============================================================================
# DATE WINDOWS
# =============================================================================

DATE_WINDOW_ALL = 'all'

# Choices offered by the filter panel (months, or "all")
DATE_WINDOW_OPTIONS = [3, 6, 12, 24, DATE_WINDOW_ALL]

DATE_WINDOW_LABELS = {
    3: 'Last 3 months',
    6: 'Last 6 months',
    12: 'Last 12 months',
    24: 'Last 24 months',
    DATE_WINDOW_ALL: 'All time',
}

# Used when a window value cannot be read as a month count
DEFAULT_DATE_WINDOW_MONTHS = 12


# =============================================================================
# FILTER DEFAULTS (dashboard reset state)
# =============================================================================

DEFAULT_PRICE_RANGE = (0, 100_000_000)
DEFAULT_ROOM_RANGE = (0, 10)
DEFAULT_SIZE_RANGE = (0, 1000)
DEFAULT_YEAR_BUILT_RANGE = (1800, 2024)


# =============================================================================
# AGGREGATION
# =============================================================================

PRICE_BUCKET_WIDTH = 500_000
TRAILING_VOLUME_DAYS = 30


# =============================================================================
# CURRENCY (da-DK, DKK)
# =============================================================================

CURRENCY_SYMBOL = 'kr.'
THOUSANDS_SEPARATOR = '.'
# Intl.NumberFormat('da-DK') puts a no-break space before the symbol
CURRENCY_SPACER = '\u00a0'


# =============================================================================
# DATE WINDOW RESOLUTION
# =============================================================================

def normalize_date_window(value) -> Union[int, str]:
    """
    Normalize a date-window selection to a month count or 'all'.

    Accepts ints, numeric strings ("12") and 'all' (any case). Anything that
    cannot be read as an integer falls back to DEFAULT_DATE_WINDOW_MONTHS.

    Example:
        normalize_date_window('6')    → 6
        normalize_date_window('ALL')  → 'all'
        normalize_date_window('soon') → 12
    """
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.lower() == DATE_WINDOW_ALL:
            return DATE_WINDOW_ALL
        value = stripped
    if isinstance(value, bool) or value is None:
        return DEFAULT_DATE_WINDOW_MONTHS
    try:
        return int(value)
    except (ValueError, TypeError):
        return DEFAULT_DATE_WINDOW_MONTHS


def resolve_date_window(window, today: Optional[date] = None) -> Optional[date]:
    """
    Resolve a date window to its inclusive cutoff date.

    Uses calendar-month arithmetic (relativedelta), not N x 30 days:
    from 2026-03-31, a 1-month window starts on 2026-02-28.

    Returns:
        The earliest date still inside the window, or None for 'all'.
    """
    if today is None:
        today = date.today()

    months = normalize_date_window(window)
    if months == DATE_WINDOW_ALL:
        return None
    return today - relativedelta(months=months)
