import os
from dotenv import load_dotenv

from boliga_analytics.utils.normalize import to_int

load_dotenv()


def _get_bool(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('true', '1', 'yes', 'on')


def _get_int(name: str, default: int) -> int:
    # ValidationError names the variable when .env holds a typo
    return to_int(os.getenv(name), default=default, field=name)


def _get_max_rows():
    """
    Row cap applied by the loader.

    BOLIGA_MAX_ROWS=0 (or a negative value) disables the cap entirely.
    """
    max_rows = _get_int('BOLIGA_MAX_ROWS', 1000)
    return max_rows if max_rows > 0 else None


class Config:
    CSV_PATH = os.getenv('BOLIGA_CSV_PATH', os.path.join('data', 'boliga_sales.csv'))
    MAX_ROWS = _get_max_rows()

    # Aggregation settings
    PRICE_BUCKET_WIDTH = _get_int('BOLIGA_PRICE_BUCKET_WIDTH', 500000)
    TRAILING_VOLUME_DAYS = _get_int('BOLIGA_TRAILING_VOLUME_DAYS', 30)

    # Filter settings
    DEFAULT_DATE_WINDOW = os.getenv('BOLIGA_DEFAULT_DATE_WINDOW', '12')
    # Room/size/year-built ranges are carried on the criteria but only
    # applied when this is switched on
    APPLY_RANGE_FILTERS = _get_bool('BOLIGA_APPLY_RANGE_FILTERS')

    LOG_LEVEL = os.getenv('BOLIGA_LOG_LEVEL', 'INFO').upper()
