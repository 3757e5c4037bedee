"""
Data Loading Service - raw sale rows in, normalized records out

This module is responsible for LOADING data only:
- DataSource: the injected abstraction the pipeline reads raw rows from
- CsvDataSource: the sales export on disk (pandas)
- InMemoryDataSource: rows already held by the caller (tests, notebooks)
- load_records(): fetch → cap → normalize

Pipeline: **Load Raw** → Normalize → Stats Cache / Filter → Aggregate

The loader is the only place a fatal I/O problem can happen. A missing or
unreadable file is logged and produces an empty dataset; the analytics core
works on empty collections.

CSV Columns (boliga export):
  property_type, address, price, date, sale_type, size_m2, price_per_m2,
  rooms, year_built
"""

import logging
import os
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from boliga_analytics.config import Config
from boliga_analytics.models import PropertyRecord
from boliga_analytics.services.record_normalizer import normalize_records
from boliga_analytics.utils.formatting import Formatter

logger = logging.getLogger(__name__)

CSV_ENCODINGS = ['utf-8', 'utf-8-sig', 'latin-1', 'cp1252']

Row = Dict[str, Any]


class DataSource(ABC):
    """
    Where raw rows come from.

    Subclasses must implement fetch_rows(), returning plain dicts whose
    values may be strings, numbers or None.
    """

    name: str = "source"

    @abstractmethod
    def fetch_rows(self) -> List[Row]:
        """Return every raw row available from the source."""


class InMemoryDataSource(DataSource):
    """Rows supplied directly by the caller."""

    name = "memory"

    def __init__(self, rows: Iterable[Row]):
        self._rows = [dict(row) for row in rows]

    def fetch_rows(self) -> List[Row]:
        return [dict(row) for row in self._rows]


class CsvDataSource(DataSource):
    """The sales CSV export, read with pandas."""

    name = "csv"

    def __init__(self, path: Optional[str] = None):
        self.path = path or Config.CSV_PATH

    def _read_frame(self) -> Optional[pd.DataFrame]:
        for encoding in CSV_ENCODINGS:
            try:
                return pd.read_csv(self.path, encoding=encoding, skip_blank_lines=True)
            except UnicodeDecodeError:
                continue
        logger.error(f"Could not decode {self.path} with any of {CSV_ENCODINGS}")
        return None

    def fetch_rows(self) -> List[Row]:
        if not os.path.exists(self.path):
            logger.error(f"Property data file not found: {self.path}")
            return []

        try:
            df = self._read_frame()
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Error loading property data from {self.path}: {e}")
            return []

        if df is None or df.empty:
            return []

        # NaN → None so rows are plain data
        df = df.astype(object).where(pd.notna(df), None)
        return df.to_dict(orient='records')


def load_records(
    source: DataSource,
    max_rows: Optional[int] = Config.MAX_ROWS,
    formatter: Optional[Formatter] = None
) -> List[PropertyRecord]:
    """
    Fetch raw rows from `source`, keep the first `max_rows`, normalize them.

    Args:
        source: Injected data source
        max_rows: Row cap (None = no cap)
        formatter: Optional currency formatter for display strings

    Returns:
        Normalized records in source order (empty list if nothing loaded)
    """
    start = time.time()
    rows = source.fetch_rows()
    fetched = len(rows)

    if max_rows is not None and fetched > max_rows:
        rows = rows[:max_rows]
        logger.info(f"Capped {fetched} rows to the first {max_rows}")

    if not rows:
        logger.warning(f"No rows loaded from {source.name} source")
        return []

    records = normalize_records(rows, formatter)
    elapsed = time.time() - start
    logger.info(f"Loaded {len(records):,} records from {source.name} source in {elapsed:.2f}s")
    return records
