"""
Shared fixtures for the analytics core tests.

All date-dependent tests use TODAY so results do not depend on the clock.
"""

from datetime import date

import pytest

from boliga_analytics.models import PropertyRecord
from boliga_analytics.services.record_normalizer import normalize_records

TODAY = date(2026, 10, 18)


def make_record(**overrides) -> PropertyRecord:
    """PropertyRecord with sensible defaults for the fields a test ignores."""
    values = {
        'property_type': 'Lejlighed',
        'address': 'Strandvej 10',
        'postcode': '2100',
        'district': 'København Ø',
        'price': 1_000_000,
        'date': '2026-10-01',
        'sale_type': 'Alm. Salg',
        'size_m2': 100,
        'price_per_m2': 10_000,
        'rooms': 3,
        'year_built': 1930,
    }
    values.update(overrides)
    return PropertyRecord(**values)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def raw_rows():
    """Rows as the CSV loader hands them over: loosely typed, some broken."""
    return [
        {
            'property_type': 'Lejlighed',
            'address': 'Strandvej 10, 2100 København Ø',
            'price': 3_200_000,
            'date': '2026-10-10',
            'sale_type': 'Alm. Salg',
            'size_m2': 80,
            'price_per_m2': 40_000,
            'rooms': 3,
            'year_built': 1932,
        },
        {
            'property_type': 'Villa',
            'address': 'Nørrebrogade 5 2200 København N',
            'price': '5450000',
            'date': '2026-05-02',
            'sale_type': 'Alm. Salg',
            'size_m2': '150',
            'price_per_m2': '36333',
            'rooms': '5',
            'year_built': '1965',
        },
        {
            'property_type': 'Rækkehus',
            'address': 'Valby Langgade 100, 2500 Valby',
            'price': 'ukendt',
            'date': '2025-01-15',
            'sale_type': 'Familiehandel',
            'size_m2': None,
            'price_per_m2': float('nan'),
            'rooms': '',
            'year_built': None,
        },
        {
            'property_type': 'Lejlighed',
            'address': 'No postcode here',
            'price': 1_800_000,
            'date': '2024-03-01',
            'sale_type': 'Alm. Salg',
            'size_m2': 60,
            'price_per_m2': 30_000,
            'rooms': 2,
            'year_built': 2001,
        },
        {
            'property_type': 'Villa',
            'address': 'Amagerbrogade 200, 2300 København S',
            'price': 4_100_000,
            'date': '2026-09-30',
            'sale_type': 'Alm. Salg',
            'size_m2': 120,
            'price_per_m2': 34_167,
            'rooms': 4,
            'year_built': 1978,
        },
    ]


@pytest.fixture
def records(raw_rows):
    return normalize_records(raw_rows)
