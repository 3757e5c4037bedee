"""
Tests for services/record_normalizer.py

- Address fields are split into street/postcode/district
- Numeric fields are coerced independently (bad value → 0)
- price_per_m2 is carried from the source, never recomputed
- Normalization is deterministic
"""

import logging

from boliga_analytics.models import PropertyRecord
from boliga_analytics.services.record_normalizer import (
    field_diagnostics,
    normalize_record,
    normalize_records,
)

NBSP = "\u00a0"


class TestNormalizeRecord:
    """Tests for normalize_record()"""

    def test_well_formed_row(self, raw_rows):
        record = normalize_record(raw_rows[0])

        assert record.property_type == 'Lejlighed'
        assert record.address == 'Strandvej 10'
        assert record.postcode == '2100'
        assert record.district == 'København Ø'
        assert record.price == 3_200_000
        assert record.size_m2 == 80
        assert record.rooms == 3
        assert record.year_built == 1932
        assert record.formatted_price == f"3.200.000{NBSP}kr."
        assert record.formatted_price_per_m2 == f"40.000{NBSP}kr."

    def test_numeric_strings_are_parsed(self, raw_rows):
        record = normalize_record(raw_rows[1])

        assert record.price == 5_450_000
        assert record.size_m2 == 150
        assert record.rooms == 5
        assert isinstance(record.rooms, int)
        assert record.year_built == 1965

    def test_broken_numeric_fields_default_to_zero(self, raw_rows):
        record = normalize_record(raw_rows[2])

        assert record.price == 0
        assert record.size_m2 == 0
        assert record.price_per_m2 == 0
        assert record.rooms == 0
        assert record.year_built == 0
        assert record.formatted_price == f"0{NBSP}kr."
        # One broken field does not affect the others
        assert record.district == 'Valby'
        assert record.sale_type == 'Familiehandel'

    def test_missing_keys_default(self):
        record = normalize_record({})

        assert record == PropertyRecord(
            formatted_price=f"0{NBSP}kr.",
            formatted_price_per_m2=f"0{NBSP}kr.",
        )

    def test_price_per_m2_not_recomputed(self):
        record = normalize_record({'price': 1_000_000, 'size_m2': 100, 'price_per_m2': 12_345})

        assert record.price_per_m2 == 12_345
        assert record.price / record.size_m2 != record.price_per_m2

    def test_address_without_postcode(self, raw_rows):
        record = normalize_record(raw_rows[3])

        assert record.address == 'No postcode here'
        assert record.postcode == ''
        assert record.district == ''

    def test_custom_formatter(self):
        record = normalize_record({'price': 10, 'price_per_m2': 2}, formatter=lambda v: f"DKK {v:.0f}")

        assert record.formatted_price == "DKK 10"
        assert record.formatted_price_per_m2 == "DKK 2"

    def test_idempotent(self, raw_rows):
        for raw in raw_rows:
            assert normalize_record(raw) == normalize_record(raw)

    def test_raw_row_not_modified(self, raw_rows):
        before = dict(raw_rows[1])
        normalize_record(raw_rows[1])
        assert raw_rows[1] == before


class TestNormalizeRecords:
    """Tests for normalize_records() and field_diagnostics()"""

    def test_preserves_order_and_length(self, raw_rows):
        records = normalize_records(raw_rows)

        assert len(records) == len(raw_rows)
        assert [r.property_type for r in records] == [row['property_type'] for row in raw_rows]

    def test_empty_input(self):
        assert normalize_records([]) == []

    def test_accepts_generator(self, raw_rows):
        assert len(normalize_records(row for row in raw_rows)) == len(raw_rows)

    def test_diagnostics_counts(self, raw_rows):
        diagnostics = field_diagnostics(raw_rows)

        assert diagnostics['malformed'] == {'price': 1}
        assert diagnostics['absent'] == {
            'size_m2': 1, 'price_per_m2': 1, 'rooms': 1, 'year_built': 1,
        }

    def test_logs_malformed_fields(self, raw_rows, caplog):
        with caplog.at_level(logging.INFO):
            normalize_records(raw_rows)

        assert "malformed" in caplog.text
        assert "Normalized 5 records" in caplog.text
