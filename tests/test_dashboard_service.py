"""
Tests for services/dashboard_service.py

The service is exercised end to end over an in-memory source: load,
normalize, baseline cache, filter and aggregate.
"""

import logging

import pytest

from boliga_analytics.models import FilterCriteria
from boliga_analytics.services import dashboard_service
from boliga_analytics.services.dashboard_service import (
    DashboardResult,
    PropertyAnalyticsService,
    log_timing,
)
from boliga_analytics.services.data_loader import DataSource, InMemoryDataSource

from conftest import TODAY


class CountingSource(DataSource):
    name = "counting"

    def __init__(self, rows):
        self.rows = rows
        self.fetches = 0

    def fetch_rows(self):
        self.fetches += 1
        return [dict(row) for row in self.rows]


@pytest.fixture
def service(raw_rows):
    return PropertyAnalyticsService(InMemoryDataSource(raw_rows), max_rows=None)


class TestLoading:

    def test_loads_once(self, raw_rows):
        source = CountingSource(raw_rows)
        service = PropertyAnalyticsService(source)

        first = service.records
        second = service.records

        assert first is second
        assert source.fetches == 1

    def test_reload_fetches_again(self, raw_rows):
        source = CountingSource(raw_rows)
        service = PropertyAnalyticsService(source)
        before = service.records

        after = service.reload()

        assert source.fetches == 2
        assert after is not before
        assert after == before

    def test_trailing_days_exposed(self, raw_rows):
        service = PropertyAnalyticsService(InMemoryDataSource(raw_rows), trailing_days=10)

        assert service.trailing_days == 10
        # 2026-10-10 is within 10 days of 2026-10-18, 2026-09-30 is not
        result = service.query(FilterCriteria(), today=TODAY)
        assert result.stats.summary.trailing_volume == 1

    def test_row_cap(self, raw_rows):
        service = PropertyAnalyticsService(InMemoryDataSource(raw_rows), max_rows=3)

        assert len(service.records) == 3


class TestBaselineStats:

    def test_cached_until_reload(self, raw_rows):
        service = PropertyAnalyticsService(CountingSource(raw_rows))

        first = service.baseline_stats(TODAY)
        second = service.baseline_stats(TODAY)

        assert first is second
        assert service.cache_stats()['hits'] == 1

        service.reload()
        third = service.baseline_stats(TODAY)
        assert third is not first
        assert third == first

    def test_covers_full_dataset(self, service):
        assert service.baseline_stats(TODAY).summary.total_count == 5


class TestQuery:

    def test_default_window(self, service):
        result = service.query(FilterCriteria(), today=TODAY)

        assert isinstance(result, DashboardResult)
        # 2025-01-15 and 2024-03-01 fall outside the last 12 months
        assert [r.address for r in result.records] == [
            'Strandvej 10', 'Nørrebrogade 5', 'Amagerbrogade 200',
        ]
        assert result.stats.summary.total_count == 3

    def test_filtered_stats_recomputed(self, service):
        all_time = service.query(FilterCriteria(date_window_months='all'), today=TODAY)
        villas = service.query(
            FilterCriteria(date_window_months='all', property_types={'Villa'}), today=TODAY
        )

        assert all_time.stats.summary.total_count == 5
        assert villas.stats.summary.total_count == 2
        assert villas.stats.property_type_counts == {'Villa': 2}
        # Baseline cache untouched by queries
        assert service.cache_stats()['misses'] == 0

    def test_meta(self, service):
        result = service.query(FilterCriteria(districts={'Valby'}, date_window_months='all'), today=TODAY)

        assert result.meta['total_records'] == 5
        assert result.meta['matched_records'] == 1
        assert result.meta['filters_applied']['districts'] == ['Valby']
        assert result.meta['range_filters_applied'] is False
        assert result.meta['elapsed_ms'] >= 0

    def test_range_filters_enabled(self, raw_rows):
        service = PropertyAnalyticsService(
            InMemoryDataSource(raw_rows), max_rows=None, apply_range_filters=True
        )
        criteria = FilterCriteria(date_window_months='all', room_range=(3, 10))

        result = service.query(criteria, today=TODAY)

        assert [r.rooms for r in result.records] == [3, 5, 4]
        assert result.meta['range_filters_applied'] is True

    def test_empty_source(self):
        service = PropertyAnalyticsService(InMemoryDataSource([]))

        result = service.query(FilterCriteria(), today=TODAY)

        assert result.records == []
        assert result.stats.summary.avg_price == 0


class TestSupplementaryViews:

    def test_filter_options(self, service):
        assert 'Valby' in service.filter_options()['districts']

    def test_property_type_comparison_respects_criteria(self, service):
        comparison = service.property_type_comparison(
            FilterCriteria(date_window_months='all', search='københavn'), today=TODAY
        )

        assert [row['type'] for row in comparison] == ['Lejlighed', 'Villa']

    def test_comparison_metrics(self, service):
        metrics = service.comparison_metrics(today=TODAY)

        assert set(metrics) == {'price_change', 'price_per_m2_change', 'volume_change'}


class TestLogTiming:

    def test_logs_and_reraises_failures(self, caplog):
        @log_timing("exploding")
        def explode():
            raise RuntimeError("boom")

        with caplog.at_level(logging.ERROR, logger='dashboard'):
            with pytest.raises(RuntimeError):
                explode()

        assert "exploding failed" in caplog.text

    def test_warns_on_slow_operation(self, caplog, monkeypatch):
        monkeypatch.setattr(dashboard_service, 'SLOW_OPERATION_MS', -1)

        @log_timing("sluggish")
        def sluggish():
            return 42

        with caplog.at_level(logging.WARNING, logger='dashboard'):
            assert sluggish() == 42

        assert "SLOW OPERATION: sluggish" in caplog.text
