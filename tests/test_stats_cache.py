"""
Tests for services/stats_cache.py
"""

from datetime import date

from boliga_analytics.services.aggregation_service import compute_aggregate_stats
from boliga_analytics.services.stats_cache import StatsCache

from conftest import TODAY, make_record


class CountingCompute:
    """compute_aggregate_stats wrapper that records how often it ran."""

    def __init__(self):
        self.calls = 0

    def __call__(self, records, **kwargs):
        self.calls += 1
        return compute_aggregate_stats(records, **kwargs)


class TestStatsCache:

    def test_computes_once_per_dataset(self, records):
        compute = CountingCompute()
        cache = StatsCache(compute=compute)

        first = cache.get(records, today=TODAY)
        second = cache.get(records, today=TODAY)

        assert first is second
        assert compute.calls == 1
        assert cache.stats()['hits'] == 1
        assert cache.stats()['misses'] == 1

    def test_keyed_by_identity_not_contents(self, records):
        compute = CountingCompute()
        cache = StatsCache(compute=compute)

        cache.get(records, today=TODAY)
        cache.get(list(records), today=TODAY)

        assert compute.calls == 2

    def test_new_dataset_replaces_slot(self):
        cache = StatsCache()
        small = [make_record(price=1_000_000)]
        large = [make_record(price=2_000_000), make_record(price=4_000_000)]

        cache.get(small, today=TODAY)
        stats = cache.get(large, today=TODAY)

        assert stats.summary.total_count == 2
        assert cache.stats()['dataset_size'] == 2

    def test_clear(self, records):
        compute = CountingCompute()
        cache = StatsCache(compute=compute)
        cache.get(records, today=TODAY)

        cache.clear()

        assert cache.stats()['cached'] is False
        assert cache.stats()['computed_at'] is None
        cache.get(records, today=TODAY)
        assert compute.calls == 2

    def test_reference_date_is_part_of_key(self):
        compute = CountingCompute()
        cache = StatsCache(compute=compute)
        records = [make_record(date='2026-10-10')]

        current = cache.get(records, today=TODAY)
        year_later = cache.get(records, today=date(2027, 10, 18))

        assert compute.calls == 2
        assert current.summary.trailing_volume == 1
        assert year_later.summary.trailing_volume == 0

    def test_compute_options_forwarded(self):
        cache = StatsCache(bucket_width=1_000_000)

        stats = cache.get([make_record(price=1_500_000)], today=TODAY)

        assert stats.price_histogram[0]['range'].startswith("1.000.000")

    def test_empty_stats_before_use(self):
        assert StatsCache().stats() == {
            'cached': False,
            'dataset_size': 0,
            'computed_at': None,
            'hits': 0,
            'misses': 0,
        }
