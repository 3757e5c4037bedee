"""
Plain-data models shared by the pipeline and its callers.
"""
from .property_record import PropertyRecord
from .filter_criteria import FilterCriteria
from .aggregate_stats import AggregateStats, SummaryMetrics

__all__ = [
    'PropertyRecord',
    'FilterCriteria',
    'AggregateStats',
    'SummaryMetrics',
]
