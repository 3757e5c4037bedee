"""
Pipeline stages: loading, normalization, filtering, aggregation, caching.
"""
