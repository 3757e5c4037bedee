"""
boliga_analytics - analytics core for Danish property sale records.

Parses and normalizes raw sale rows, filters them by user criteria and
computes price distributions, district rankings and summary metrics for
presentation layers.
"""

__version__ = "0.1.0"
