"""
Analytics package -- comparisons behind the tax indicator dashboard.

Re-exports key entry points so callers can do::

    from analytics import TimeSeriesStore, assemble, classify
"""

from analytics.comparison import (
    ComparisonResult,
    compare_annual,
    compare_quarterly,
    comparator_for,
)
from analytics.diagnosis import Diagnosis, classify
from analytics.quarters import default_year_window, pick_latest, select_axis_years
from analytics.store import DataPoint, TimeSeriesStore
from analytics.summary import assemble, assemble_tabs, build_dashboard

__all__ = [
    "ComparisonResult",
    "DataPoint",
    "Diagnosis",
    "TimeSeriesStore",
    "assemble",
    "assemble_tabs",
    "build_dashboard",
    "classify",
    "compare_annual",
    "compare_quarterly",
    "comparator_for",
    "default_year_window",
    "pick_latest",
    "select_axis_years",
]
