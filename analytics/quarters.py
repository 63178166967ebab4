"""Quarter selection helpers for the annual indicator."""

from __future__ import annotations

from dataclasses import dataclass

from analytics.store import TimeSeriesStore
from utils.config import AXIS_YEAR_LIMIT, QUARTERS


@dataclass(frozen=True)
class PickedQuarter:
    """The figure that represents a year: its latest reported quarter."""

    value: float
    quarter: str
    provisional: bool


def pick_latest(store: TimeSeriesStore, year: int, indicator: str) -> PickedQuarter | None:
    """Return the latest reported quarter of *year*, or ``None``.

    Quarters are scanned Q4 -> Q1.  Anything but Q4 is provisional: a year
    with only Q2 reported is a Q2 figure, with no estimate of Q3/Q4.
    """
    for quarter in reversed(QUARTERS):
        value = store.get(year, quarter, indicator)
        if value is not None:
            return PickedQuarter(value=value, quarter=quarter, provisional=quarter != "Q4")
    return None


def select_axis_years(store: TimeSeriesStore, indicator: str,
                      limit: int = AXIS_YEAR_LIMIT) -> list[int]:
    """Most recent *limit* years with data for *indicator*, ascending."""
    years = store.years(indicator)
    if limit <= 0:
        return []
    return years[-limit:]


def default_year_window(store: TimeSeriesStore, current_year: int | None = None) -> list[int]:
    """Two-year window (prior, current) used by the quarterly indicators.

    *current_year* defaults to the latest year in the store.  Years with no
    data for any indicator are dropped.
    """
    available = store.all_years()
    if current_year is None:
        if not available:
            return []
        current_year = available[-1]
    return [y for y in (current_year - 1, current_year) if y in available]
