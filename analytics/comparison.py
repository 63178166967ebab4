"""
Period comparison strategies.

Two strategies share one interface and are picked by indicator cadence:

  - QuarterlyComparator: latest reported quarter against the one before it,
    like for like, inside a supplied year window.
  - AnnualComparator: latest year against the previous year, normalizing
    provisional (year-to-date) figures to a common share of the year.

Normalization assumes a flat run rate through the year.  It is not a
seasonal adjustment.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any

from analytics.diagnosis import Diagnosis, classify
from analytics.quarters import pick_latest
from analytics.store import TimeSeriesStore, quarter_index
from utils.config import CADENCE_ANNUAL, CADENCE_QUARTERLY, QUARTERS, IndicatorCatalog


@dataclass(frozen=True)
class ComparisonResult:
    """Latest-vs-previous comparison for one indicator.

    ``delta`` is set only when both periods are.  ``diagnosis`` is always set.
    """

    prior_period: float | None = None
    current_period: float | None = None
    delta: float | None = None
    relative_change_pct: float | None = None
    diagnosis: Diagnosis = Diagnosis.YELLOW
    current_provisional_quarter: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["diagnosis"] = self.diagnosis.value
        return d


def make_result(prior: float | None, current: float | None,
                current_provisional_quarter: str | None = None) -> ComparisonResult:
    """Derive delta, relative change and diagnosis from two period values."""
    delta = None
    pct = None
    if prior is not None and current is not None:
        delta = current - prior
        if prior != 0:
            pct = delta / abs(prior) * 100
    return ComparisonResult(
        prior_period=prior,
        current_period=current,
        delta=delta,
        relative_change_pct=pct,
        diagnosis=classify(prior, current),
        current_provisional_quarter=current_provisional_quarter,
    )


def chronological_points(store: TimeSeriesStore, indicator: str,
                         years: Iterable[int]) -> list[tuple[int, str, float]]:
    """Reported ``(year, quarter, value)`` triples of *years*, oldest first."""
    timeline = [(y, q) for y in sorted(set(years)) for q in QUARTERS]
    points = []
    for year, quarter in timeline:
        value = store.get(year, quarter, indicator)
        if value is not None:
            points.append((year, quarter, value))
    return points


class PeriodComparator:
    """Interface of a comparison strategy."""

    cadence: str = ""

    def compare(self, store: TimeSeriesStore, indicator: str,
                year_window: Iterable[int] | None = None) -> ComparisonResult:
        raise NotImplementedError


class QuarterlyComparator(PeriodComparator):
    """Compare the last two reported quarters in the year window."""

    cadence = CADENCE_QUARTERLY

    def compare(self, store: TimeSeriesStore, indicator: str,
                year_window: Iterable[int] | None = None) -> ComparisonResult:
        points = chronological_points(store, indicator, year_window or ())
        current = points[-1][2] if points else None
        prior = points[-2][2] if len(points) > 1 else None
        return make_result(prior, current)


class AnnualComparator(PeriodComparator):
    """Compare the latest year with data against the year before it.

    Each year is represented by its latest reported quarter.  When the two
    figures cover different shares of their years (progress fraction =
    quarter index / 4) the more complete one is scaled down to match:

      current provisional, prior final   -> prior   * cur_idx / 4
      current final, prior provisional   -> current * prior_idx / 4
      both provisional                   -> both to min(cur_idx, prior_idx)
      both final                         -> unchanged

    The year window is ignored; the annual view spans every year on record.
    """

    cadence = CADENCE_ANNUAL

    def compare(self, store: TimeSeriesStore, indicator: str,
                year_window: Iterable[int] | None = None) -> ComparisonResult:
        years = store.years(indicator)
        if not years:
            return make_result(None, None)
        current_year = years[-1]
        current = pick_latest(store, current_year, indicator)
        prior = pick_latest(store, current_year - 1, indicator)

        provisional_quarter = current.quarter if current and current.provisional else None
        if current is None:
            # unreachable: current_year comes from years with data
            return make_result(prior.value if prior else None, None)
        if prior is None:
            return make_result(None, current.value, provisional_quarter)

        cur_idx = quarter_index(current.quarter)
        prior_idx = quarter_index(prior.quarter)
        adj_current = current.value
        adj_prior = prior.value
        if current.provisional and not prior.provisional:
            adj_prior = prior.value * (cur_idx / 4)
        elif not current.provisional and prior.provisional:
            adj_current = current.value * (prior_idx / 4)
        elif current.provisional and prior.provisional:
            f = min(cur_idx, prior_idx)
            if cur_idx > f:
                adj_current = current.value * (f / cur_idx)
            if prior_idx > f:
                adj_prior = prior.value * (f / prior_idx)
        return make_result(adj_prior, adj_current, provisional_quarter)


_COMPARATORS: dict[str, PeriodComparator] = {
    CADENCE_QUARTERLY: QuarterlyComparator(),
    CADENCE_ANNUAL: AnnualComparator(),
}


def comparator_for(indicator: str) -> PeriodComparator:
    """Return the strategy matching *indicator*'s cadence."""
    return _COMPARATORS[IndicatorCatalog.cadence(indicator)]


def compare_quarterly(store: TimeSeriesStore, indicator: str,
                      year_window: Iterable[int]) -> ComparisonResult:
    return _COMPARATORS[CADENCE_QUARTERLY].compare(store, indicator, year_window)


def compare_annual(store: TimeSeriesStore, indicator: str) -> ComparisonResult:
    return _COMPARATORS[CADENCE_ANNUAL].compare(store, indicator)
