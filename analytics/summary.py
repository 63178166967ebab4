"""
Dashboard summary assembly.

Everything here is a pure function of the store and the explicit arguments
(active indicator, year window): there is no module-level drawing state, so
calling any of these twice with the same inputs gives equal results.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from analytics.comparison import ComparisonResult, comparator_for
from analytics.diagnosis import Diagnosis
from analytics.quarters import default_year_window, select_axis_years
from analytics.store import TimeSeriesStore
from utils.config import IndicatorCatalog
from utils.formatting import summary_headers


@dataclass(frozen=True)
class TabStatus:
    """One indicator tab: whether it can be selected and how it is coloured."""

    indicator: str
    enabled: bool
    diagnosis: Diagnosis

    def to_dict(self) -> dict[str, Any]:
        return {
            "indicator": self.indicator,
            "enabled": self.enabled,
            "diagnosis": self.diagnosis.value,
        }


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the renderer needs for one redraw of the active indicator."""

    indicator: str
    cadence: str
    comparison: ComparisonResult
    headers: tuple[str, str]
    tabs: tuple[TabStatus, ...] = ()
    axis_years: tuple[int, ...] = ()
    year_window: tuple[int, ...] = ()
    currency: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "indicator": self.indicator,
            "cadence": self.cadence,
            "comparison": self.comparison.to_dict(),
            "headers": list(self.headers),
            "tabs": [t.to_dict() for t in self.tabs],
            "axis_years": list(self.axis_years),
            "year_window": list(self.year_window),
            "currency": self.currency,
        }


def assemble(store: TimeSeriesStore, active_indicator: str,
             year_window: Iterable[int] | None = None) -> ComparisonResult:
    """Compare the latest two periods of *active_indicator*.

    Dispatches on cadence; the result carries its diagnosis.  *year_window*
    only matters for quarterly indicators and defaults to the latest two
    years in the store.
    """
    if year_window is None:
        year_window = default_year_window(store)
    return comparator_for(active_indicator).compare(store, active_indicator, list(year_window))


def assemble_tabs(store: TimeSeriesStore, indicators: Iterable[str],
                  year_window: Iterable[int] | None = None) -> list[TabStatus]:
    """Diagnose every tab independently, in display order."""
    window = list(year_window) if year_window is not None else default_year_window(store)
    return [
        TabStatus(
            indicator=key,
            enabled=store.has_data(key),
            diagnosis=assemble(store, key, window).diagnosis,
        )
        for key in IndicatorCatalog.tab_order(list(indicators))
    ]


def default_active_indicator(tabs: Sequence[TabStatus]) -> str | None:
    """First enabled tab, else the first tab, else ``None``."""
    for tab in tabs:
        if tab.enabled:
            return tab.indicator
    return tabs[0].indicator if tabs else None


def build_dashboard(store: TimeSeriesStore, active_indicator: str,
                    indicators: Iterable[str],
                    year_window: Iterable[int] | None = None,
                    currency: str = "") -> DashboardSummary:
    """Assemble the full summary record for *active_indicator*."""
    window = list(year_window) if year_window is not None else default_year_window(store)
    comparison = assemble(store, active_indicator, window)
    annual = IndicatorCatalog.is_annual(active_indicator)
    return DashboardSummary(
        indicator=active_indicator,
        cadence=IndicatorCatalog.cadence(active_indicator),
        comparison=comparison,
        headers=summary_headers(annual, comparison.current_provisional_quarter),
        tabs=tuple(assemble_tabs(store, indicators, window)),
        axis_years=tuple(select_axis_years(store, active_indicator)) if annual else (),
        year_window=() if annual else tuple(window),
        currency=currency,
    )
