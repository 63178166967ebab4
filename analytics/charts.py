"""
Chart data for the dashboard renderer.

Quarterly indicators draw one line per year of the window (newest first);
the annual indicator draws one bar per axis year, each bar being the year's
latest reported quarter.  Scales, colours and layout belong to the renderer.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from analytics.quarters import pick_latest, select_axis_years
from analytics.store import TimeSeriesStore
from utils.config import QUARTERS, IndicatorCatalog


def _quarterly_chart(store: TimeSeriesStore, indicator: str,
                     year_window: Iterable[int]) -> dict[str, Any]:
    years = sorted(set(year_window), reverse=True)
    latest = years[0] if years else None
    lines = []
    for year in years:
        lines.append({
            "year": year,
            "latest": year == latest,
            "points": [
                {"quarter": q, "value": store.get(year, q, indicator)}
                for q in QUARTERS
            ],
        })
    legend = [
        f"This year ({line['year']})" if line["latest"] else f"Last year ({line['year']})"
        for line in lines
    ]
    return {"kind": "line", "categories": list(QUARTERS), "lines": lines, "legend": legend}


def _annual_chart(store: TimeSeriesStore, indicator: str) -> dict[str, Any]:
    axis_years = select_axis_years(store, indicator)
    latest = axis_years[-1] if axis_years else None
    bars = []
    for year in axis_years:
        picked = pick_latest(store, year, indicator)
        if picked is None:
            continue
        bars.append({
            "year": year,
            "value": picked.value,
            "quarter": picked.quarter,
            "provisional": picked.provisional,
            "latest": year == latest,
        })

    legend: list[str] = []
    if latest is not None:
        latest_bar = next((b for b in bars if b["latest"]), None)
        prov = " (Provisional)" if latest_bar and latest_bar["provisional"] else ""
        legend.append(f"This year{prov}")
        if any(not b["latest"] for b in bars):
            legend.append("Last recent years" if len(bars) > 2 else "Last year")
    return {
        "kind": "bar",
        "categories": [str(b["year"]) for b in bars],
        "bars": bars,
        "legend": legend,
    }


def build_chart(store: TimeSeriesStore, indicator: str,
                year_window: Iterable[int]) -> dict[str, Any]:
    """Return the line or bar chart payload for *indicator*."""
    if IndicatorCatalog.is_annual(indicator):
        chart = _annual_chart(store, indicator)
    else:
        chart = _quarterly_chart(store, indicator, year_window)
    chart["indicator"] = indicator
    return chart
