"""
Sparse quarterly time-series store.

Raw rows arrive as ``DataPoint`` records (or plain dicts with the same keys).
Only reported points are kept: a row whose value is ``None`` produces no key
at all, so a lookup for it answers ``None`` exactly like a quarter that was
never listed.  Zero is a reported value and is kept.

Usage::

    from analytics.store import TimeSeriesStore

    store = TimeSeriesStore.build(rows)
    store.get(2025, "Q2", "CIT")     # -> 120.5 or None
    store.years("CIT")               # -> [2022, 2023, 2024, 2025]
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from utils.config import QUARTERS


def quarter_index(quarter: str) -> int:
    """Return 1..4 for Q1..Q4.

    Raises:
        ValueError: If *quarter* is not one of Q1..Q4.
    """
    try:
        return QUARTERS.index(quarter) + 1
    except ValueError:
        raise ValueError(f"Unknown quarter: {quarter!r}") from None


@dataclass(frozen=True)
class DataPoint:
    """One reported (or not yet reported) figure."""

    year: int
    quarter: str
    indicator: str
    value: float | None = None


def _as_point(row: DataPoint | Mapping[str, Any]) -> DataPoint:
    if isinstance(row, DataPoint):
        return row
    return DataPoint(
        year=row["year"],
        quarter=row["quarter"],
        indicator=row["indicator"],
        value=row.get("value"),
    )


class TimeSeriesStore:
    """Read-only lookup keyed by ``(year, quarter, indicator)``."""

    __slots__ = ("_values", "_years")

    def __init__(self, values: Mapping[tuple[int, str, str], float] | None = None) -> None:
        self._values: dict[tuple[int, str, str], float] = dict(values or {})
        years: dict[str, set[int]] = {}
        for year, _quarter, indicator in self._values:
            years.setdefault(indicator, set()).add(year)
        self._years: dict[str, tuple[int, ...]] = {
            k: tuple(sorted(v)) for k, v in years.items()
        }

    @classmethod
    def build(cls, rows: Iterable[DataPoint | Mapping[str, Any]]) -> "TimeSeriesStore":
        """Build a store from rows, dropping those whose value is absent.

        Rows are expected to be validated already (see pipeline.loader).
        When the same key appears twice the later row wins.
        """
        values: dict[tuple[int, str, str], float] = {}
        for row in rows:
            point = _as_point(row)
            if point.value is None:
                continue
            values[(point.year, point.quarter, point.indicator)] = point.value
        return cls(values)

    def get(self, year: int, quarter: str, indicator: str) -> float | None:
        """Return the reported value, or ``None`` when nothing was reported."""
        return self._values.get((year, quarter, indicator))

    def years(self, indicator: str) -> list[int]:
        """Ascending unique years with at least one reported quarter."""
        return list(self._years.get(indicator, ()))

    def all_years(self) -> list[int]:
        """Ascending unique years with data for any indicator."""
        return sorted({y for ys in self._years.values() for y in ys})

    def indicators(self) -> list[str]:
        """Indicators with at least one reported point, sorted by key."""
        return sorted(self._years)

    def has_data(self, indicator: str) -> bool:
        return indicator in self._years

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TimeSeriesStore(points={len(self._values)}, indicators={self.indicators()})"
