"""
Pydantic response models for the API.

Optional fields default to None so that comparisons with a missing period
are still valid responses: absent periods are ``null``, never zero.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

DiagnosisLevel = Literal["green", "yellow", "red"]


# ── Summary models ───────────────────────────────────────────────────────────

class ComparisonOut(BaseModel):
    """Latest-vs-previous comparison for one indicator."""
    prior_period: float | None = Field(None, description="Previous period value (scaled for the annual indicator)", examples=[100.0])
    current_period: float | None = Field(None, description="Latest period value", examples=[50.0])
    delta: float | None = Field(None, description="current_period - prior_period; null unless both are present", examples=[-50.0])
    relative_change_pct: float | None = Field(None, description="Signed change relative to |prior_period|, in percent", examples=[-50.0])
    diagnosis: DiagnosisLevel = Field(..., description="Traffic-light diagnosis; yellow when no comparison is possible", examples=["red"])
    current_provisional_quarter: str | None = Field(None, description="Quarter of a provisional current-year figure (annual indicator only)", examples=["Q2"])


class TabOut(BaseModel):
    """An indicator tab and its own diagnosis."""
    indicator: str = Field(..., description="Indicator key", examples=["VAT"])
    enabled: bool = Field(..., description="False when the indicator has no data")
    diagnosis: DiagnosisLevel = Field(..., description="Diagnosis used to colour the tab", examples=["green"])


class DashboardSummaryOut(BaseModel):
    """Response body for GET /api/v1/dashboard/summary."""
    indicator: str = Field(..., description="Active indicator key", examples=["CIT"])
    cadence: Literal["quarterly", "annual"] = Field(..., description="Comparison strategy used")
    comparison: ComparisonOut
    headers: list[str] = Field(..., description="Summary column headers", examples=[["Last year (Q2)", "This year (Q2)"]])
    tabs: list[TabOut] = Field(..., description="All tabs in display order")
    axis_years: list[int] = Field(..., description="Chart years of the annual indicator", examples=[[2022, 2023, 2024, 2025]])
    year_window: list[int] = Field(..., description="Years compared by a quarterly indicator", examples=[[2024, 2025]])
    currency: str = Field("", description="Currency label from the dataset", examples=["bn VND"])


# ── Chart models ─────────────────────────────────────────────────────────────

class ChartPointOut(BaseModel):
    quarter: str = Field(..., examples=["Q1"])
    value: float | None = None


class ChartLineOut(BaseModel):
    """One year of a quarterly indicator."""
    year: int = Field(..., examples=[2025])
    latest: bool
    points: list[ChartPointOut]


class ChartBarOut(BaseModel):
    """One year of the annual indicator, taken from its latest reported quarter."""
    year: int = Field(..., examples=[2025])
    value: float
    quarter: str = Field(..., examples=["Q2"])
    provisional: bool = Field(..., description="True when the quarter is not Q4")
    latest: bool


class ChartOut(BaseModel):
    """Response body for GET /api/v1/dashboard/chart/{indicator}."""
    indicator: str
    kind: Literal["line", "bar"]
    categories: list[str] = Field(..., description="x-axis categories (quarters or years)")
    legend: list[str]
    lines: list[ChartLineOut] | None = None
    bars: list[ChartBarOut] | None = None


# ── Reference models ─────────────────────────────────────────────────────────

class IndicatorOut(BaseModel):
    """A configured indicator."""
    key: str = Field(..., examples=["PIT"])
    label: str | None = Field(None, examples=["Personal income tax"])
    cadence: Literal["quarterly", "annual"]
    has_data: bool


class YearsOut(BaseModel):
    indicator: str | None = None
    years: list[int]


# ── Error model ──────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error category", examples=["Bad request"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[400])
