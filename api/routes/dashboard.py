"""
Dashboard endpoints.

GET /api/v1/dashboard/summary            → comparison record for one indicator
GET /api/v1/dashboard/tabs               → every tab with its own diagnosis
GET /api/v1/dashboard/chart/{indicator}  → line or bar chart data
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from analytics.charts import build_chart
from analytics.summary import assemble_tabs, build_dashboard, default_active_indicator
from api.dataset import get_dataset, year_window
from api.models import ChartOut, DashboardSummaryOut, TabOut
from pipeline.loader import Dataset

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _require_indicator(dataset: Dataset, indicator: str) -> str:
    """Return the canonical key of *indicator* or raise 404."""
    key = indicator.strip().upper()
    if key not in dataset.series:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown indicator '{indicator}'. Available: {', '.join(dataset.series)}",
        )
    return key


@router.get("/summary", response_model=DashboardSummaryOut, summary="Dashboard summary row")
def dashboard_summary(
    indicator: str | None = Query(None, description="Indicator key (e.g. 'VAT'); defaults to the first enabled tab"),
    dataset: Dataset = Depends(get_dataset),
) -> dict:
    """Return the latest-vs-previous comparison for the active indicator.

    Quarterly indicators (PIT, VAT) compare their last two reported quarters
    within the current and previous calendar year.  The annual indicator
    (CIT) compares the latest year against the one before, scaling
    provisional figures to a common share of the year.
    """
    window = year_window(dataset)
    if indicator is None:
        tabs = assemble_tabs(dataset.store, dataset.series, window)
        active = default_active_indicator(tabs)
        if active is None:
            raise HTTPException(status_code=404, detail="Dataset declares no known indicators")
    else:
        active = _require_indicator(dataset, indicator)
    summary = build_dashboard(dataset.store, active, dataset.series, window,
                              currency=dataset.currency)
    return summary.to_dict()


@router.get("/tabs", response_model=list[TabOut], summary="Indicator tabs")
def dashboard_tabs(dataset: Dataset = Depends(get_dataset)) -> list[dict]:
    """Return every indicator tab in display order with its own diagnosis."""
    tabs = assemble_tabs(dataset.store, dataset.series, year_window(dataset))
    return [t.to_dict() for t in tabs]


@router.get("/chart/{indicator}", response_model=ChartOut, summary="Chart data")
def dashboard_chart(
    indicator: str = Path(..., description="Indicator key"),
    dataset: Dataset = Depends(get_dataset),
) -> dict:
    """Return line data (quarterly indicators) or bar data (annual indicator)."""
    key = _require_indicator(dataset, indicator)
    return build_chart(dataset.store, key, year_window(dataset))
