"""
Reference data endpoints.

GET /api/v1/reference/indicators  → configured indicators with cadence
GET /api/v1/reference/years       → years with data (optionally per indicator)
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dataset import get_dataset
from api.models import IndicatorOut, YearsOut
from pipeline.loader import Dataset
from utils.config import IndicatorCatalog

router = APIRouter(prefix="/reference", tags=["reference"])


@router.get("/indicators", response_model=list[IndicatorOut], summary="List indicators")
def list_indicators(dataset: Dataset = Depends(get_dataset)) -> list[dict]:
    """Return the indicators the dataset declares, in tab order."""
    return [
        {
            "key": key,
            "label": IndicatorCatalog.label(key),
            "cadence": IndicatorCatalog.cadence(key),
            "has_data": dataset.store.has_data(key),
        }
        for key in IndicatorCatalog.tab_order(dataset.series)
    ]


@router.get("/years", response_model=YearsOut, summary="List years with data")
def list_years(
    indicator: str | None = Query(None, description="Restrict to one indicator"),
    dataset: Dataset = Depends(get_dataset),
) -> dict:
    """Return the ascending years that have at least one reported quarter."""
    if indicator is None:
        return {"indicator": None, "years": dataset.store.all_years()}
    key = indicator.strip().upper()
    if key not in dataset.series:
        raise HTTPException(status_code=404, detail=f"Unknown indicator '{indicator}'")
    return {"indicator": key, "years": dataset.store.years(key)}
