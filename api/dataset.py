"""
Dataset management for the API.

Provides a get_dataset() dependency that hands every request the same
read-only Dataset.  The file is loaded once, on first use, from the path in
the APP_DATA_PATH environment variable (default: data/tax_indicators.json);
afterwards requests only read the in-memory store.

A missing or malformed file surfaces as HTTP 503 with a friendly message
instead of a traceback.
"""

import logging
import threading
from pathlib import Path

from fastapi import HTTPException

from analytics.quarters import default_year_window
from pipeline.loader import Dataset, DatasetError, load_dataset
from utils.config import AppConfig

logger = logging.getLogger(__name__)

_cfg = AppConfig.from_env()
_DATA_PATH: Path = _cfg.data_path
_CURRENT_YEAR: int | None = _cfg.current_year

_dataset: Dataset | None = None
_dataset_lock = threading.Lock()


def get_data_path() -> Path:
    """Return the configured dataset path."""
    return _DATA_PATH


def configure(data_path: Path | None = None, current_year: int | None = None) -> None:
    """Point the API at another dataset and drop anything already loaded.

    A *current_year* of ``None`` falls back to APP_CURRENT_YEAR (or the
    latest year in the data when that is unset).
    """
    global _DATA_PATH, _CURRENT_YEAR
    if data_path is not None:
        _DATA_PATH = Path(data_path)
    _CURRENT_YEAR = current_year if current_year is not None else AppConfig.from_env().current_year
    reset_dataset()


def reset_dataset() -> None:
    """Forget the loaded dataset; the next request reloads it."""
    global _dataset
    with _dataset_lock:
        _dataset = None


def load() -> Dataset:
    """Return the singleton Dataset, loading it if needed.

    Raises:
        DatasetError: If the file cannot be loaded.
    """
    global _dataset
    if _dataset is None:
        with _dataset_lock:
            if _dataset is None:
                _dataset = load_dataset(_DATA_PATH)
    return _dataset


def year_window(dataset: Dataset) -> list[int]:
    """The two-year window of the quarterly indicators for *dataset*."""
    return default_year_window(dataset.store, _CURRENT_YEAR)


def get_dataset() -> Dataset:
    """FastAPI dependency: return the loaded Dataset.

    Usage in a route::

        from api.dataset import get_dataset
        from fastapi import Depends

        @router.get("/example")
        def example(dataset=Depends(get_dataset)):
            ...
    """
    try:
        return load()
    except DatasetError as exc:
        logger.error("Dataset unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc
