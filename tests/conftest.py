"""
Pytest fixtures for the tax indicator dashboard tests.

Provides reusable fixtures: a sample dataset payload shaped like the
dashboard JSON, the rows and store built from it, and the same payload
written to a temporary file for loader/API/CLI tests.
"""

import json
import sys
from pathlib import Path

import pytest

_PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from analytics.store import DataPoint, TimeSeriesStore  # noqa: E402


# ── Helpers ───────────────────────────────────────────────────────────────────

def _make_store(points: dict) -> TimeSeriesStore:
    """Build a store from ``{(year, quarter, indicator): value}``."""
    return TimeSeriesStore.build(
        DataPoint(year=y, quarter=q, indicator=k, value=v)
        for (y, q, k), v in points.items()
    )


def _write_dataset(path: Path, payload: dict) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture()
def sample_payload() -> dict:
    """Two full years of PIT/VAT plus CIT reported through 2025 Q2."""
    return {
        "meta": {"series": ["PIT", "VAT", "CIT"], "currency": "bn VND"},
        "data": [
            {"year": 2023, "quarter": "Q4", "PIT": 90.0, "VAT": 300.0, "CIT": 180.0},
            {"year": 2024, "quarter": "Q1", "PIT": 100.0, "VAT": 310.0, "CIT": None},
            {"year": 2024, "quarter": "Q2", "PIT": 105.0, "VAT": 320.0, "CIT": None},
            {"year": 2024, "quarter": "Q3", "PIT": 110.0, "VAT": 330.0, "CIT": None},
            {"year": 2024, "quarter": "Q4", "PIT": 120.0, "VAT": 340.0, "CIT": 200.0},
            {"year": 2025, "quarter": "Q1", "PIT": 125.0, "VAT": 350.0, "CIT": 30.0},
            {"year": 2025, "quarter": "Q2", "PIT": 150.0, "VAT": 355.0, "CIT": 50.0},
            {"year": 2025, "quarter": "Q3", "PIT": None, "VAT": None, "CIT": None},
        ],
    }


@pytest.fixture()
def sample_store(sample_payload) -> TimeSeriesStore:
    rows = []
    for record in sample_payload["data"]:
        for key in sample_payload["meta"]["series"]:
            rows.append({
                "year": record["year"],
                "quarter": record["quarter"],
                "indicator": key,
                "value": record[key],
            })
    return TimeSeriesStore.build(rows)


@pytest.fixture()
def dataset_file(tmp_path, sample_payload) -> Path:
    return _write_dataset(tmp_path / "tax_indicators.json", sample_payload)


@pytest.fixture()
def make_store():
    """Factory fixture: ``make_store({(2025, "Q1", "PIT"): 1.0, ...})``."""
    return _make_store


@pytest.fixture()
def write_dataset():
    """Factory fixture: ``write_dataset(path, payload) -> path``."""
    return _write_dataset
