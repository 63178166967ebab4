"""
Dataset loader -- JSON file to validated rows and a TimeSeriesStore.

Expected file layout::

    {
      "meta": {"series": ["PIT", "VAT", "CIT"], "currency": "bn VND"},
      "data": [
        {"year": 2024, "quarter": "Q1", "PIT": 12.5, "VAT": null, "CIT": 3.0},
        ...
      ]
    }

Each data record fans out into one row per series key.  Structural problems
(missing file, invalid JSON, wrong top-level shape) raise DatasetError.
Row-level problems never abort the load: the row is skipped and recorded in
the LoadReport, so the store only ever sees well-formed points.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from analytics.store import DataPoint, TimeSeriesStore
from pipeline.logging import LoadReport
from utils.config import QUARTERS, IndicatorCatalog

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """The dataset file is missing or not shaped like a dashboard dataset."""


@dataclass
class Dataset:
    """A loaded dataset: the store plus what the meta block declared."""

    store: TimeSeriesStore
    series: list[str]
    currency: str = ""
    report: LoadReport = field(default_factory=LoadReport)


def _parse_year(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def _parse_quarter(raw: Any) -> str | None:
    if raw is None:
        return None
    quarter = str(raw).strip().upper()
    return quarter if quarter in QUARTERS else None


def _parse_value(raw: Any) -> float | None:
    """Return a finite float, or raise ValueError for non-numeric input."""
    if isinstance(raw, bool):
        raise ValueError(f"boolean is not a number: {raw!r}")
    try:
        if isinstance(raw, (int, float)):
            value = float(raw)
        elif isinstance(raw, str):
            value = float(raw.strip())
        else:
            raise ValueError(f"not a number: {raw!r}")
    except OverflowError:
        raise ValueError("number too large to represent") from None
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {raw!r}")
    return value


def _resolve_series(meta: dict, report: LoadReport) -> tuple[list[str], list[str]]:
    """Split the declared series into known indicators and unknown keys."""
    declared = meta.get("series") or list(IndicatorCatalog.DEFAULT_SERIES)
    if not isinstance(declared, list):
        raise DatasetError("meta.series must be a list of indicator keys")
    known = [str(k) for k in declared if IndicatorCatalog.is_known(str(k))]
    unknown = [str(k) for k in declared if not IndicatorCatalog.is_known(str(k))]
    if unknown:
        logger.warning("Ignoring unknown series keys: %s", ", ".join(unknown))
    report.series = known
    return known, unknown


def parse_rows(payload: Any, source: str = "") -> tuple[list[DataPoint], LoadReport]:
    """Validate a decoded dataset payload and flatten it into rows.

    Rows whose value is null are not returned (they mean "not yet
    reported").  A present zero is kept.

    Raises:
        DatasetError: If the payload is not an object or ``data`` is not a list.
    """
    if not isinstance(payload, dict):
        raise DatasetError(f"{source or 'dataset'}: top level must be a JSON object")
    meta = payload.get("meta") or {}
    if not isinstance(meta, dict):
        raise DatasetError(f"{source or 'dataset'}: meta must be a JSON object")
    records = payload.get("data") or []
    if not isinstance(records, list):
        raise DatasetError(f"{source or 'dataset'}: data must be a list")

    report = LoadReport(source=source, currency=str(meta.get("currency") or ""))
    series, unknown = _resolve_series(meta, report)
    rows: list[DataPoint] = []
    seen: set[tuple[int, str, str]] = set()

    for pos, record in enumerate(records):
        report.records_read += 1
        if not isinstance(record, dict):
            report.add_skip("malformed_record", "data entry is not an object", item=f"#{pos}")
            continue
        year = _parse_year(record.get("year"))
        if year is None:
            report.add_skip("malformed_year", f"bad year {record.get('year')!r}", item=f"#{pos}")
            continue
        quarter = _parse_quarter(record.get("quarter"))
        if quarter is None:
            report.add_skip("malformed_quarter", f"bad quarter {record.get('quarter')!r}",
                            item=f"{year} #{pos}")
            continue

        for key in unknown:
            if record.get(key) is not None:
                report.add_skip("unknown_indicator", "series key is not a known indicator",
                                item=f"{year}-{quarter}-{key}")

        for key in series:
            item = f"{year}-{quarter}-{key}"
            raw = record.get(key)
            if raw is None:
                report.add_skip("null_value", "not yet reported", item=item)
                continue
            try:
                value = _parse_value(raw)
            except ValueError as exc:
                report.add_skip("malformed_value", str(exc), item=item)
                continue
            if (year, quarter, key) in seen:
                report.duplicates += 1
                logger.debug("Duplicate point %s; later value wins", item)
            seen.add((year, quarter, key))
            rows.append(DataPoint(year=year, quarter=quarter, indicator=key, value=value))
            report.rows_accepted += 1

    return rows, report


def parse_dataset(payload: Any, source: str = "") -> Dataset:
    """Build a Dataset from an already-decoded JSON payload."""
    rows, report = parse_rows(payload, source)
    if report.problem_count():
        logger.warning("Skipped malformed rows in %s: %s", source or "dataset",
                       report.console_summary())
    logger.info("Loaded %s: %s", source or "dataset", report.console_summary())
    return Dataset(
        store=TimeSeriesStore.build(rows),
        series=list(report.series),
        currency=report.currency,
        report=report,
    )


def load_dataset(path: Path | str) -> Dataset:
    """Read and validate the dataset file at *path*.

    Raises:
        DatasetError: If the file is missing, unreadable or not valid JSON,
            or its top-level shape is wrong.
    """
    path = Path(path)
    if not path.exists():
        raise DatasetError(f"Dataset not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as exc:
        raise DatasetError(f"{path}: invalid JSON ({exc})") from exc
    except ValueError as exc:
        # e.g. an integer literal beyond the interpreter's digit limit
        raise DatasetError(f"{path}: unreadable content ({exc})") from exc
    except OSError as exc:
        raise DatasetError(f"{path}: cannot read ({exc})") from exc
    return parse_dataset(payload, source=str(path))
