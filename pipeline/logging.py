"""
Load accounting -- structured skip records for the dataset loader.

Provides:
  - LoadReport: lightweight dataclass that captures what a load accepted,
    what it skipped, and why.
  - SkipRecord: single skip event with a category and detail string.

Usage inside pipeline/loader.py::

    report = LoadReport(source=str(path))
    report.add_skip("unknown_indicator", "series key not recognised", item="GST")
    report.rows_accepted += 1
    logger.warning("Skipped rows: %s", report.console_summary())

Skip categories (for SkipRecord.category):
    null_value          : value not yet reported (expected, not an error)
    malformed_record    : data entry is not a JSON object
    malformed_year      : year missing or not an integer
    malformed_quarter   : quarter not one of Q1..Q4
    malformed_value     : value present but not numeric
    unknown_indicator   : series key that is not a known indicator
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Categories that indicate bad input rather than a normal gap in the data
PROBLEM_CATEGORIES = frozenset({
    "malformed_record", "malformed_year", "malformed_quarter", "malformed_value",
    "unknown_indicator",
})


# ── Data structures ───────────────────────────────────────────────────────────


@dataclass
class SkipRecord:
    """One row that was skipped, with a machine-readable category."""

    category: str          # e.g. "null_value", "malformed_value"
    detail: str            # human-readable explanation
    item: str = ""         # optional: year/quarter/indicator of the row

    def to_dict(self) -> dict[str, str]:
        d: dict[str, str] = {"category": self.category, "detail": self.detail}
        if self.item:
            d["item"] = self.item
        return d


@dataclass
class LoadReport:
    """Structured summary of one dataset load."""

    source: str = ""
    series: list[str] = field(default_factory=list)
    currency: str = ""
    records_read: int = 0
    rows_accepted: int = 0
    duplicates: int = 0
    skips: list[SkipRecord] = field(default_factory=list)

    # ── helpers ───────────────────────────────────────────────────────────

    @property
    def rows_skipped(self) -> int:
        return len(self.skips)

    def add_skip(self, category: str, detail: str, item: str = "") -> None:
        self.skips.append(SkipRecord(category=category, detail=detail, item=item))

    def skip_counts_by_category(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for s in self.skips:
            counts[s.category] = counts.get(s.category, 0) + 1
        return counts

    def problem_count(self) -> int:
        """Skips caused by malformed input (null values excluded)."""
        return sum(1 for s in self.skips if s.category in PROBLEM_CATEGORIES)

    def console_summary(self) -> str:
        """One-line summary suitable for the terminal or a log record."""
        parts: list[str] = []
        if self.records_read:
            parts.append(f"{self.records_read:,} records")
        parts.append(f"{self.rows_accepted:,} points")
        if self.skips:
            cats = self.skip_counts_by_category()
            skip_parts = [f"{v} {k.replace('_', ' ')}" for k, v in sorted(cats.items())]
            parts.append(f"{self.rows_skipped:,} skipped ({', '.join(skip_parts)})")
        if self.duplicates:
            parts.append(f"{self.duplicates:,} duplicates overwritten")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "source": self.source,
            "series": list(self.series),
            "currency": self.currency,
            "records_read": self.records_read,
            "rows_accepted": self.rows_accepted,
            "rows_skipped": self.rows_skipped,
            "duplicates": self.duplicates,
            "skip_counts": self.skip_counts_by_category(),
        }
        problems = [s.to_dict() for s in self.skips if s.category in PROBLEM_CATEGORIES]
        if problems:
            d["problems"] = problems[:20]
        return d
