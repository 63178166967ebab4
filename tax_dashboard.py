"""
Tax Indicator Dashboard Report

Print the dashboard's comparison rows from the dataset JSON: every tab with
its diagnosis, then the summary row of the selected indicator (or of every
indicator when none is selected).

Usage:
    python tax_dashboard.py
    python tax_dashboard.py --indicator CIT
    python tax_dashboard.py --data data/tax_indicators.json --json
    python tax_dashboard.py --current-year 2025 -v
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from analytics.summary import DashboardSummary, assemble_tabs, build_dashboard
from analytics.quarters import default_year_window
from pipeline.loader import Dataset, DatasetError, load_dataset
from utils.config import AppConfig, IndicatorCatalog
from utils.formatting import format_cell, format_delta, format_percent

logger = logging.getLogger("tax_dashboard")

DIAGNOSIS_MARK = {"green": "[G]", "yellow": "[Y]", "red": "[R]"}


def build_report(dataset: Dataset, indicators: list[str],
                 current_year: int | None = None) -> list[DashboardSummary]:
    """Summaries for *indicators*, sharing one year window."""
    window = default_year_window(dataset.store, current_year)
    return [
        build_dashboard(dataset.store, key, dataset.series, window, currency=dataset.currency)
        for key in indicators
    ]


def show_tabs(dataset: Dataset, current_year: int | None = None) -> None:
    window = default_year_window(dataset.store, current_year)
    tabs = assemble_tabs(dataset.store, dataset.series, window)
    print("=" * 65)
    print("  TAX INDICATORS")
    print("=" * 65)
    for tab in tabs:
        state = "" if tab.enabled else "  (no data)"
        print(f"  {tab.indicator:<8} {DIAGNOSIS_MARK[tab.diagnosis.value]}{state}")


def show_summary(summary: DashboardSummary) -> None:
    c = summary.comparison
    last_header, this_header = summary.headers
    print(f"\n  {summary.indicator} ({summary.cadence})")
    print(f"  {last_header:>18} {this_header:>18} {'Change':>22} {'Change %':>9}  Diagnose")
    print(f"  {'-'*18} {'-'*18} {'-'*22} {'-'*9}  {'-'*8}")
    print(f"  {format_cell(c.prior_period):>18} {format_cell(c.current_period):>18} "
          f"{format_delta(c.delta, c.prior_period):>22} {format_percent(c.relative_change_pct):>9}  "
          f"{DIAGNOSIS_MARK[c.diagnosis.value]}")
    if summary.axis_years:
        years = ", ".join(str(y) for y in summary.axis_years)
        print(f"  Chart years: {years}")
    if summary.currency:
        print(f"  Amounts in {summary.currency}")


def main() -> None:
    cfg = AppConfig.from_env()
    parser = argparse.ArgumentParser(
        description="Print tax indicator comparisons from the dashboard dataset.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--data", type=Path, default=cfg.data_path,
                        help=f"Dataset JSON (default: {cfg.data_path})")
    parser.add_argument("--indicator", default=None,
                        help="Indicator key (PIT, VAT, CIT); default: all")
    parser.add_argument("--current-year", type=int, default=cfg.current_year,
                        help="Year treated as 'this year' (default: latest in data)")
    parser.add_argument("--json", action="store_true",
                        help="Emit the summaries as JSON")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    try:
        dataset = load_dataset(args.data)
    except DatasetError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.indicator:
        key = args.indicator.strip().upper()
        if key not in dataset.series:
            print(f"ERROR: unknown indicator {args.indicator!r}; "
                  f"available: {', '.join(dataset.series)}", file=sys.stderr)
            sys.exit(2)
        indicators = [key]
    else:
        indicators = IndicatorCatalog.tab_order(dataset.series)

    summaries = build_report(dataset, indicators, args.current_year)
    logger.debug("Built %d summaries from %s", len(summaries), args.data)

    if args.json:
        print(json.dumps([s.to_dict() for s in summaries], indent=2, ensure_ascii=False))
        return

    show_tabs(dataset, args.current_year)
    for summary in summaries:
        show_summary(summary)


if __name__ == "__main__":
    main()
