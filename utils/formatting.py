"""Output formatting utilities for the tax indicator dashboard.

Provides reusable functions for:
- Formatting amounts the Vietnamese way (dot thousands, comma decimals)
- Percentages and signed deltas with direction arrows
- Summary table column headers
"""

import math
from typing import Optional

PLACEHOLDER = "—"
ARROW_UP = "▲"
ARROW_DOWN = "▼"


def format_amount(value: Optional[float], currency: str = "",
                  max_decimals: int = 3) -> str:
    """Format an amount with Vietnamese separators; negatives in parentheses.

    Args:
        value: Amount (can be None or NaN)
        currency: Optional suffix such as "bn VND"
        max_decimals: Fraction digits kept before trailing zeros are dropped

    Returns:
        Formatted string, or "" when there is nothing to show

    Examples:
        format_amount(1234567) -> "1.234.567"
        format_amount(-1234.5) -> "(1.234,5)"
        format_amount(12, "bn VND") -> "12 bn VND"
        format_amount(None) -> ""
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    text = f"{abs(value):,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    base = text.replace(",", "_").replace(".", ",").replace("_", ".")
    suffix = f" {currency}" if currency else ""
    return f"({base}{suffix})" if value < 0 else f"{base}{suffix}"


def format_percent(value: Optional[float], precision: int = 1) -> str:
    """Format a percentage for display.

    Examples:
        format_percent(42.5) -> "42.5%"
        format_percent(None) -> "—"
    """
    if value is None:
        return PLACEHOLDER
    return f"{value:.{precision}f}%"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def format_delta(delta: Optional[float], prior: Optional[float]) -> str:
    """Render a summary-row delta: magnitude, rounded percentage and arrow.

    Examples:
        format_delta(-50, 100) -> "50 (50%) ▼"
        format_delta(0, 100) -> "0 (0%)"
        format_delta(None, 100) -> "—"
    """
    if delta is None:
        return PLACEHOLDER
    text = format_amount(abs(delta))
    if prior:
        text += f" ({round_half_up(abs(delta / prior * 100))}%)"
    if delta > 0:
        text += f" {ARROW_UP}"
    elif delta < 0:
        text += f" {ARROW_DOWN}"
    return text


def format_cell(value: Optional[float], currency: str = "") -> str:
    """Summary table cell: formatted amount or the placeholder."""
    if value is None:
        return PLACEHOLDER
    return format_amount(value, currency)


def summary_headers(annual: bool, provisional_quarter: Optional[str] = None) -> tuple:
    """Column headers of the summary row ("Last ..." and "This ...").

    The annual view compares years; when the current year is only partly
    reported both headers carry its quarter, e.g. "This year (Q2)".
    """
    if not annual:
        return ("Last quarter", "This quarter")
    if provisional_quarter:
        return (f"Last year ({provisional_quarter})", f"This year ({provisional_quarter})")
    return ("Last year", "This year")
