"""Shared utilities for the tax indicator dashboard."""

# Configuration
from utils.config import (
    AppConfig,
    IndicatorCatalog,
    QUARTERS,
    CADENCE_ANNUAL,
    CADENCE_QUARTERLY,
)

# Formatting utilities
from utils.formatting import (
    format_amount,
    format_cell,
    format_delta,
    format_percent,
    summary_headers,
)

__all__ = [
    # Config
    "AppConfig",
    "IndicatorCatalog",
    "QUARTERS",
    "CADENCE_ANNUAL",
    "CADENCE_QUARTERLY",
    # Formatting
    "format_amount",
    "format_cell",
    "format_delta",
    "format_percent",
    "summary_headers",
]
