"""Configuration management for the tax indicator dashboard.

Provides:
- AppConfig, populated from environment variables
- IndicatorCatalog, the known indicators, their cadence and tab order
"""

import os
from pathlib import Path
from typing import Optional


# ── Indicator constants ──────────────────────────────────────────────────────

QUARTERS = ("Q1", "Q2", "Q3", "Q4")

CADENCE_QUARTERLY = "quarterly"
CADENCE_ANNUAL = "annual"

# Relative change thresholds (percent) for the traffic-light diagnosis.
GREEN_BELOW_PCT = 10.0
YELLOW_BELOW_PCT = 20.0

# The annual chart shows at most this many years.
AXIS_YEAR_LIMIT = 4


class IndicatorCatalog:
    """Known tax indicators and how the dashboard treats each of them."""

    INDICATORS = {
        "PIT": "Personal income tax",
        "VAT": "Value added tax",
        "CIT": "Corporate income tax",
    }

    CADENCE = {
        "PIT": CADENCE_QUARTERLY,
        "VAT": CADENCE_QUARTERLY,
        "CIT": CADENCE_ANNUAL,
    }

    # Series listed when the dataset's meta block does not name any
    DEFAULT_SERIES = ("PIT", "VAT", "CIT")

    TAB_ORDER = ("VAT", "PIT", "CIT")

    @classmethod
    def is_known(cls, indicator: str) -> bool:
        return indicator in cls.INDICATORS

    @classmethod
    def cadence(cls, indicator: str) -> str:
        """Return the cadence of *indicator*; unknown keys are quarterly."""
        return cls.CADENCE.get(indicator, CADENCE_QUARTERLY)

    @classmethod
    def is_annual(cls, indicator: str) -> bool:
        return cls.cadence(indicator) == CADENCE_ANNUAL

    @classmethod
    def label(cls, indicator: str) -> Optional[str]:
        return cls.INDICATORS.get(indicator)

    @classmethod
    def tab_order(cls, series) -> list[str]:
        """Return the tab keys for a dataset's *series*, in display order."""
        return [k for k in cls.TAB_ORDER if k in series]


class AppConfig:
    """Application-level configuration loaded from environment variables.

    All env vars have sensible defaults so the application works out of the
    box without any configuration.

    Environment variables:
        APP_DATA_PATH: Path to the dataset JSON (default: data/tax_indicators.json)
        APP_CURRENT_YEAR: Calendar year treated as "this year" for the
            quarterly comparison window (default: latest year in the data)
        APP_PORT: API server port (default: 8000)
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
    """

    def __init__(self) -> None:
        self.data_path = Path(os.getenv("APP_DATA_PATH", "data/tax_indicators.json"))
        raw_year = os.getenv("APP_CURRENT_YEAR", "").strip()
        self.current_year: Optional[int] = int(raw_year) if raw_year else None
        self.api_port = int(os.getenv("APP_PORT", "8000"))
        self.api_host = os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = os.getenv("APP_LOG_FORMAT", "text")
        raw_origins = os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*"
            else [o.strip() for o in raw_origins.split(",") if o.strip()]
        )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
