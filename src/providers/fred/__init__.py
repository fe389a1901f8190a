"""FRED provider configuration."""

from src.providers.fred.config import (
    FED_FUNDS_SERIES_ID,
    FRED_API_RATE_LIMIT,
    FRED_API_RATE_WINDOW,
    FRED_API_URL,
    FRED_SERIES,
    TBILL_3M_SERIES_ID,
)

__all__ = [
    "FED_FUNDS_SERIES_ID",
    "FRED_API_RATE_LIMIT",
    "FRED_API_RATE_WINDOW",
    "FRED_API_URL",
    "FRED_SERIES",
    "TBILL_3M_SERIES_ID",
]
