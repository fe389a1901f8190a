"""Upstream data provider configuration."""

from src.providers.defillama import TRACKED_POOLS, DEFILLAMA_API_URL
from src.providers.fred import FRED_SERIES, FRED_API_URL

__all__ = [
    "TRACKED_POOLS",
    "DEFILLAMA_API_URL",
    "FRED_SERIES",
    "FRED_API_URL",
]
