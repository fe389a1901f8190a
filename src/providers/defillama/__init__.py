"""DefiLlama provider configuration."""

from src.providers.defillama.config import (
    DEFILLAMA_API_RATE_LIMIT,
    DEFILLAMA_API_RATE_WINDOW,
    DEFILLAMA_API_URL,
    TRACKED_POOLS,
)

__all__ = [
    "DEFILLAMA_API_RATE_LIMIT",
    "DEFILLAMA_API_RATE_WINDOW",
    "DEFILLAMA_API_URL",
    "TRACKED_POOLS",
]
