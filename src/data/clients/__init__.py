"""Data source clients.

Provides the source interfaces and their HTTP implementations.
"""

from src.data.clients.base import HttpJsonClient, PoolYieldSource, RiskFreeRateSource

__all__ = [
    "HttpJsonClient",
    "PoolYieldSource",
    "RiskFreeRateSource",
]
