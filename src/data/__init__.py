"""Data layer for the spread tracker."""

from .pipeline import DataPipeline
from .cache.disk_cache import DiskCache, CacheKeys
from .clients.base import PoolYieldSource, RiskFreeRateSource
from .clients.defillama import DefiLlamaClient, DefiLlamaParser
from .clients.fred import FredClient, FredParser

__all__ = [
    "DataPipeline",
    "DiskCache",
    "CacheKeys",
    "PoolYieldSource",
    "RiskFreeRateSource",
    "DefiLlamaClient",
    "DefiLlamaParser",
    "FredClient",
    "FredParser",
]
