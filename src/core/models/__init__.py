"""Core data models for the spread tracker."""

from .series import SeriesKey, SeriesKind, SpreadKey
from .timeseries import RawSeriesPoint, ReconciledPoint
from .metrics import SpreadMetrics, SpreadExtreme, CurrentRates
from .pool import DefiPool, PoolHistoryPoint, PoolWithHistory, RateObservation

__all__ = [
    "SeriesKey",
    "SeriesKind",
    "SpreadKey",
    "RawSeriesPoint",
    "ReconciledPoint",
    "SpreadMetrics",
    "SpreadExtreme",
    "CurrentRates",
    "DefiPool",
    "PoolHistoryPoint",
    "PoolWithHistory",
    "RateObservation",
]
