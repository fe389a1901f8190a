"""Core module - models, constants and exceptions."""

from .models import (
    SeriesKey,
    SeriesKind,
    SpreadKey,
    RawSeriesPoint,
    ReconciledPoint,
    SpreadMetrics,
    SpreadExtreme,
    CurrentRates,
)
from .constants import DEFAULT_FILL_VALUE, DEFAULT_HISTORY_MONTHS
from .exceptions import SpreadTrackerError, UpstreamUnavailable, ConfigurationError

__all__ = [
    "SeriesKey",
    "SeriesKind",
    "SpreadKey",
    "RawSeriesPoint",
    "ReconciledPoint",
    "SpreadMetrics",
    "SpreadExtreme",
    "CurrentRates",
    "DEFAULT_FILL_VALUE",
    "DEFAULT_HISTORY_MONTHS",
    "SpreadTrackerError",
    "UpstreamUnavailable",
    "ConfigurationError",
]
