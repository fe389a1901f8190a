"""Reconciliation and spread analytics."""

from .reconciliation import (
    DEFAULT_SPREADS,
    SpreadDefinition,
    reconcile,
    representative_rate,
    select_pool_spreads,
)
from .metrics import compute_metrics, compute_all_metrics, current_rates, total_tvl
from .windowing import DateRange, date_range, trim_before

__all__ = [
    "DEFAULT_SPREADS",
    "SpreadDefinition",
    "reconcile",
    "representative_rate",
    "select_pool_spreads",
    "compute_metrics",
    "compute_all_metrics",
    "current_rates",
    "total_tvl",
    "DateRange",
    "date_range",
    "trim_before",
]
