"""Spread summary statistics over reconciled rows."""

from typing import Dict, Hashable, Iterable, Optional, Sequence

from src.core.models import (
    CurrentRates,
    ReconciledPoint,
    SeriesKey,
    SeriesKind,
    SpreadExtreme,
    SpreadMetrics,
)


def compute_metrics(points: Sequence[ReconciledPoint], spread_key: Hashable) -> SpreadMetrics:
    """
    Summarize one spread over a date-ascending reconciled series.

    Empty input yields the zero sentinel (all values 0, no dates). On ties
    the earliest date is kept for both extremes.

    Args:
        points: Reconciled rows, ascending by date
        spread_key: Spread to summarize

    Returns:
        SpreadMetrics for the spread
    """
    if not points:
        return SpreadMetrics(spread_key=spread_key)

    first = points[0]
    max_extreme = SpreadExtreme(first.spread(spread_key), first.date)
    min_extreme = max_extreme
    total = 0.0

    for point in points:
        value = point.spread(spread_key)
        total += value
        if value > max_extreme.value:
            max_extreme = SpreadExtreme(value, point.date)
        if value < min_extreme.value:
            min_extreme = SpreadExtreme(value, point.date)

    return SpreadMetrics(
        spread_key=spread_key,
        current=points[-1].spread(spread_key),
        average=total / len(points),
        max=max_extreme,
        min=min_extreme,
    )


def compute_all_metrics(
    points: Sequence[ReconciledPoint],
    spread_keys: Iterable[Hashable],
) -> Dict[Hashable, SpreadMetrics]:
    """Metrics for several spreads over the same rows."""
    return {key: compute_metrics(points, key) for key in spread_keys}


def total_tvl(points: Sequence[ReconciledPoint], keys: Optional[Iterable[Hashable]] = None) -> float:
    """Sum of the latest value of ``keys`` (default: every column); 0 when empty."""
    if not points:
        return 0.0
    values = points[-1].values
    if keys is None:
        keys = values.keys()
    return sum(values.get(key, 0.0) for key in keys)


def current_rates(
    points: Sequence[ReconciledPoint],
    defi_keys: Optional[Iterable[Hashable]] = None,
) -> CurrentRates:
    """
    Latest reconciled value of every series, split into DeFi and TradFi.

    Keys that are not SeriesKey members count as DeFi unless listed
    otherwise through ``defi_keys``.
    """
    if not points:
        return CurrentRates()

    last = points[-1]
    if defi_keys is None:
        defi_keys = [
            k for k in last.values
            if not (isinstance(k, SeriesKey) and k.kind == SeriesKind.RISK_FREE)
        ]
    defi_keys = list(defi_keys)

    return CurrentRates(
        defi={k: v for k, v in last.values.items() if k in defi_keys},
        tradfi={k: v for k, v in last.values.items() if k not in defi_keys},
        as_of=last.date,
    )
