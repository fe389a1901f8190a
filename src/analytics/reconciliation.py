"""Time-series reconciliation.

Merges independently sampled series onto one calendar of observed dates,
forward-fills each series and derives spreads of the best DeFi rate over
each risk-free benchmark.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Sequence

from src.core.constants import DEFAULT_FILL_VALUE
from src.core.models import RawSeriesPoint, ReconciledPoint, SpreadKey


@dataclass(frozen=True)
class SpreadDefinition:
    """A derived field: representative DeFi rate minus ``risk_free_key``."""

    key: Hashable
    risk_free_key: Hashable


DEFAULT_SPREADS: tuple = tuple(
    SpreadDefinition(key=spread_key, risk_free_key=spread_key.risk_free_key)
    for spread_key in SpreadKey
)


def representative_rate(values: Mapping[Hashable, float], defi_keys: Iterable[Hashable]) -> float:
    """Best available DeFi yield among ``defi_keys``; 0 when there are none."""
    return max(
        (values.get(key, DEFAULT_FILL_VALUE) for key in defi_keys),
        default=DEFAULT_FILL_VALUE,
    )


def reconcile(
    series_inputs: Mapping[Hashable, Sequence[RawSeriesPoint]],
    spreads: Sequence[SpreadDefinition] = DEFAULT_SPREADS,
    defi_keys: Optional[Sequence[Hashable]] = None,
) -> List[ReconciledPoint]:
    """
    Align all series onto the sorted union of their observed dates.

    Args:
        series_inputs: Raw points per series key, in any order. An empty
            sequence means the key has no data and reads as 0 throughout.
        spreads: Spread fields to derive on every row
        defi_keys: Keys competing for the representative DeFi rate. Defaults
            to every input key that is not a spread benchmark.

    Returns:
        One ReconciledPoint per distinct observed date, ascending
    """
    benchmark_keys = [s.risk_free_key for s in spreads]

    # Benchmarks named by a spread but missing from the inputs still get a column
    keys: List[Hashable] = list(series_inputs.keys())
    keys.extend(k for k in dict.fromkeys(benchmark_keys) if k not in series_inputs)

    if defi_keys is None:
        defi_keys = [k for k in series_inputs if k not in benchmark_keys]

    # date -> key -> value; later observations overwrite earlier ones
    by_date: Dict[date, Dict[Hashable, float]] = {}
    for key, points in series_inputs.items():
        for point in points:
            by_date.setdefault(point.date, {})[key] = point.value

    last_known = {key: DEFAULT_FILL_VALUE for key in keys}
    result: List[ReconciledPoint] = []

    for day in sorted(by_date):
        observed = by_date[day]
        last_known.update(observed)
        values = dict(last_known)

        best = representative_rate(values, defi_keys)
        derived = {s.key: best - values[s.risk_free_key] for s in spreads}

        result.append(ReconciledPoint(date=day, values=values, spreads=derived))

    return result


def select_pool_spreads(
    points: Sequence[ReconciledPoint],
    pool_key: Hashable,
    spreads: Sequence[SpreadDefinition] = DEFAULT_SPREADS,
) -> List[ReconciledPoint]:
    """
    Recompute spreads against a single pool instead of the best rate.

    This is a view over already reconciled rows: values are shared, only
    the derived spreads differ.
    """
    return [
        ReconciledPoint(
            date=point.date,
            values=point.values,
            spreads={
                s.key: point.values[pool_key] - point.values[s.risk_free_key]
                for s in spreads
            },
        )
        for point in points
    ]
