"""Spread engine orchestrator.

Fetches both classes of input through the data pipeline, reconciles them
and summarizes the spreads. Also renders the JSON-ready responses served
to presentation layers.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Hashable, List, Mapping, Optional, Sequence

from src.analytics.metrics import compute_all_metrics, current_rates, total_tvl
from src.analytics.reconciliation import DEFAULT_SPREADS, SpreadDefinition, reconcile
from src.analytics.windowing import DateRange
from src.core.models import (
    CurrentRates,
    DefiPool,
    PoolWithHistory,
    RateObservation,
    RawSeriesPoint,
    ReconciledPoint,
    SeriesKey,
    SpreadMetrics,
)
from src.data.clients.defillama.parser import DefiLlamaParser
from src.data.clients.fred.parser import FredParser
from src.data.pipeline import DataPipeline, gather_or_cancel

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def build_series_inputs(
    defi_yields: Sequence[PoolWithHistory],
    tradfi_rates: Mapping[SeriesKey, Sequence[RateObservation]],
    keys: Sequence[SeriesKey] = tuple(SeriesKey),
) -> Dict[SeriesKey, List[RawSeriesPoint]]:
    """
    Adapt provider payloads to reconciliation input.

    Every key in ``keys`` gets an entry; tracked series that the providers
    returned nothing for are left empty and read as 0.
    """
    inputs: Dict[SeriesKey, List[RawSeriesPoint]] = {key: [] for key in keys}

    for item in defi_yields:
        series_key = item.pool.series_key
        if series_key is None:
            logger.warning(f"Pool {item.pool.id} is not mapped to a tracked series, skipping")
            continue
        inputs.setdefault(series_key, []).extend(DefiLlamaParser.to_series_points(item.history))

    for series_key, observations in tradfi_rates.items():
        inputs.setdefault(series_key, []).extend(FredParser.to_series_points(observations))

    return inputs


def build_tvl_inputs(defi_yields: Sequence[PoolWithHistory]) -> Dict[SeriesKey, List[RawSeriesPoint]]:
    """TVL history per tracked pool, one daily point per history sample."""
    inputs: Dict[SeriesKey, List[RawSeriesPoint]] = {}
    for item in defi_yields:
        if item.pool.series_key is None:
            continue
        inputs.setdefault(item.pool.series_key, []).extend(
            RawSeriesPoint(date=p.timestamp.date(), value=p.tvl_usd) for p in item.history
        )
    return inputs


@dataclass
class SpreadReport:
    """Reconciled series plus spread summaries for one request."""

    points: List[ReconciledPoint]
    metrics: Dict[Hashable, SpreadMetrics]
    rates: CurrentRates
    pools: List[DefiPool] = field(default_factory=list)
    tvl: List[ReconciledPoint] = field(default_factory=list)
    window: Optional[DateRange] = None
    generated_at: datetime = field(default_factory=_utcnow)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def total_tvl(self) -> float:
        """Latest combined TVL of the tracked pools, in USD."""
        return total_tvl(self.tvl)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "data": [p.to_dict() for p in self.points],
            "metrics": {getattr(k, "value", k): m.to_dict() for k, m in self.metrics.items()},
            "current_rates": self.rates.to_dict(),
            "pools": [
                {
                    "pool_id": p.id,
                    "series_key": p.series_key.value if p.series_key else None,
                    "project": p.project,
                    "symbol": p.symbol,
                    "tvl_usd": p.tvl_usd,
                }
                for p in self.pools
            ],
            "tvl": [p.to_dict() for p in self.tvl],
            "total_tvl": self.total_tvl,
            "window": (
                {"start_date": self.window.start_date, "end_date": self.window.end_date}
                if self.window
                else None
            ),
        }


class SpreadEngine:
    """
    Builds spread reports from live data.

    Both sources are queried concurrently; the report is only built once
    every fetch has completed, and any failure aborts the whole request.
    """

    def __init__(
        self,
        pipeline: Optional[DataPipeline] = None,
        spreads: Sequence[SpreadDefinition] = DEFAULT_SPREADS,
    ):
        self.pipeline = pipeline or DataPipeline()
        self.spreads = tuple(spreads)

    async def build_report(
        self,
        months_back: Optional[int] = None,
        now: Optional[datetime] = None,
        force_refresh: bool = False,
    ) -> SpreadReport:
        """
        Fetch, reconcile and summarize.

        Args:
            months_back: Window length in months (default: settings.history_months)
            now: Current time override
            force_refresh: Skip caches and fetch fresh data

        Returns:
            SpreadReport over the window

        Raises:
            UpstreamUnavailable: If any source fetch fails
            ConfigurationError: If a source is missing its credentials
        """
        window = self.pipeline.window(months_back, now)

        defi_yields, tradfi_rates = await gather_or_cancel(
            self.pipeline.get_defi_yields(months_back, now, force_refresh),
            self.pipeline.get_tradfi_rates(months_back, now, force_refresh),
        )

        series_inputs = build_series_inputs(defi_yields, tradfi_rates)
        points = reconcile(series_inputs, self.spreads, defi_keys=SeriesKey.defi_keys())
        metrics = compute_all_metrics(points, [s.key for s in self.spreads])
        tvl = reconcile(build_tvl_inputs(defi_yields), spreads=(), defi_keys=())

        logger.info(
            f"Reconciled {len(points)} dates from {len(defi_yields)} pools "
            f"and {len(tradfi_rates)} rate series ({window.start_date} to {window.end_date})"
        )

        return SpreadReport(
            points=points,
            metrics=metrics,
            rates=current_rates(points, defi_keys=SeriesKey.defi_keys()),
            pools=[item.pool for item in defi_yields],
            tvl=tvl,
            window=window,
        )

    # ========== RESPONSES ==========

    @staticmethod
    def _failure(error: Exception) -> Dict[str, Any]:
        return {"success": False, "error": str(error) or type(error).__name__}

    async def get_defi_yields_response(self, months_back: Optional[int] = None) -> Dict[str, Any]:
        """Tracked pools with windowed history, or the failure shape."""
        try:
            defi_yields = await self.pipeline.get_defi_yields(months_back)
        except Exception as e:
            logger.error(f"Error fetching DeFi yields: {e}")
            return self._failure(e)

        return {
            "success": True,
            "data": [item.to_dict() for item in defi_yields],
            "timestamp": _utcnow().isoformat(),
        }

    async def get_tradfi_rates_response(self, months_back: Optional[int] = None) -> Dict[str, Any]:
        """Fed Funds and T-Bill observations, or the failure shape."""
        try:
            rates = await self.pipeline.get_tradfi_rates(months_back)
        except Exception as e:
            logger.error(f"Error fetching TradFi rates: {e}")
            return self._failure(e)

        return {
            "success": True,
            "data": {
                key.value: [obs.to_dict() for obs in observations]
                for key, observations in rates.items()
            },
            "timestamp": _utcnow().isoformat(),
        }

    async def get_spread_response(self, months_back: Optional[int] = None) -> Dict[str, Any]:
        """Reconciled series with metrics, or the failure shape."""
        try:
            report = await self.build_report(months_back)
        except Exception as e:
            logger.error(f"Error building spread report: {e}")
            return self._failure(e)

        return {
            "success": True,
            **report.to_dict(),
            "timestamp": report.generated_at.isoformat(),
        }

    async def close(self):
        """Close the engine and underlying resources."""
        await self.pipeline.close()
