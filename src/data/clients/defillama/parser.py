"""DefiLlama yields API response parser.

Contains all parsing logic for converting DefiLlama responses into domain
models, and for adapting pool histories to reconciliation input.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from src.core.models import (
    DefiPool,
    PoolHistoryPoint,
    RawSeriesPoint,
    SeriesKey,
)
from src.providers.defillama.config import TRACKED_POOLS

logger = logging.getLogger(__name__)


class DefiLlamaParser:
    """Parser for DefiLlama yields API responses."""

    @staticmethod
    def parse_float(value: Any) -> Optional[float]:
        """Parse a numeric field; None when missing or not a number."""
        if value is None or isinstance(value, bool):
            return None
        try:
            result = float(value)
        except (TypeError, ValueError):
            return None
        if result != result:  # NaN
            return None
        return result

    @staticmethod
    def parse_timestamp(value: Any) -> Optional[datetime]:
        """Parse an ISO-8601 or unix timestamp."""
        if isinstance(value, datetime):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                return None
        return None

    @classmethod
    def parse_pool(cls, data: Dict[str, Any]) -> DefiPool:
        """Parse one entry of the /pools listing."""
        return DefiPool(
            id=data["pool"],
            chain=data.get("chain", ""),
            project=data.get("project", ""),
            symbol=data.get("symbol", ""),
            tvl_usd=cls.parse_float(data.get("tvlUsd")) or 0.0,
            apy=cls.parse_float(data.get("apy")) or 0.0,
            apy_base=cls.parse_float(data.get("apyBase")),
        )

    @classmethod
    def parse_pools(cls, items: Iterable[Dict[str, Any]]) -> List[DefiPool]:
        """Parse the /pools listing, skipping malformed entries."""
        pools = []
        for item in items:
            try:
                pools.append(cls.parse_pool(item))
            except (KeyError, TypeError) as e:
                logger.warning(f"Skipping malformed pool entry: {e}")
        return pools

    @classmethod
    def parse_history(cls, items: Iterable[Dict[str, Any]]) -> List[PoolHistoryPoint]:
        """Parse a /chart/{pool} history, dropping points without a usable APY or timestamp."""
        points = []
        dropped = 0
        for item in items:
            timestamp = cls.parse_timestamp(item.get("timestamp"))
            apy = cls.parse_float(item.get("apy"))
            if timestamp is None or apy is None:
                dropped += 1
                continue
            points.append(
                PoolHistoryPoint(
                    timestamp=timestamp,
                    apy=apy,
                    tvl_usd=cls.parse_float(item.get("tvlUsd")) or 0.0,
                )
            )
        if dropped:
            logger.debug(f"Dropped {dropped} unparseable history points")
        return points

    @staticmethod
    def select_tracked(
        pools: Iterable[DefiPool],
        chain: str,
        tracked: Mapping[Tuple[str, str], SeriesKey] = TRACKED_POOLS,
    ) -> List[DefiPool]:
        """
        Pick the pool backing each tracked series.

        Pools are matched on chain, project and symbol; when several pools
        match the same series the one with the highest TVL wins.
        """
        chosen: Dict[SeriesKey, DefiPool] = {}
        for pool in pools:
            if pool.chain.lower() != chain.lower():
                continue
            series_key = tracked.get((pool.project, pool.symbol))
            if series_key is None:
                continue
            current = chosen.get(series_key)
            if current is None or pool.tvl_usd > current.tvl_usd:
                chosen[series_key] = pool

        # Keep the order of the tracked mapping
        selected = []
        for series_key in tracked.values():
            if series_key in chosen:
                pool = chosen[series_key]
                pool.series_key = series_key
                selected.append(pool)
        return selected

    @staticmethod
    def to_series_points(history: Iterable[PoolHistoryPoint]) -> List[RawSeriesPoint]:
        """Adapt a pool history to reconciliation input, one point per sample date."""
        return [RawSeriesPoint(date=p.timestamp.date(), value=p.apy) for p in history]
