"""Data pipeline orchestration for the spread tracker.

Provides a unified interface for fetching DeFi pool histories and risk-free
rate observations, with raw responses cached for the configured TTL.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional

from config.settings import Settings, get_settings
from src.analytics.windowing import DateRange, date_range, trim_before
from src.core.models import (
    DefiPool,
    PoolHistoryPoint,
    PoolWithHistory,
    RateObservation,
    SeriesKey,
)
from src.data.cache.disk_cache import CacheKeys, DiskCache
from src.data.clients.base import PoolYieldSource, RiskFreeRateSource
from src.providers.fred.config import FRED_SERIES

logger = logging.getLogger(__name__)


async def gather_or_cancel(*aws: Awaitable[Any]) -> List[Any]:
    """
    Run awaitables concurrently and return their results in order.

    The first failure cancels the tasks still running, waits for them to
    unwind, then re-raises.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []

    done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    if pending:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    for task in tasks:
        if task in done and task.exception() is not None:
            raise task.exception()
    return [task.result() for task in tasks]


class DataPipeline:
    """Orchestrates data fetching from the pool yield and risk-free rate sources.

    Fetches for distinct pools and series run concurrently. A failure in
    any of them propagates and fails the whole call.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        pool_source: Optional[PoolYieldSource] = None,
        rate_source: Optional[RiskFreeRateSource] = None,
        cache: Optional[DiskCache] = None,
    ):
        """Initialize the data pipeline.

        Args:
            settings: Application settings
            pool_source: Pool yield source (defaults to DefiLlamaClient)
            rate_source: Risk-free rate source (defaults to FredClient)
            cache: Optional disk cache instance
        """
        self.settings = settings or get_settings()

        if pool_source is None:
            from src.data.clients.defillama import DefiLlamaClient
            pool_source = DefiLlamaClient(self.settings)
        if rate_source is None:
            from src.data.clients.fred import FredClient
            rate_source = FredClient(self.settings)

        self.pool_source = pool_source
        self.rate_source = rate_source
        self.cache = cache or DiskCache(self.settings)

        # In-memory cache keyed like the disk cache
        self._memory_cache: Dict[str, Any] = {}

    async def _cached(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        force_refresh: bool = False,
    ) -> Any:
        """Serve ``key`` from memory, then disk, then ``factory``."""
        if not force_refresh and key in self._memory_cache:
            logger.debug(f"Memory cache hit for {key}")
            return self._memory_cache[key]

        value = await self.cache.get_or_set_async(key, factory, force_refresh=force_refresh)
        self._memory_cache[key] = value
        return value

    def window(self, months_back: Optional[int] = None, now: Optional[datetime] = None) -> DateRange:
        """History window for requests, defaulting to settings.history_months."""
        months = months_back if months_back is not None else self.settings.history_months
        return date_range(months, now=now)

    # ========== POOL METHODS ==========

    async def get_tracked_pools(self, force_refresh: bool = False) -> List[DefiPool]:
        """Get the pools backing the tracked DeFi series."""
        return await self._cached(
            CacheKeys.tracked_pools(self.settings.tracked_chain),
            self.pool_source.list_tracked_pools,
            force_refresh,
        )

    async def get_pool_history(self, pool_id: str, force_refresh: bool = False) -> List[PoolHistoryPoint]:
        """Get the full APY history of a pool."""
        return await self._cached(
            CacheKeys.pool_history(pool_id),
            lambda: self.pool_source.fetch_history(pool_id),
            force_refresh,
        )

    async def get_defi_yields(
        self,
        months_back: Optional[int] = None,
        now: Optional[datetime] = None,
        force_refresh: bool = False,
    ) -> List[PoolWithHistory]:
        """
        Get tracked pools with their history trimmed to the window.

        Args:
            months_back: Window length in months (default: settings.history_months)
            now: Current time override
            force_refresh: Skip caches and fetch fresh data

        Returns:
            List of PoolWithHistory in tracked order
        """
        window = self.window(months_back, now)
        pools = await self.get_tracked_pools(force_refresh)

        histories = await gather_or_cancel(
            *(self.get_pool_history(pool.id, force_refresh) for pool in pools)
        )

        return [
            PoolWithHistory(
                pool=pool,
                history=trim_before(history, window.start, key=lambda p: p.timestamp.date()),
            )
            for pool, history in zip(pools, histories)
        ]

    # ========== RATE METHODS ==========

    async def get_rate_observations(
        self,
        series_key: SeriesKey,
        window: DateRange,
        force_refresh: bool = False,
    ) -> List[RateObservation]:
        """Get observations of one risk-free series over ``window``."""
        series_id = FRED_SERIES[series_key]
        return await self._cached(
            CacheKeys.observations(series_id, window.start_date, window.end_date),
            lambda: self.rate_source.fetch_observations(
                series_id, window.start_date, window.end_date
            ),
            force_refresh,
        )

    async def get_tradfi_rates(
        self,
        months_back: Optional[int] = None,
        now: Optional[datetime] = None,
        force_refresh: bool = False,
    ) -> Dict[SeriesKey, List[RateObservation]]:
        """
        Get Fed Funds and T-Bill observations for the window.

        Returns:
            Dict mapping risk-free SeriesKey to its observations
        """
        window = self.window(months_back, now)
        keys = list(FRED_SERIES.keys())

        results = await gather_or_cancel(
            *(self.get_rate_observations(key, window, force_refresh) for key in keys)
        )
        return dict(zip(keys, results))

    # ========== UTILITY METHODS ==========

    def clear_cache(self) -> int:
        """Clear in-memory and disk caches.

        Returns:
            Number of items cleared
        """
        count = len(self._memory_cache)
        self._memory_cache.clear()
        count += self.cache.clear()
        logger.info(f"Cleared {count} cached items")
        return count

    async def close(self) -> None:
        """Close all connections."""
        for source in (self.pool_source, self.rate_source):
            try:
                await source.close()
            except Exception as e:
                logger.warning(f"Error closing {type(source).__name__}: {e}")
        self.cache.close()
