"""Base data source interfaces.

Defines the abstract interfaces the data pipeline consumes, plus the shared
aiohttp plumbing used by the concrete HTTP clients.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import aiohttp
from aiolimiter import AsyncLimiter

from src.core.exceptions import UpstreamUnavailable
from src.core.models import DefiPool, PoolHistoryPoint, RateObservation

logger = logging.getLogger(__name__)


class PoolYieldSource(ABC):
    """Source of DeFi pool listings and APY histories."""

    @abstractmethod
    async def list_tracked_pools(self) -> List[DefiPool]:
        """Fetch the pools that back the tracked DeFi series.

        Returns:
            List of DefiPool objects with ``series_key`` set
        """
        ...

    @abstractmethod
    async def fetch_history(self, pool_id: str) -> List[PoolHistoryPoint]:
        """Fetch the APY history of one pool.

        Args:
            pool_id: Provider pool identifier

        Returns:
            List of PoolHistoryPoint objects in provider order
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections and clean up resources."""
        ...


class RiskFreeRateSource(ABC):
    """Source of daily risk-free rate observations."""

    @abstractmethod
    async def fetch_observations(
        self,
        series_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[RateObservation]:
        """Fetch observations of a rate series.

        Args:
            series_id: Provider series identifier
            start_date: First date to include (YYYY-MM-DD)
            end_date: Last date to include (YYYY-MM-DD)

        Returns:
            List of RateObservation objects with string-encoded values
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections and clean up resources."""
        ...


class HttpJsonClient:
    """Rate-limited JSON GET over a lazily created aiohttp session."""

    provider_name = "upstream"

    def __init__(self, rate_limiter: AsyncLimiter, timeout_seconds: int = 30):
        self._rate_limiter = rate_limiter
        self._timeout_seconds = timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout_seconds)
            )
        return self._session

    async def close(self) -> None:
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``url`` and decode the JSON body.

        Raises:
            UpstreamUnavailable: On transport errors, timeouts, non-200 replies and undecodable bodies
        """
        async with self._rate_limiter:
            session = await self._get_session()
            try:
                async with session.get(url, params=params) as resp:
                    if resp.status != 200:
                        raise UpstreamUnavailable(
                            self.provider_name, f"GET {url} failed", status=resp.status
                        )
                    return await resp.json()
            except aiohttp.ClientError as e:
                raise UpstreamUnavailable(self.provider_name, str(e)) from e
            except ValueError as e:
                raise UpstreamUnavailable(self.provider_name, f"GET {url} returned invalid JSON") from e
            except asyncio.TimeoutError as e:
                raise UpstreamUnavailable(self.provider_name, f"GET {url} timed out") from e
