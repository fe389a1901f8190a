"""DefiLlama yields API client implementing PoolYieldSource.

Uses the public yields API at https://yields.llama.fi
Documentation: https://defillama.com/docs/api
"""

import logging
from typing import Any, Dict, List, Optional

from aiolimiter import AsyncLimiter

from config.settings import Settings, get_settings
from src.core.exceptions import UpstreamUnavailable
from src.core.models import DefiPool, PoolHistoryPoint
from src.data.clients.base import HttpJsonClient, PoolYieldSource
from src.data.clients.defillama.parser import DefiLlamaParser
from src.providers.defillama.config import (
    CHART_PATH,
    DEFILLAMA_API_RATE_LIMIT,
    DEFILLAMA_API_RATE_WINDOW,
    POOLS_PATH,
    STATUS_SUCCESS,
)

logger = logging.getLogger(__name__)


class DefiLlamaClient(HttpJsonClient, PoolYieldSource):
    """HTTP client for the DefiLlama yields API."""

    provider_name = "DefiLlama"

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        super().__init__(
            rate_limiter=AsyncLimiter(DEFILLAMA_API_RATE_LIMIT, DEFILLAMA_API_RATE_WINDOW),
            timeout_seconds=self.settings.request_timeout_seconds,
        )
        self._parser = DefiLlamaParser()

    def _url(self, path: str) -> str:
        return f"{self.settings.defillama_api_url.rstrip('/')}{path}"

    async def _get_data(self, path: str) -> List[Dict[str, Any]]:
        """GET a DefiLlama envelope and return its ``data`` list."""
        payload = await self._get_json(self._url(path))
        if not isinstance(payload, dict) or payload.get("status") != STATUS_SUCCESS:
            status = payload.get("status") if isinstance(payload, dict) else None
            raise UpstreamUnavailable(self.provider_name, f"unexpected response status {status!r} for {path}")
        return payload.get("data") or []

    # ========== POOL METHODS ==========

    async def list_pools(self) -> List[DefiPool]:
        """Fetch every pool DefiLlama tracks."""
        logger.info("Fetching pool list from DefiLlama")
        return self._parser.parse_pools(await self._get_data(POOLS_PATH))

    async def list_tracked_pools(self) -> List[DefiPool]:
        """Fetch the pools backing the tracked DeFi series on the configured chain."""
        pools = await self.list_pools()
        tracked = self._parser.select_tracked(pools, self.settings.tracked_chain)
        logger.info(
            f"Tracking {len(tracked)} of {len(pools)} pools on {self.settings.tracked_chain}"
        )
        return tracked

    async def fetch_history(self, pool_id: str) -> List[PoolHistoryPoint]:
        """Fetch the APY history of one pool."""
        logger.info(f"Fetching history for pool {pool_id}")
        items = await self._get_data(CHART_PATH.format(pool_id=pool_id))
        return self._parser.parse_history(items)
