"""FRED risk-free rate client implementing RiskFreeRateSource.

Provides daily observations for:
- Effective Federal Funds Rate (DFF)
- 3-Month Treasury Bill rate (DTB3)

Values are percentages, as FRED publishes them.
"""

import logging
from typing import Dict, List, Optional

from aiolimiter import AsyncLimiter

from config.settings import Settings, get_settings
from src.core.exceptions import ConfigurationError
from src.core.models import RateObservation
from src.data.clients.base import HttpJsonClient, RiskFreeRateSource
from src.data.clients.fred.parser import FredParser
from src.providers.fred.config import (
    FRED_API_RATE_LIMIT,
    FRED_API_RATE_WINDOW,
)

logger = logging.getLogger(__name__)


class FredClient(HttpJsonClient, RiskFreeRateSource):
    """HTTP client for FRED series observations."""

    provider_name = "FRED"

    def __init__(self, settings: Optional[Settings] = None, api_key: Optional[str] = None):
        """
        Initialize client.

        Args:
            settings: Application settings
            api_key: FRED API key; overrides settings.fred_api_key
        """
        self.settings = settings or get_settings()
        super().__init__(
            rate_limiter=AsyncLimiter(FRED_API_RATE_LIMIT, FRED_API_RATE_WINDOW),
            timeout_seconds=self.settings.request_timeout_seconds,
        )
        self.api_key = api_key or self.settings.fred_api_key
        self._parser = FredParser()

    async def fetch_observations(
        self,
        series_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[RateObservation]:
        """
        Fetch observations of a FRED series.

        Raises:
            ConfigurationError: If no FRED API key is configured
            UpstreamUnavailable: If FRED cannot be reached or answers non-200
        """
        if not self.api_key:
            raise ConfigurationError("FRED API key is not configured (set FRED_API_KEY)")

        params: Dict[str, str] = {
            "series_id": series_id,
            "api_key": self.api_key,
            "file_type": "json",
            "sort_order": "asc",
        }
        if start_date:
            params["observation_start"] = start_date
        if end_date:
            params["observation_end"] = end_date

        logger.info(f"Fetching {series_id} from FRED ({start_date or '-'} to {end_date or '-'})")
        payload = await self._get_json(self.settings.fred_observations_url, params=params)
        observations = self._parser.parse_observations(payload or {})
        logger.debug(f"Received {len(observations)} observations for {series_id}")
        return observations

