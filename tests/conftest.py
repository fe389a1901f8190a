"""Pytest configuration and fixtures."""

from datetime import date, datetime, timezone
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from src.core.models import (
    DefiPool,
    PoolHistoryPoint,
    RateObservation,
    RawSeriesPoint,
    SeriesKey,
)


def points(*pairs) -> list[RawSeriesPoint]:
    """Build raw points from (YYYY-MM-DD, value) pairs."""
    return [RawSeriesPoint(date=date.fromisoformat(d), value=v) for d, v in pairs]


class FakeResponse:
    """Minimal stand-in for an aiohttp response context manager."""

    def __init__(self, status: int = 200, payload: Any = None):
        self.status = status
        self._payload = payload

    async def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False


def fake_session(response: Optional[FakeResponse] = None, error: Optional[Exception] = None) -> MagicMock:
    """A session whose get() yields ``response`` or raises ``error``."""
    session = MagicMock()
    session.closed = False
    if error is not None:
        session.get = MagicMock(side_effect=error)
    else:
        session.get = MagicMock(return_value=response)
    return session


@pytest.fixture
def mock_settings(tmp_path):
    """Create mock settings for testing."""
    settings = MagicMock()
    settings.fred_api_key = "test-key"
    settings.fred_api_url = "https://api.stlouisfed.org/fred"
    settings.fred_observations_url = "https://api.stlouisfed.org/fred/series/observations"
    settings.defillama_api_url = "https://yields.llama.fi"
    settings.tracked_chain = "Ethereum"
    settings.history_months = 18
    settings.request_timeout_seconds = 30
    settings.cache_dir = tmp_path / "cache"
    settings.cache_ttl_seconds = 3600
    settings.ui_refresh_interval = 3600
    settings.ensure_cache_dir.return_value = settings.cache_dir
    return settings


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed wall clock for window calculations."""
    return datetime(2024, 7, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_pools() -> list[DefiPool]:
    """Two tracked pools as returned by list_tracked_pools."""
    return [
        DefiPool(
            id="aa70268e-4b52-42bf-a116-608b370f9501",
            chain="Ethereum",
            project="aave-v3",
            symbol="USDC",
            tvl_usd=250_000_000.0,
            apy=5.1,
            apy_base=5.1,
            series_key=SeriesKey.AAVE_V3_USDC,
        ),
        DefiPool(
            id="7da72d09-56ca-4ec5-a45f-59114353e487",
            chain="Ethereum",
            project="compound-v3",
            symbol="USDC",
            tvl_usd=400_000_000.0,
            apy=6.2,
            apy_base=4.9,
            series_key=SeriesKey.COMPOUND_V3_USDC,
        ),
    ]


@pytest.fixture
def sample_histories() -> dict[str, list[PoolHistoryPoint]]:
    """Pool histories keyed by pool id; one sample predates the window."""
    def ts(day: str) -> datetime:
        return datetime.fromisoformat(f"{day}T23:01:52+00:00")

    return {
        "aa70268e-4b52-42bf-a116-608b370f9501": [
            PoolHistoryPoint(timestamp=ts("2022-12-01"), apy=1.0, tvl_usd=100_000_000.0),
            PoolHistoryPoint(timestamp=ts("2024-07-01"), apy=5.0, tvl_usd=250_000_000.0),
            PoolHistoryPoint(timestamp=ts("2024-07-03"), apy=5.5, tvl_usd=260_000_000.0),
        ],
        "7da72d09-56ca-4ec5-a45f-59114353e487": [
            PoolHistoryPoint(timestamp=ts("2024-07-02"), apy=6.0, tvl_usd=400_000_000.0),
        ],
    }


@pytest.fixture
def sample_observations() -> dict[str, list[RateObservation]]:
    """FRED observations keyed by series id, with a '.' holiday placeholder."""
    return {
        "DFF": [
            RateObservation(date="2024-07-01", value="5.33"),
            RateObservation(date="2024-07-04", value="."),
            RateObservation(date="2024-07-05", value="5.33"),
        ],
        "DTB3": [
            RateObservation(date="2024-07-01", value="5.24"),
            RateObservation(date="2024-07-02", value="5.25"),
        ],
    }


@pytest.fixture
def make_points():
    """Factory for raw points from (YYYY-MM-DD, value) pairs."""
    return points


@pytest.fixture
def make_session():
    """Factory for fake aiohttp sessions."""
    def _make(status: int = 200, payload: Any = None, error: Optional[Exception] = None) -> MagicMock:
        if error is not None:
            return fake_session(error=error)
        return fake_session(FakeResponse(status=status, payload=payload))

    return _make
