"""Unit tests for the FRED client and parser."""

import asyncio
import json
from datetime import date
from unittest.mock import AsyncMock

import aiohttp
import pytest

from src.core.exceptions import ConfigurationError, UpstreamUnavailable
from src.core.models import RateObservation, RawSeriesPoint
from src.data.clients.fred.client import FredClient
from src.data.clients.fred.parser import FredParser


FRED_PAYLOAD = {
    "realtime_start": "2024-07-15",
    "realtime_end": "2024-07-15",
    "observation_start": "2024-07-01",
    "observation_end": "2024-07-05",
    "units": "lin",
    "observations": [
        {"realtime_start": "2024-07-15", "realtime_end": "2024-07-15", "date": "2024-07-01", "value": "5.33"},
        {"realtime_start": "2024-07-15", "realtime_end": "2024-07-15", "date": "2024-07-04", "value": "."},
        {"realtime_start": "2024-07-15", "realtime_end": "2024-07-15", "date": "2024-07-05", "value": "5.32"},
    ],
}


class TestFredParser:
    """Tests for FredParser."""

    @pytest.fixture
    def parser(self):
        return FredParser()

    def test_parse_observations_keeps_strings(self, parser):
        observations = parser.parse_observations(FRED_PAYLOAD)

        assert observations[1] == RateObservation(date="2024-07-04", value=".")
        assert len(observations) == 3

    def test_parse_observations_empty(self, parser):
        assert parser.parse_observations({}) == []

    def test_parse_value(self, parser):
        assert parser.parse_value("5.33") == 5.33
        assert parser.parse_value(".") is None
        assert parser.parse_value("") is None
        assert parser.parse_value("abc") is None

    def test_to_series_points_drops_placeholders(self, parser):
        points = parser.to_series_points(parser.parse_observations(FRED_PAYLOAD))

        assert points == [
            RawSeriesPoint(date(2024, 7, 1), 5.33),
            RawSeriesPoint(date(2024, 7, 5), 5.32),
        ]

    def test_to_series_points_drops_bad_dates(self, parser):
        points = parser.to_series_points([RateObservation(date="07/01/2024", value="5.0")])

        assert points == []


class TestFredClient:
    """Tests for FredClient."""

    @pytest.fixture
    def client(self, mock_settings):
        return FredClient(mock_settings)

    @pytest.mark.asyncio
    async def test_missing_api_key(self, mock_settings):
        mock_settings.fred_api_key = None
        client = FredClient(mock_settings)
        client._get_json = AsyncMock()

        with pytest.raises(ConfigurationError):
            await client.fetch_observations("DFF")

        client._get_json.assert_not_awaited()

    def test_explicit_api_key_overrides_settings(self, mock_settings):
        client = FredClient(mock_settings, api_key="other-key")

        assert client.api_key == "other-key"

    @pytest.mark.asyncio
    async def test_fetch_observations_params(self, client):
        client._get_json = AsyncMock(return_value=FRED_PAYLOAD)

        observations = await client.fetch_observations("DFF", "2024-07-01", "2024-07-05")

        assert len(observations) == 3
        url = client._get_json.call_args.args[0]
        params = client._get_json.call_args.kwargs["params"]
        assert url == "https://api.stlouisfed.org/fred/series/observations"
        assert params["series_id"] == "DFF"
        assert params["api_key"] == "test-key"
        assert params["file_type"] == "json"
        assert params["observation_start"] == "2024-07-01"
        assert params["observation_end"] == "2024-07-05"

    @pytest.mark.asyncio
    async def test_fetch_observations_without_range(self, client):
        client._get_json = AsyncMock(return_value=FRED_PAYLOAD)

        await client.fetch_observations("DTB3")

        params = client._get_json.call_args.kwargs["params"]
        assert "observation_start" not in params
        assert "observation_end" not in params

    @pytest.mark.asyncio
    async def test_non_success_status(self, client, make_session):
        client._session = make_session(status=400, payload={"error_message": "Bad Request"})

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await client.fetch_observations("DFF")

        assert exc_info.value.status == 400
        assert "FRED" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_invalid_json_body(self, client, make_session):
        client._session = make_session(
            payload=json.JSONDecodeError("Expecting value", "<html>", 0)
        )

        with pytest.raises(UpstreamUnavailable, match="invalid JSON") as exc_info:
            await client.fetch_observations("DFF")

        assert exc_info.value.provider == "FRED"
        assert exc_info.value.status is None

    @pytest.mark.asyncio
    async def test_transport_error(self, client, make_session):
        client._session = make_session(error=aiohttp.ClientError("connection refused"))

        with pytest.raises(UpstreamUnavailable, match="connection refused") as exc_info:
            await client.fetch_observations("DTB3")

        assert exc_info.value.provider == "FRED"

    @pytest.mark.asyncio
    async def test_timeout(self, client, make_session):
        client._session = make_session(error=asyncio.TimeoutError())

        with pytest.raises(UpstreamUnavailable, match="timed out"):
            await client.fetch_observations("DFF")
