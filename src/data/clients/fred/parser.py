"""FRED API response parser."""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from src.core.models import RateObservation, RawSeriesPoint
from src.providers.fred.config import MISSING_VALUE

logger = logging.getLogger(__name__)


class FredParser:
    """Parser for FRED series/observations responses."""

    @staticmethod
    def parse_observations(payload: Dict[str, Any]) -> List[RateObservation]:
        """Extract the observation list, keeping values string-encoded."""
        observations = []
        for item in payload.get("observations", []) or []:
            obs_date = item.get("date")
            if not obs_date:
                continue
            observations.append(RateObservation(date=obs_date, value=str(item.get("value", ""))))
        return observations

    @staticmethod
    def parse_value(value: str) -> Optional[float]:
        """Parse a string-encoded rate; None for FRED's '.' and other non-numbers."""
        if value is None or value.strip() in ("", MISSING_VALUE):
            return None
        try:
            result = float(value)
        except ValueError:
            return None
        if result != result:  # NaN
            return None
        return result

    @classmethod
    def to_series_points(cls, observations: Iterable[RateObservation]) -> List[RawSeriesPoint]:
        """Adapt observations to reconciliation input, dropping unparseable ones."""
        points = []
        dropped = 0
        for obs in observations:
            value = cls.parse_value(obs.value)
            try:
                obs_date = date.fromisoformat(obs.date)
            except ValueError:
                obs_date = None
            if value is None or obs_date is None:
                dropped += 1
                continue
            points.append(RawSeriesPoint(date=obs_date, value=value))
        if dropped:
            logger.debug(f"Dropped {dropped} observations without a numeric value")
        return points
