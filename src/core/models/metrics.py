"""Spread summary models."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Hashable, Optional


def _utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SpreadExtreme:
    """A spread value and the date it occurred on.

    ``date`` is None only for the empty-input sentinel.
    """

    value: float = 0.0
    date: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "date": self.date.isoformat() if self.date else "",
        }


@dataclass
class SpreadMetrics:
    """Summary statistics of one spread over a reconciled series."""

    spread_key: Hashable
    current: float = 0.0
    average: float = 0.0
    max: SpreadExtreme = field(default_factory=SpreadExtreme)
    min: SpreadExtreme = field(default_factory=SpreadExtreme)

    @property
    def signal(self) -> str:
        """Get signal indicator (positive/negative/neutral) for the current spread."""
        if self.current > 0:
            return "positive"
        if self.current < 0:
            return "negative"
        return "neutral"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "current": self.current,
            "average": self.average,
            "max": self.max.to_dict(),
            "min": self.min.to_dict(),
        }


@dataclass
class CurrentRates:
    """Latest value of every tracked series."""

    defi: Dict[Hashable, float] = field(default_factory=dict)
    tradfi: Dict[Hashable, float] = field(default_factory=dict)
    as_of: Optional[date] = None
    last_updated: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "defi": {getattr(k, "value", k): v for k, v in self.defi.items()},
            "tradfi": {getattr(k, "value", k): v for k, v in self.tradfi.items()},
            "as_of": self.as_of.isoformat() if self.as_of else "",
            "last_updated": self.last_updated.isoformat(),
        }
