"""Timeseries data models for raw and reconciled rate data."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Hashable


def _key_name(key: Hashable) -> str:
    """Serializable name for a series or spread key."""
    value = getattr(key, "value", key)
    return str(value)


@dataclass(frozen=True)
class RawSeriesPoint:
    """A single observation from one named series."""

    date: date
    value: float


@dataclass
class ReconciledPoint:
    """One row of the unified series.

    Every tracked key has a value, forward-filled where the key had no
    observation on this date.
    """

    date: date
    values: Dict[Hashable, float] = field(default_factory=dict)
    spreads: Dict[Hashable, float] = field(default_factory=dict)

    def spread(self, key: Hashable) -> float:
        return self.spreads[key]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a flat dictionary, one field per series and spread."""
        row: Dict[str, Any] = {"date": self.date.isoformat()}
        for key, value in self.values.items():
            row[_key_name(key)] = value
        for key, value in self.spreads.items():
            row[_key_name(key)] = value
        return row
