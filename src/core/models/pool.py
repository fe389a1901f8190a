"""Pool and rate observation models as delivered by the upstream providers."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from src.core.models.series import SeriesKey


@dataclass
class DefiPool:
    """DefiLlama lending pool representation."""

    id: str  # DefiLlama pool UUID
    chain: str
    project: str  # e.g. "aave-v3"
    symbol: str
    tvl_usd: float = 0.0

    # Current rates (percent)
    apy: float = 0.0
    apy_base: Optional[float] = None

    # Set when the pool is one of the tracked series
    series_key: Optional[SeriesKey] = None

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, DefiPool):
            return self.id == other.id
        return False


@dataclass
class PoolHistoryPoint:
    """One sample of a pool's APY history."""

    timestamp: datetime
    apy: float
    tvl_usd: float = 0.0

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "apy": self.apy,
            "tvl_usd": self.tvl_usd,
        }


@dataclass
class RateObservation:
    """One FRED observation; the value stays string-encoded as FRED sends it."""

    date: str  # YYYY-MM-DD
    value: str

    def to_dict(self) -> dict:
        return {"date": self.date, "value": self.value}


@dataclass
class PoolWithHistory:
    """A tracked pool together with its windowed history."""

    pool: DefiPool
    history: List[PoolHistoryPoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "pool_id": self.pool.id,
            "series_key": self.pool.series_key.value if self.pool.series_key else None,
            "chain": self.pool.chain,
            "project": self.pool.project,
            "symbol": self.pool.symbol,
            "current_apy": self.pool.apy,
            "current_apy_base": self.pool.apy_base,
            "tvl_usd": self.pool.tvl_usd,
            "history": [p.to_dict() for p in self.history],
        }
