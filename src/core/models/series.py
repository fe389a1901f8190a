"""Identifiers for the tracked series and the spreads derived from them."""

from enum import Enum


class SeriesKind(Enum):
    """Which side of the comparison a series belongs to."""

    DEFI = "defi"
    RISK_FREE = "risk_free"


class SeriesKey(str, Enum):
    """Tracked quantities, one reconciled column each."""

    AAVE_V3_USDC = "aave_usdc"
    AAVE_V3_USDT = "aave_usdt"
    COMPOUND_V3_USDC = "compound_usdc"
    MORPHO_USDC = "morpho_usdc"
    FED_FUNDS = "fed_funds"
    TBILL = "tbill"

    @property
    def kind(self) -> SeriesKind:
        if self in (SeriesKey.FED_FUNDS, SeriesKey.TBILL):
            return SeriesKind.RISK_FREE
        return SeriesKind.DEFI

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def defi_keys(cls) -> list["SeriesKey"]:
        return [k for k in cls if k.kind == SeriesKind.DEFI]


_LABELS = {
    SeriesKey.AAVE_V3_USDC: "Aave v3 USDC",
    SeriesKey.AAVE_V3_USDT: "Aave v3 USDT",
    SeriesKey.COMPOUND_V3_USDC: "Compound v3 USDC",
    SeriesKey.MORPHO_USDC: "Morpho USDC",
    SeriesKey.FED_FUNDS: "Fed Funds",
    SeriesKey.TBILL: "3M T-Bill",
}


class SpreadKey(str, Enum):
    """Spread definitions: representative DeFi rate minus a risk-free rate."""

    VS_FED = "spread_vs_fed"
    VS_TBILL = "spread_vs_tbill"

    @property
    def risk_free_key(self) -> SeriesKey:
        """The benchmark series this spread is measured against."""
        if self is SpreadKey.VS_FED:
            return SeriesKey.FED_FUNDS
        return SeriesKey.TBILL

    @property
    def label(self) -> str:
        return f"Spread vs {self.risk_free_key.label}"
