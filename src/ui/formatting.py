"""Display formatting helpers shared by the widgets."""

from datetime import date
from typing import List, Optional, Union

from src.core.constants import SHORT_DISPLAY_DATE_FORMAT

# Spread signal -> rich style
SIGNAL_STYLES = {
    "positive": "bold green",
    "negative": "bold red",
    "neutral": "dim",
}


def _as_date(value: Union[date, str]) -> date:
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return value


def format_date(value: Optional[Union[date, str]]) -> str:
    """Format as 'Jan 1, 2024'; empty for missing dates."""
    if not value:
        return ""
    d = _as_date(value)
    return f"{d:%b} {d.day}, {d.year}"


def format_short_date(value: Optional[Union[date, str]]) -> str:
    """Format as 'Jan 2024'."""
    if not value:
        return ""
    return _as_date(value).strftime(SHORT_DISPLAY_DATE_FORMAT)


def format_percent(value: float) -> str:
    """Format a percentage rate with two decimals."""
    return f"{value:.2f}%"


def format_spread(value: float) -> str:
    """Format a spread with an explicit sign."""
    return f"{value:+.2f}%"


def spread_style(value: float) -> str:
    """Rich style for a spread value."""
    if value > 0:
        return SIGNAL_STYLES["positive"]
    if value < 0:
        return SIGNAL_STYLES["negative"]
    return SIGNAL_STYLES["neutral"]


def format_tvl(value: float) -> str:
    """Compact USD amount: $1.2B, $350M, $900K."""
    if value >= 1e9:
        return f"${value / 1e9:.1f}B"
    if value >= 1e6:
        return f"${value / 1e6:.0f}M"
    return f"${value / 1e3:.0f}K"


def resample(values: List[float], max_points: int) -> List[float]:
    """Downsample to at most ``max_points``, always keeping the last value."""
    if len(values) <= max_points:
        return values
    step = len(values) / max_points
    sampled = [values[int(i * step)] for i in range(max_points - 1)]
    sampled.append(values[-1])
    return sampled
