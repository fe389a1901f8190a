"""History window helpers."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, List, Optional, Sequence, TypeVar

from dateutil.relativedelta import relativedelta

from src.core.constants import DATE_FORMAT, DEFAULT_HISTORY_MONTHS

T = TypeVar("T")

Clock = Callable[[], datetime]


def _localnow() -> datetime:
    """Get current local time (timezone-aware)."""
    return datetime.now().astimezone()


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar window."""

    start: date
    end: date

    @property
    def start_date(self) -> str:
        """Window start as YYYY-MM-DD."""
        return self.start.strftime(DATE_FORMAT)

    @property
    def end_date(self) -> str:
        """Window end as YYYY-MM-DD."""
        return self.end.strftime(DATE_FORMAT)


def date_range(
    months_back: int = DEFAULT_HISTORY_MONTHS,
    now: Optional[datetime] = None,
    clock: Clock = _localnow,
) -> DateRange:
    """
    Window ending today and starting ``months_back`` calendar months earlier.

    "Today" is the local calendar date unless ``now`` or ``clock`` say otherwise.

    The start day is clamped to the end of a shorter month, so 31 March
    minus one month is 28/29 February.

    Args:
        months_back: Number of calendar months to go back
        now: Explicit current time; takes precedence over ``clock``
        clock: Source of the current time when ``now`` is not given

    Returns:
        DateRange with both ends as calendar dates
    """
    if months_back < 0:
        raise ValueError(f"months_back must be non-negative, got {months_back}")

    current = now if now is not None else clock()
    end = current.date() if isinstance(current, datetime) else current
    return DateRange(start=end - relativedelta(months=months_back), end=end)


def trim_before(points: Sequence[T], start: date, key: Callable[[T], date]) -> List[T]:
    """Drop points dated before ``start``, keeping order."""
    return [p for p in points if key(p) >= start]
