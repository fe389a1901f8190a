"""ASCII TVL chart widget."""

from typing import Hashable, Optional, Sequence

import asciichartpy as acp
from rich.text import Text
from textual.widgets import Static

from src.analytics.metrics import total_tvl
from src.core.models import ReconciledPoint
from src.ui.formatting import format_short_date, format_tvl, resample


class TvlChart(Static):
    """Combined TVL of the selected pools over time, in millions of USD."""

    MAX_POINTS = 80

    def __init__(self, height: int = 8, **kwargs):
        super().__init__(**kwargs)
        self._height = height

    def plot(
        self,
        points: Sequence[ReconciledPoint],
        keys: Optional[Sequence[Hashable]] = None,
        title: str = "DeFi Total Value Locked",
    ) -> None:
        """Render the summed TVL of ``keys`` (default: every pool)."""
        if not points:
            self.update(Text("No data available", style="dim"))
            return
        if keys is not None and not keys:
            self.update(Text("Select at least one pool to display", style="dim"))
            return

        totals = [total_tvl([p], keys) / 1e6 for p in points]
        chart = acp.plot(
            resample(totals, self.MAX_POINTS),
            {"height": self._height, "colors": [acp.cyan], "format": "{:8.0f}"},
        )

        output = Text()
        output.append(f"  {title} ($M)  ", style="bold #06b6d4")
        output.append(f"{format_tvl(total_tvl(points, keys))} selected pools\n", style="bold")
        output.append_text(Text.from_ansi(chart))
        output.append(
            f"\n  {format_short_date(points[0].date)} → {format_short_date(points[-1].date)}",
            style="dim",
        )
        self.update(output)
