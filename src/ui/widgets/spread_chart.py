"""ASCII spread chart widget."""

from typing import Hashable, Sequence

import asciichartpy as acp
from rich.text import Text
from textual.widgets import Static

from src.core.models import ReconciledPoint, SpreadKey
from src.ui.formatting import format_short_date, resample


class SpreadChart(Static):
    """Line chart of one spread over the reconciled series, via asciichartpy."""

    MAX_POINTS = 80

    def __init__(self, height: int = 12, **kwargs):
        super().__init__(**kwargs)
        self._height = height

    def plot(self, points: Sequence[ReconciledPoint], spread_key: Hashable, title: str = "") -> None:
        """Render ``spread_key`` from ``points``."""
        if not points:
            self.update(Text("No data available", style="dim"))
            return

        values = resample([p.spread(spread_key) for p in points], self.MAX_POINTS)
        chart = acp.plot(
            values,
            {
                "height": self._height,
                "colors": [acp.green if values[-1] >= 0 else acp.red],
                "format": "{:8.2f}",
            },
        )

        label = title or (spread_key.label if isinstance(spread_key, SpreadKey) else str(spread_key))
        output = Text()
        output.append(f"  {label} (%)\n", style="bold #ff8c00")
        output.append_text(Text.from_ansi(chart))
        output.append(
            f"\n  {format_short_date(points[0].date)} → {format_short_date(points[-1].date)}",
            style="dim",
        )
        self.update(output)
