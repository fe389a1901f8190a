"""Metrics panel widget for spread summaries."""

from typing import Dict, Hashable, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual.widgets import Static

from src.core.models import SpreadKey, SpreadMetrics
from src.ui.formatting import SIGNAL_STYLES, format_date, format_spread, spread_style


class MetricsPanel(Static):
    """
    Panel widget showing current, average, max and min spread.

    One column per spread definition.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._metrics: Dict[Hashable, SpreadMetrics] = {}
        self._subtitle: Optional[str] = None

    def update_metrics(self, metrics: Dict[Hashable, SpreadMetrics], subtitle: Optional[str] = None) -> None:
        """Replace the displayed metrics."""
        self._metrics = metrics
        self._subtitle = subtitle
        self._render()

    def on_mount(self) -> None:
        """Initial render."""
        self._render()

    def _render(self) -> None:
        if not self._metrics:
            self.update(
                Panel(
                    Text("No spread data loaded", style="dim italic", justify="center"),
                    title="[bold orange1]Spread Metrics[/]",
                    border_style="dim",
                )
            )
            return
        self.update(self._build_content())

    def _build_content(self) -> Panel:
        table = Table(
            show_header=True,
            header_style="bold orange1",
            border_style="dim",
            expand=True,
            padding=(0, 1),
        )
        table.add_column("Metric", style="cyan", width=10)
        for key in self._metrics:
            label = key.label if isinstance(key, SpreadKey) else str(key)
            table.add_column(label, justify="right")

        rows = [
            ("Current", lambda m: self._value(m.current, style=SIGNAL_STYLES[m.signal])),
            ("Average", lambda m: self._value(m.average)),
            ("Max", lambda m: self._value(m.max.value, format_date(m.max.date))),
            ("Min", lambda m: self._value(m.min.value, format_date(m.min.date))),
        ]
        for name, render in rows:
            table.add_row(name, *(render(m) for m in self._metrics.values()))

        return Panel(
            table,
            title="[bold orange1]Spread Metrics[/]",
            subtitle=self._subtitle,
            border_style="dim",
        )

    @staticmethod
    def _value(value: float, when: str = "", style: Optional[str] = None) -> Text:
        text = Text(format_spread(value), style=style or spread_style(value))
        if when:
            text.append(f"  {when}", style="dim")
        return text
