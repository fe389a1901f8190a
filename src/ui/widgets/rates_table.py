"""Current rates DataTable widget."""

from typing import Hashable

from rich.text import Text
from textual.widgets import DataTable

from src.core.models import CurrentRates, SeriesKey
from src.ui.formatting import format_date, format_percent, format_spread, spread_style


def _label(key: Hashable) -> str:
    return key.label if isinstance(key, SeriesKey) else str(key)


class RatesTable(DataTable):
    """
    DataTable widget listing the latest value of every tracked series.

    DeFi rows also show their spread over each risk-free rate.
    """

    COLUMNS = [
        ("Series", 20),
        ("Type", 8),
        ("Rate", 10),
        ("vs Fed", 10),
        ("vs T-Bill", 10),
    ]

    def __init__(self, **kwargs):
        super().__init__(cursor_type="row", zebra_stripes=True, **kwargs)

    def on_mount(self) -> None:
        """Set up columns when widget is mounted."""
        for name, width in self.COLUMNS:
            self.add_column(name, width=width)

    def load_rates(self, rates: CurrentRates) -> None:
        """Load the latest rates into the table."""
        self.clear()

        fed = rates.tradfi.get(SeriesKey.FED_FUNDS, 0.0)
        tbill = rates.tradfi.get(SeriesKey.TBILL, 0.0)

        for key, value in rates.defi.items():
            self.add_row(
                _label(key),
                Text("DeFi", style="#6366f1"),
                Text(format_percent(value), style="bold"),
                self._spread(value - fed),
                self._spread(value - tbill),
                key=f"defi:{getattr(key, 'value', key)}",
            )

        for key, value in rates.tradfi.items():
            self.add_row(
                _label(key),
                Text("TradFi", style="#f59e0b"),
                Text(format_percent(value), style="bold"),
                Text("-", style="dim"),
                Text("-", style="dim"),
                key=f"tradfi:{getattr(key, 'value', key)}",
            )

        if rates.as_of:
            self.border_subtitle = f"as of {format_date(rates.as_of)}"

    @staticmethod
    def _spread(value: float) -> Text:
        return Text(format_spread(value), style=spread_style(value))
