"""Main Textual application for the DeFi vs TradFi spread tracker."""

import logging
from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Static

from config.settings import get_settings
from src.analytics.engine import SpreadEngine, SpreadReport
from src.analytics.metrics import compute_all_metrics
from src.analytics.reconciliation import select_pool_spreads
from src.core.models import SeriesKey, SpreadKey
from src.data.pipeline import DataPipeline
from src.ui.widgets import MetricsPanel, RatesTable, SpreadChart, TvlChart

# Suppress INFO logs in UI - only show warnings and errors
logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)


class SpreadTrackerApp(App):
    """Terminal dashboard comparing DeFi lending yields with risk-free rates."""

    TITLE = "DeFi vs TradFi Spread Tracker"

    CSS = """
    Screen { background: #000000; }

    #top { height: auto; }
    #metrics { width: 2fr; }
    #rates { width: 3fr; height: auto; max-height: 12; }
    #chart { height: 1fr; padding: 1 1; }
    #tvl { height: auto; padding: 0 1; }

    #status {
        dock: bottom;
        height: 1;
        background: #111;
        color: #888;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("p", "cycle_pool", "Compare pool"),
        Binding("s", "toggle_spread", "Fed/T-Bill"),
    ]

    def __init__(self, engine: Optional[SpreadEngine] = None):
        super().__init__()
        self.settings = get_settings()
        self.engine = engine or SpreadEngine(DataPipeline(settings=self.settings))
        self._report: Optional[SpreadReport] = None
        self._spread_key = SpreadKey.VS_FED
        # None = best available rate across pools
        self._pool_choices: List[Optional[SeriesKey]] = [None, *SeriesKey.defi_keys()]
        self._pool_index = 0

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical():
            with Horizontal(id="top"):
                yield MetricsPanel(id="metrics")
                yield RatesTable(id="rates")
            yield SpreadChart(id="chart")
            yield TvlChart(id="tvl")
        yield Static("R: Refresh  P: Compare pool  S: Fed/T-Bill  Q: Quit", id="status")
        yield Footer()

    async def on_mount(self) -> None:
        """Load data and schedule periodic refresh."""
        await self._load(force_refresh=False)
        self.set_interval(self.settings.ui_refresh_interval, self.action_refresh)

    async def on_unmount(self) -> None:
        await self.engine.close()

    async def _load(self, force_refresh: bool) -> None:
        status = self.query_one("#status", Static)
        status.update("Loading rates...")
        try:
            self._report = await self.engine.build_report(force_refresh=force_refresh)
        except Exception as e:
            logger.error(f"Error loading spread report: {e}")
            status.update(f"[red]Failed to load data: {e}[/]")
            return

        self._render_report()
        window = self._report.window
        period = f"{window.start_date} to {window.end_date}" if window else ""
        status.update(f"{len(self._report.points)} dates | {period} | R to refresh")

    def _render_report(self) -> None:
        if self._report is None:
            return

        pool = self._pool_choices[self._pool_index]
        points = self._report.points
        if pool is None:
            metrics = self._report.metrics
            subtitle = "best available DeFi rate"
        else:
            points = select_pool_spreads(points, pool)
            metrics = compute_all_metrics(points, list(SpreadKey))
            subtitle = pool.label

        self.query_one("#metrics", MetricsPanel).update_metrics(metrics, subtitle=subtitle)
        self.query_one("#rates", RatesTable).load_rates(self._report.rates)
        self.query_one("#chart", SpreadChart).plot(
            points, self._spread_key, title=f"{self._spread_key.label} ({subtitle})"
        )
        self.query_one("#tvl", TvlChart).plot(
            self._report.tvl, keys=None if pool is None else [pool]
        )

    async def action_refresh(self) -> None:
        """Refetch all data, bypassing caches."""
        await self._load(force_refresh=True)

    def action_cycle_pool(self) -> None:
        """Cycle between best rate and each individual pool."""
        self._pool_index = (self._pool_index + 1) % len(self._pool_choices)
        self._render_report()

    def action_toggle_spread(self) -> None:
        """Switch the chart between Fed Funds and T-Bill spreads."""
        self._spread_key = SpreadKey.VS_TBILL if self._spread_key == SpreadKey.VS_FED else SpreadKey.VS_FED
        self._render_report()


def main():
    SpreadTrackerApp().run()


if __name__ == "__main__":
    main()
