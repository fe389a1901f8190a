"""UI widgets for the spread tracker."""

from .metrics_panel import MetricsPanel
from .rates_table import RatesTable
from .spread_chart import SpreadChart
from .tvl_chart import TvlChart

__all__ = ["MetricsPanel", "RatesTable", "SpreadChart", "TvlChart"]
