"""DefiLlama yields API configuration and constants."""

from src.core.models.series import SeriesKey

# Free public API, no key required
DEFILLAMA_API_URL = "https://yields.llama.fi"
POOLS_PATH = "/pools"
CHART_PATH = "/chart/{pool_id}"

# Self-imposed throttle
DEFILLAMA_API_RATE_LIMIT = 60  # requests per minute
DEFILLAMA_API_RATE_WINDOW = 60  # seconds

# Success marker in response envelopes
STATUS_SUCCESS = "success"

# (project, symbol) -> tracked series
TRACKED_POOLS = {
    ("aave-v3", "USDC"): SeriesKey.AAVE_V3_USDC,
    ("aave-v3", "USDT"): SeriesKey.AAVE_V3_USDT,
    ("compound-v3", "USDC"): SeriesKey.COMPOUND_V3_USDC,
    ("morpho-v1", "STEAKUSDC"): SeriesKey.MORPHO_USDC,
}
