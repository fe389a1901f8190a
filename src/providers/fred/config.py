"""FRED (Federal Reserve Economic Data) configuration and constants."""

from src.core.models.series import SeriesKey

# Requires a free API key: https://fred.stlouisfed.org/docs/api/api_key.html
FRED_API_URL = "https://api.stlouisfed.org/fred"

# FRED allows 120 requests per minute per key
FRED_API_RATE_LIMIT = 120
FRED_API_RATE_WINDOW = 60  # seconds

# FRED marks days without a value with "."
MISSING_VALUE = "."

# Series IDs
FED_FUNDS_SERIES_ID = "DFF"  # Effective Federal Funds Rate, daily
TBILL_3M_SERIES_ID = "DTB3"  # 3-Month Treasury Bill Secondary Market Rate

FRED_SERIES = {
    SeriesKey.FED_FUNDS: FED_FUNDS_SERIES_ID,
    SeriesKey.TBILL: TBILL_3M_SERIES_ID,
}
