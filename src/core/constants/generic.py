"""Generic constants for rate reconciliation.

These constants are provider-agnostic and shared by the data and analytics layers.
"""

# Calendar
DATE_FORMAT = "%Y-%m-%d"
SHORT_DISPLAY_DATE_FORMAT = "%b %Y"  # Jan 2024

# Reconciliation
DEFAULT_FILL_VALUE = 0.0  # Value of a series before its first observation

# Default history window
DEFAULT_HISTORY_MONTHS = 18
