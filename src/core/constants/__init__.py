"""Core constants module.

Re-exports all constants for convenience. Provider-specific constants
live in src.providers.
"""

from src.core.constants.generic import (
    DATE_FORMAT,
    SHORT_DISPLAY_DATE_FORMAT,
    DEFAULT_FILL_VALUE,
    DEFAULT_HISTORY_MONTHS,
)

__all__ = [
    "DATE_FORMAT",
    "SHORT_DISPLAY_DATE_FORMAT",
    "DEFAULT_FILL_VALUE",
    "DEFAULT_HISTORY_MONTHS",
]
