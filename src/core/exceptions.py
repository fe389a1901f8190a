"""Exceptions raised at the data-source boundary."""

from typing import Optional


class SpreadTrackerError(Exception):
    """Base class for errors that fail an aggregate request."""


class UpstreamUnavailable(SpreadTrackerError):
    """A provider fetch failed (transport error or non-success status)."""

    def __init__(self, provider: str, message: str, status: Optional[int] = None):
        self.provider = provider
        self.status = status
        detail = f"{provider} unavailable: {message}"
        if status is not None:
            detail = f"{detail} (HTTP {status})"
        super().__init__(detail)


class ConfigurationError(SpreadTrackerError):
    """A required credential or setting is missing."""
