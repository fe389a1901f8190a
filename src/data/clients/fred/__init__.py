"""FRED API client."""

from src.data.clients.fred.client import FredClient
from src.data.clients.fred.parser import FredParser

__all__ = [
    "FredClient",
    "FredParser",
]
