"""Pydantic settings for the DeFi vs TradFi spread tracker."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.providers.defillama.config import DEFILLAMA_API_URL
from src.providers.fred.config import FRED_API_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # FRED (risk-free rates)
    fred_api_key: Optional[str] = Field(default=None, description="FRED API key for rate observations")
    fred_api_url: str = Field(
        default=FRED_API_URL,
        description="FRED API base URL",
    )

    # DefiLlama (pool yields)
    defillama_api_url: str = Field(
        default=DEFILLAMA_API_URL,
        description="DefiLlama yields API base URL",
    )
    tracked_chain: str = Field(default="Ethereum", description="Chain the tracked pools live on")

    # History window
    history_months: int = Field(default=18, ge=1, le=120, description="Months of history to request")

    # HTTP
    request_timeout_seconds: int = Field(default=30, ge=1, le=300, description="Total request timeout")

    # Cache Configuration
    cache_dir: Path = Field(default=Path(".cache/defi_spread"), description="Cache directory path")
    cache_ttl_seconds: int = Field(default=3600, ge=60, le=86400, description="Cache TTL in seconds")

    # UI Configuration
    ui_refresh_interval: int = Field(default=3600, ge=10, le=86400, description="UI refresh interval in seconds")

    @field_validator("fred_api_key", mode="before")
    @classmethod
    def parse_fred_api_key(cls, v):
        """Treat a blank key as missing."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("cache_dir", mode="before")
    @classmethod
    def parse_cache_dir(cls, v):
        """Convert string to Path."""
        if isinstance(v, str):
            return Path(v)
        return v

    @property
    def fred_observations_url(self) -> str:
        """Endpoint for FRED series observations."""
        return f"{self.fred_api_url.rstrip('/')}/series/observations"

    def ensure_cache_dir(self) -> Path:
        """Ensure cache directory exists and return it."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        return self.cache_dir


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
