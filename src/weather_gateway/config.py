import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Provider (Open-Meteo, no API key required)
    geocoding_api_url: str = os.getenv(
        "GEOCODING_API_URL", "https://geocoding-api.open-meteo.com/v1/search"
    )
    forecast_api_url: str = os.getenv("FORECAST_API_URL", "https://api.open-meteo.com/v1/forecast")
    geocoding_language: str = os.getenv("GEOCODING_LANGUAGE", "en")

    # Per-attempt timeout for upstream requests
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "10.0"))

    # Retry
    retry_max_retries: int = int(os.getenv("RETRY_MAX_RETRIES", "3"))
    retry_backoff_base: float = float(os.getenv("RETRY_BACKOFF_BASE", "2.0"))

    # Circuit breaker
    breaker_failure_threshold: int = int(os.getenv("BREAKER_FAILURE_THRESHOLD", "5"))
    breaker_open_seconds: float = float(os.getenv("BREAKER_OPEN_SECONDS", "30"))

    # Cache
    city_search_ttl: int = int(os.getenv("CITY_SEARCH_TTL", "3600"))  # 1 hour
    forecast_ttl: int = int(os.getenv("FORECAST_TTL", "1800"))  # 30 minutes
    cache_purge_interval: float = float(os.getenv("CACHE_PURGE_INTERVAL", "60"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.http_timeout <= 0:
            raise ValueError("HTTP_TIMEOUT must be positive")

        if self.retry_max_retries < 0:
            raise ValueError("RETRY_MAX_RETRIES must not be negative")

        if self.breaker_failure_threshold < 1:
            raise ValueError(
                f"BREAKER_FAILURE_THRESHOLD must be at least 1, got {self.breaker_failure_threshold}"
            )

        if self.city_search_ttl <= 0 or self.forecast_ttl <= 0:
            raise ValueError("CITY_SEARCH_TTL and FORECAST_TTL must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
