"""Configuration settings for the MinimaWatch backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger("minimawatch.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_float(env_var: str, default: float) -> float:
    """Parse an environment variable into a float, falling back on bad input."""

    value = os.getenv(env_var)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r; using %s", env_var, value, default)
        return default


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    minimawatch_env: str = os.getenv("MINIMAWATCH_ENV", "local")
    log_level: str = os.getenv("MINIMAWATCH_LOG_LEVEL", "INFO")

    # aviationweather.gov data API
    aviation_weather_base_url: str = os.getenv(
        "AVIATION_WEATHER_BASE_URL", "https://aviationweather.gov/api/data"
    )
    aviation_weather_timeout: float = _get_float("AVIATION_WEATHER_TIMEOUT", 10.0)

    # Report cache freshness, per report kind
    enable_report_cache: bool = _get_bool("ENABLE_REPORT_CACHE", default=True)
    taf_cache_seconds: float = _get_float("TAF_CACHE_SECONDS", 600.0)
    metar_cache_seconds: float = _get_float("METAR_CACHE_SECONDS", 60.0)

    # Global minima applied when a request does not carry its own
    default_min_ceiling_ft: float = _get_float("DEFAULT_MIN_CEILING_FT", 500.0)
    default_min_visibility_sm: float = _get_float("DEFAULT_MIN_VISIBILITY_SM", 1.0)


settings = Settings()

__all__ = ["settings", "Settings"]
