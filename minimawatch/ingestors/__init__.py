"""Data ingestors for MinimaWatch."""

from .aviation_weather import AviationWeatherIngestor
from .cache import CachedReport, ReportCache, default_ttls

__all__ = [
    "AviationWeatherIngestor",
    "CachedReport",
    "ReportCache",
    "default_ttls",
]
