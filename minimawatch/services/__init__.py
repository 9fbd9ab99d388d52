"""Service-layer helpers for MinimaWatch."""

from .line_extractor import Minima, ParsedCondition, extract, is_below
from .minima_evaluator import (
    InstantCheck,
    LineCheck,
    any_below,
    below_at_instant,
    below_each_line,
)
from .resolver import Resolution, resolve
from .station_weather import (
    FlightWeather,
    StationWeather,
    StationWeatherService,
    default_minima,
    get_station_weather_service,
)
from .taf_segments import Segment, ValidityWindow, find_validity_window, segment_taf

__all__ = [
    "FlightWeather",
    "InstantCheck",
    "LineCheck",
    "Minima",
    "ParsedCondition",
    "Resolution",
    "Segment",
    "StationWeather",
    "StationWeatherService",
    "ValidityWindow",
    "any_below",
    "below_at_instant",
    "below_each_line",
    "default_minima",
    "extract",
    "find_validity_window",
    "get_station_weather_service",
    "is_below",
    "resolve",
    "segment_taf",
]
