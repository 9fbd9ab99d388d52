"""Pydantic models for the MinimaWatch API."""

from .minima import (
    InstantCheckRequest,
    InstantCheckResponse,
    LineCheckModel,
    LineCheckRequest,
    LineCheckResponse,
    MinimaModel,
    SegmentModel,
)
from .stations import FlightCheckRequest, FlightCheckResponse, StationWeatherResponse

__all__ = [
    "FlightCheckRequest",
    "FlightCheckResponse",
    "InstantCheckRequest",
    "InstantCheckResponse",
    "LineCheckModel",
    "LineCheckRequest",
    "LineCheckResponse",
    "MinimaModel",
    "SegmentModel",
    "StationWeatherResponse",
]
