"""Station and flight weather models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from minimawatch.models.minima import InstantCheckResponse, LineCheckModel, MinimaModel
from minimawatch.services import FlightWeather, StationWeather

STATION_PATTERN = r"^[A-Za-z0-9]{4}$"


class StationWeatherResponse(BaseModel):
    """Latest TAF and METAR for a station, flagged line by line."""

    station: str = Field(..., description="ICAO station identifier")
    minima: MinimaModel
    taf: str = Field(default="", description="Raw TAF text")
    metar: str = Field(default="", description="Raw METAR text")
    taf_below: bool = Field(..., description="Any TAF line is below minima")
    metar_below: bool = Field(..., description="Any METAR line is below minima")
    taf_lines: list[LineCheckModel] = Field(default_factory=list)
    metar_lines: list[LineCheckModel] = Field(default_factory=list)

    @classmethod
    def from_station_weather(cls, weather: StationWeather) -> "StationWeatherResponse":
        return cls(
            station=weather.station,
            minima=MinimaModel.from_minima(weather.minima),
            taf=weather.taf,
            metar=weather.metar,
            taf_below=weather.taf_below,
            metar_below=weather.metar_below,
            taf_lines=[LineCheckModel.from_line_check(line) for line in weather.taf_lines],
            metar_lines=[LineCheckModel.from_line_check(line) for line in weather.metar_lines],
        )


class FlightCheckRequest(BaseModel):
    """A flight whose destination or alternate is checked at its ETA."""

    callsign: Optional[str] = Field(default=None, description="Flight callsign")
    arrival: str = Field(..., pattern=STATION_PATTERN, description="Arrival ICAO code")
    alternate: Optional[str] = Field(
        default=None, pattern=STATION_PATTERN, description="Alternate ICAO code"
    )
    use_alternate: bool = Field(
        default=False, description="Check the alternate instead of the arrival station"
    )
    eta: datetime = Field(..., description="Estimated time of arrival (UTC)")
    minima: Optional[MinimaModel] = Field(
        default=None, description="Minima to apply; global minima when omitted"
    )


class FlightCheckResponse(BaseModel):
    """TAF verdict for a flight at its ETA."""

    callsign: Optional[str] = None
    station: str = Field(..., description="Station that was checked")
    use_alternate: bool
    eta: datetime
    below: bool = Field(..., description="Whether the TAF at ETA is below minima")
    taf: str = Field(default="", description="Raw TAF text")
    metar: str = Field(default="", description="Raw METAR text")
    check: Optional[InstantCheckResponse] = Field(
        default=None, description="At-ETA check; null when no TAF is available"
    )

    @classmethod
    def from_flight_weather(
        cls, weather: FlightWeather, callsign: Optional[str] = None
    ) -> "FlightCheckResponse":
        return cls(
            callsign=callsign,
            station=weather.station,
            use_alternate=weather.use_alternate,
            eta=weather.eta,
            below=weather.below,
            taf=weather.taf,
            metar=weather.metar,
            check=(
                InstantCheckResponse.from_check(weather.check, weather.minima)
                if weather.check
                else None
            ),
        )


__all__ = [
    "FlightCheckRequest",
    "FlightCheckResponse",
    "STATION_PATTERN",
    "StationWeatherResponse",
]
