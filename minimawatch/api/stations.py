"""Station and flight weather endpoints backed by live reports."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from minimawatch.models import (
    FlightCheckRequest,
    FlightCheckResponse,
    StationWeatherResponse,
)
from minimawatch.models.stations import STATION_PATTERN
from minimawatch.services import (
    Minima,
    StationWeatherService,
    default_minima,
    get_station_weather_service,
)

router = APIRouter(prefix="/api/v1", tags=["stations"])

logger = logging.getLogger("minimawatch.api.stations")


def _upstream_error(exc: RuntimeError) -> HTTPException:
    logger.error("Weather retrieval failed: %s", exc)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail="Weather service unavailable",
    )


@router.get(
    "/stations/{station}/weather",
    response_model=StationWeatherResponse,
    summary="Latest TAF and METAR for a station, flagged against minima",
)
async def get_station_weather(
    station: str = Path(..., pattern=STATION_PATTERN, description="ICAO station code"),
    ceiling_ft: Optional[float] = Query(
        default=None, ge=0, description="Minimum ceiling in feet"
    ),
    visibility_sm: Optional[float] = Query(
        default=None, ge=0, description="Minimum visibility in statute miles"
    ),
    service: StationWeatherService = Depends(get_station_weather_service),
) -> StationWeatherResponse:
    """Flag every TAF and METAR line of ``station`` against the given minima."""

    defaults = default_minima()
    minima = Minima(
        ceiling_ft=defaults.ceiling_ft if ceiling_ft is None else ceiling_ft,
        visibility_sm=defaults.visibility_sm if visibility_sm is None else visibility_sm,
    )

    try:
        weather = await service.station_summary(station, minima)
    except RuntimeError as exc:
        raise _upstream_error(exc) from exc

    return StationWeatherResponse.from_station_weather(weather)


@router.post(
    "/flights/check",
    response_model=FlightCheckResponse,
    summary="Check a flight's destination or alternate TAF at its ETA",
)
async def check_flight(
    request: FlightCheckRequest,
    service: StationWeatherService = Depends(get_station_weather_service),
) -> FlightCheckResponse:
    """Run the at-instant minima check for the station the flight is planned into."""

    minima = request.minima.to_minima() if request.minima else None
    try:
        weather = await service.flight_check(
            arrival=request.arrival,
            alternate=request.alternate,
            use_alternate=request.use_alternate,
            eta=request.eta,
            minima=minima,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except RuntimeError as exc:
        raise _upstream_error(exc) from exc

    return FlightCheckResponse.from_flight_weather(weather, callsign=request.callsign)
