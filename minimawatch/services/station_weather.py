"""Combine report ingestion with minima checks for stations and flights."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
import logging
from typing import Optional

from minimawatch.config import settings
from minimawatch.ingestors import AviationWeatherIngestor
from minimawatch.services.line_extractor import Minima
from minimawatch.services.minima_evaluator import (
    InstantCheck,
    LineCheck,
    any_below,
    below_at_instant,
    below_each_line,
)

logger = logging.getLogger("minimawatch.services.station_weather")


def default_minima() -> Minima:
    """Global minima used when a caller does not supply its own."""

    return Minima(
        ceiling_ft=settings.default_min_ceiling_ft,
        visibility_sm=settings.default_min_visibility_sm,
    )


@dataclass
class StationWeather:
    """Latest reports for a station with every line checked against minima."""

    station: str
    minima: Minima
    taf: str
    metar: str
    taf_lines: list[LineCheck]
    metar_lines: list[LineCheck]

    @property
    def taf_below(self) -> bool:
        return any_below(self.taf_lines)

    @property
    def metar_below(self) -> bool:
        return any_below(self.metar_lines)


@dataclass
class FlightWeather:
    """TAF verdict at a flight's ETA for its destination or alternate."""

    station: str
    use_alternate: bool
    eta: datetime
    minima: Minima
    taf: str
    metar: str
    check: Optional[InstantCheck]

    @property
    def below(self) -> bool:
        return self.check.below if self.check else False


class StationWeatherService:
    """Fetches TAF/METAR text and runs the minima evaluator over it."""

    def __init__(self, ingestor: Optional[AviationWeatherIngestor] = None) -> None:
        self.ingestor = ingestor or AviationWeatherIngestor()

    async def _fetch_reports(self, station: str) -> tuple[str, str]:
        taf, metar = await asyncio.gather(
            self.ingestor.get_taf(station),
            self.ingestor.get_metar(station),
        )
        return taf, metar

    async def station_summary(
        self, station: str, minima: Optional[Minima] = None
    ) -> StationWeather:
        minima = minima or default_minima()
        station = station.upper()
        taf, metar = await self._fetch_reports(station)

        summary = StationWeather(
            station=station,
            minima=minima,
            taf=taf,
            metar=metar,
            taf_lines=below_each_line(taf, minima) if taf else [],
            metar_lines=below_each_line(metar, minima) if metar else [],
        )
        logger.info(
            "Station summary computed: station=%s taf_below=%s metar_below=%s",
            station,
            summary.taf_below,
            summary.metar_below,
        )
        return summary

    async def flight_check(
        self,
        *,
        arrival: str,
        eta: datetime,
        alternate: Optional[str] = None,
        use_alternate: bool = False,
        minima: Optional[Minima] = None,
    ) -> FlightWeather:
        if use_alternate and not alternate:
            raise ValueError("Alternate station requested but none was given")

        minima = minima or default_minima()
        station = (alternate if use_alternate else arrival).upper()
        taf, metar = await self._fetch_reports(station)

        check = below_at_instant(taf, minima, eta) if taf else None
        result = FlightWeather(
            station=station,
            use_alternate=use_alternate,
            eta=eta,
            minima=minima,
            taf=taf,
            metar=metar,
            check=check,
        )
        logger.info(
            "Flight check computed: station=%s eta=%s below=%s",
            station,
            eta.isoformat(),
            result.below,
        )
        return result


_default_service = StationWeatherService()


def get_station_weather_service() -> StationWeatherService:
    """Return the shared service so every request reuses one report cache."""

    return _default_service


__all__ = [
    "FlightWeather",
    "StationWeather",
    "StationWeatherService",
    "default_minima",
    "get_station_weather_service",
]
