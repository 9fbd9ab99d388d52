"""Raw TAF/METAR ingestion from the aviationweather.gov data API."""

from __future__ import annotations

import logging

import httpx

from minimawatch.config import settings
from minimawatch.domain import ReportKind
from minimawatch.ingestors.cache import ReportCache

logger = logging.getLogger("minimawatch.ingestors.aviation_weather")

_ENDPOINTS = {
    ReportKind.TAF: "taf",
    ReportKind.METAR: "metar",
}


class AviationWeatherIngestor:
    """Fetch raw report text for a station, served from cache while fresh."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        cache: ReportCache | None = None,
        use_cache: bool | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.aviation_weather_base_url).rstrip("/")
        self.timeout = timeout or settings.aviation_weather_timeout
        self.use_cache = settings.enable_report_cache if use_cache is None else use_cache
        self.cache = cache if cache is not None else ReportCache()
        self.transport = transport

    async def get_report(self, station: str | None, kind: ReportKind) -> str:
        if not station:
            return ""
        station = station.strip().upper()

        if self.use_cache:
            cached = self.cache.get(station, kind)
            if cached is not None:
                logger.debug("Serving cached %s for %s", kind.value, station)
                return cached

        url = f"{self.base_url}/{_ENDPOINTS[kind]}"
        params = {"ids": station, "format": "raw"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("%s request for %s timed out: %s", kind.value, station, exc)
            raise RuntimeError("Weather service timeout") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Weather service returned error: kind=%s station=%s status=%s body=%s",
                kind.value,
                station,
                exc.response.status_code,
                exc.response.text,
            )
            raise RuntimeError("Weather service error") from exc
        except httpx.RequestError as exc:
            logger.error("%s request for %s failed: %s", kind.value, station, exc)
            raise RuntimeError("Weather request failed") from exc

        text = response.text.strip()
        if self.use_cache:
            self.cache.put(station, kind, text)
        logger.debug("Fetched %s for %s (%s chars)", kind.value, station, len(text))
        return text

    async def get_taf(self, station: str | None) -> str:
        return await self.get_report(station, ReportKind.TAF)

    async def get_metar(self, station: str | None) -> str:
        return await self.get_report(station, ReportKind.METAR)


__all__ = ["AviationWeatherIngestor"]
