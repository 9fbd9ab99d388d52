from __future__ import annotations

import contextlib
import logging
import time

from fastapi import FastAPI, Request

from minimawatch.api import api_router
from minimawatch.config import settings
from minimawatch.services import get_station_weather_service

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("minimawatch")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""

    service = get_station_weather_service()
    logger.info(
        "MinimaWatch starting: env=%s weather_api=%s report_cache=%s",
        settings.minimawatch_env,
        service.ingestor.base_url,
        "on" if service.ingestor.use_cache else "off",
    )

    try:
        yield
    finally:
        service.ingestor.cache.clear()
        logger.info("Report cache cleared on shutdown")


app = FastAPI(title="MinimaWatch Backend", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "MinimaWatch backend is running"}
