"""API routers for the MinimaWatch backend."""

from fastapi import APIRouter

from .health import router as health_router
from .stations import router as stations_router
from .taf import router as taf_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(taf_router)
api_router.include_router(stations_router)

__all__ = ["api_router"]
