"""Minima checks over caller-supplied report text."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from minimawatch.models import (
    InstantCheckRequest,
    InstantCheckResponse,
    LineCheckModel,
    LineCheckRequest,
    LineCheckResponse,
    MinimaModel,
)
from minimawatch.services import any_below, below_at_instant, below_each_line, default_minima

router = APIRouter(prefix="/api/v1/taf", tags=["taf"])

logger = logging.getLogger("minimawatch.api.taf")


@router.post(
    "/instant-check",
    response_model=InstantCheckResponse,
    summary="Check the TAF condition governing an instant against minima",
)
def instant_check(request: InstantCheckRequest) -> InstantCheckResponse:
    """Segment the TAF, resolve the condition at ``target`` and compare it with minima."""

    minima = request.minima.to_minima() if request.minima else default_minima()
    check = below_at_instant(request.raw, minima, request.target)

    logger.info(
        "Instant check: target=%s below=%s segment=%s",
        request.target.isoformat(),
        check.below,
        check.segment_index,
    )
    return InstantCheckResponse.from_check(check, minima)


@router.post(
    "/line-check",
    response_model=LineCheckResponse,
    summary="Flag every report line below minima",
)
def line_check(request: LineCheckRequest) -> LineCheckResponse:
    """Evaluate each physical line on its own, ignoring validity times."""

    minima = request.minima.to_minima() if request.minima else default_minima()
    lines = below_each_line(request.raw, minima)

    return LineCheckResponse(
        any_below=any_below(lines),
        minima=MinimaModel.from_minima(minima),
        lines=[LineCheckModel.from_line_check(line) for line in lines],
    )
