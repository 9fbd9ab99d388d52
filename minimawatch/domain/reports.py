"""Report and change-group definitions shared across the service."""

from __future__ import annotations

from enum import Enum


class ReportKind(str, Enum):
    """Kinds of raw weather report handled by the service."""

    TAF = "TAF"
    METAR = "METAR"


class SegmentKind(str, Enum):
    """Validity segment kinds produced when a TAF body is segmented."""

    INITIAL = "INITIAL"
    FM = "FM"
    BECMG = "BECMG"
    TEMPO = "TEMPO"
    PROB = "PROB"


# Segments describing the prevailing forecast; the last one stated wins.
BASE_KINDS: frozenset[SegmentKind] = frozenset(
    {SegmentKind.INITIAL, SegmentKind.FM, SegmentKind.BECMG}
)

# Temporary or probable deteriorations that override the base forecast.
EXCURSION_KINDS: frozenset[SegmentKind] = frozenset(
    {SegmentKind.TEMPO, SegmentKind.PROB}
)

# PROB groups below this percentage are not considered at all.
PROB_THRESHOLD_PCT: int = 30

__all__ = [
    "BASE_KINDS",
    "EXCURSION_KINDS",
    "PROB_THRESHOLD_PCT",
    "ReportKind",
    "SegmentKind",
]
