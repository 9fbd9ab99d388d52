"""Domain definitions for MinimaWatch."""

from .reports import (
    BASE_KINDS,
    EXCURSION_KINDS,
    PROB_THRESHOLD_PCT,
    ReportKind,
    SegmentKind,
)

__all__ = [
    "BASE_KINDS",
    "EXCURSION_KINDS",
    "PROB_THRESHOLD_PCT",
    "ReportKind",
    "SegmentKind",
]
