"""Select the condition that governs a TAF at a given instant."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from minimawatch.domain import BASE_KINDS, EXCURSION_KINDS
from minimawatch.services.taf_segments import Segment, as_utc


@dataclass(frozen=True)
class Resolution:
    """Governing condition at an instant; ``segment_index`` is -1 when none applies."""

    condition: Optional[str] = None
    segment_index: int = -1
    line_index: int = -1


def _base_covers(segment: Segment, target: datetime) -> bool:
    if target < (segment.lead_in or segment.start):
        return False
    if segment.end is None or target < segment.end:
        return True
    return segment.end_inclusive and target == segment.end


def resolve(segments: Sequence[Segment], target: datetime) -> Resolution:
    """Return the condition applicable at ``target``.

    A TEMPO/PROB excursion containing ``target`` (both ends inclusive) wins
    outright. Otherwise the last INITIAL/FM/BECMG segment stated in the
    report that covers ``target`` wins, regardless of how specific its range
    is. Base ends are exclusive except at the validity window's end. The
    INITIAL segment also covers the hours before the window opens on its
    start day, never earlier.
    """

    target = as_utc(target)

    for index, segment in enumerate(segments):
        if segment.kind not in EXCURSION_KINDS or segment.end is None:
            continue
        if segment.start <= target <= segment.end:
            return Resolution(segment.condition, index, segment.line_index)

    resolution = Resolution()
    for index, segment in enumerate(segments):
        if segment.kind in BASE_KINDS and _base_covers(segment, target):
            resolution = Resolution(segment.condition, index, segment.line_index)
    return resolution


__all__ = ["Resolution", "resolve"]
