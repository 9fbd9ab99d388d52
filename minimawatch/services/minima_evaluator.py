"""Ceiling/visibility minima checks over raw TAF and METAR text."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import logging
from typing import Iterable, Optional

from minimawatch.services.line_extractor import Minima, extract, is_below
from minimawatch.services.resolver import resolve
from minimawatch.services.taf_segments import Segment, segment_taf

logger = logging.getLogger("minimawatch.services.minima_evaluator")


@dataclass
class InstantCheck:
    """Outcome of checking a TAF against minima at a single instant."""

    below: bool
    condition: Optional[str]
    segment_index: int
    line_index: int
    segments: list[Segment] = field(default_factory=list)

    @property
    def indeterminate(self) -> bool:
        return self.condition is None


@dataclass
class LineCheck:
    """Minima verdict for one physical line of a report."""

    line: str
    below: bool


def below_at_instant(raw: str | None, minima: Minima, target: datetime) -> InstantCheck:
    """Check the condition governing ``target`` against ``minima``.

    When no condition applies the result is not below minima: nothing in the
    report contradicts them.
    """

    segments = segment_taf(raw, target)
    resolution = resolve(segments, target)

    if resolution.condition is None:
        logger.debug("No applicable TAF condition at %s", target.isoformat())
        return InstantCheck(
            below=False,
            condition=None,
            segment_index=-1,
            line_index=-1,
            segments=segments,
        )

    below = is_below(extract(resolution.condition), minima)
    return InstantCheck(
        below=below,
        condition=resolution.condition,
        segment_index=resolution.segment_index,
        line_index=resolution.line_index,
        segments=segments,
    )


def below_each_line(raw: str | None, minima: Minima) -> list[LineCheck]:
    """Flag every physical line of ``raw`` independently, ignoring validity times."""

    if raw is None:
        return []
    return [LineCheck(line=line, below=is_below(extract(line), minima)) for line in raw.split("\n")]


def any_below(lines: Iterable[LineCheck]) -> bool:
    return any(line.below for line in lines)


__all__ = [
    "InstantCheck",
    "LineCheck",
    "any_below",
    "below_at_instant",
    "below_each_line",
]
