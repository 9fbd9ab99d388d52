"""Request and response models for minima checks."""

from __future__ import annotations

from datetime import datetime
import math
from typing import Optional

from pydantic import BaseModel, Field

from minimawatch.domain import SegmentKind
from minimawatch.services import InstantCheck, LineCheck, Minima, Segment, extract


class MinimaModel(BaseModel):
    """Ceiling and visibility thresholds for a check."""

    ceiling_ft: float = Field(..., ge=0, description="Minimum ceiling in feet")
    visibility_sm: float = Field(
        ..., ge=0, description="Minimum visibility in statute miles"
    )

    def to_minima(self) -> Minima:
        return Minima(ceiling_ft=self.ceiling_ft, visibility_sm=self.visibility_sm)

    @classmethod
    def from_minima(cls, minima: Minima) -> "MinimaModel":
        return cls(ceiling_ft=minima.ceiling_ft, visibility_sm=minima.visibility_sm)


class SegmentModel(BaseModel):
    """A dated validity segment of a TAF."""

    kind: SegmentKind = Field(..., description="Change-group kind")
    start: datetime = Field(..., description="Segment start (UTC)")
    end: Optional[datetime] = Field(
        default=None, description="Segment end (UTC) where it is known"
    )
    condition: str = Field(..., description="Condition text of the segment")
    line_index: int = Field(..., description="Physical line the segment starts on")
    probability: Optional[int] = Field(
        default=None, description="Probability in percent for PROB groups"
    )

    @classmethod
    def from_segment(cls, segment: Segment) -> "SegmentModel":
        return cls(
            kind=segment.kind,
            start=segment.start,
            end=segment.end,
            condition=segment.condition,
            line_index=segment.line_index,
            probability=segment.probability,
        )


class LineCheckModel(BaseModel):
    """Minima verdict for one physical report line."""

    line: str
    below: bool

    @classmethod
    def from_line_check(cls, check: LineCheck) -> "LineCheckModel":
        return cls(line=check.line, below=check.below)


class InstantCheckRequest(BaseModel):
    """Raw TAF evaluated at a single instant."""

    raw: str = Field(..., description="Raw TAF text")
    target: datetime = Field(..., description="Instant to evaluate (UTC)")
    minima: Optional[MinimaModel] = Field(
        default=None, description="Minima to apply; global minima when omitted"
    )


class InstantCheckResponse(BaseModel):
    """Outcome of an at-instant minima check."""

    below: bool = Field(..., description="Whether the governing condition is below minima")
    indeterminate: bool = Field(
        ..., description="True when no TAF condition applies at the instant"
    )
    condition: Optional[str] = Field(default=None, description="Governing condition text")
    segment_index: int = Field(..., description="Index of the governing segment, or -1")
    line_index: int = Field(..., description="Physical line to highlight, or -1")
    ceiling_ft: Optional[float] = Field(
        default=None, description="Ceiling of the governing condition; null when unlimited"
    )
    visibility_sm: Optional[float] = Field(
        default=None, description="Visibility of the governing condition; null when not given"
    )
    visibility_is_at_least: bool = Field(
        default=False, description="Visibility was reported as greater than the value"
    )
    minima: MinimaModel
    segments: list[SegmentModel] = Field(default_factory=list)

    @classmethod
    def from_check(cls, check: InstantCheck, minima: Minima) -> "InstantCheckResponse":
        parsed = extract(check.condition)
        return cls(
            below=check.below,
            indeterminate=check.indeterminate,
            condition=check.condition,
            segment_index=check.segment_index,
            line_index=check.line_index,
            ceiling_ft=finite_or_none(parsed.ceiling_ft),
            visibility_sm=finite_or_none(parsed.visibility_sm),
            visibility_is_at_least=parsed.visibility_is_at_least,
            minima=MinimaModel.from_minima(minima),
            segments=[SegmentModel.from_segment(seg) for seg in check.segments],
        )


class LineCheckRequest(BaseModel):
    """Raw report text whose lines are flagged independently."""

    raw: str = Field(..., description="Raw TAF or METAR text")
    minima: Optional[MinimaModel] = Field(
        default=None, description="Minima to apply; global minima when omitted"
    )


class LineCheckResponse(BaseModel):
    """Per-line minima verdicts in the order of the input lines."""

    any_below: bool
    minima: MinimaModel
    lines: list[LineCheckModel] = Field(default_factory=list)


def finite_or_none(value: float) -> Optional[float]:
    """JSON has no infinity; missing groups are reported as null."""

    return None if math.isinf(value) else value


__all__ = [
    "InstantCheckRequest",
    "InstantCheckResponse",
    "LineCheckModel",
    "LineCheckRequest",
    "LineCheckResponse",
    "MinimaModel",
    "SegmentModel",
    "finite_or_none",
]
