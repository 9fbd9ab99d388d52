"""Split a raw TAF body into dated validity segments.

A TAF is read as one long run of whitespace separated tokens, cut before
every change-group marker (``FMddhhmm``, ``BECMG``, ``TEMPO``, ``PROBdd``).
Every chunk becomes a :class:`Segment` with absolute UTC start/end instants.
Day-of-month values are resolved against the caller's reference instant, and
a validity window such as ``3023/0106`` rolls its low days into the next
calendar month.

Malformed input is absorbed: a chunk whose time group cannot be read is
skipped, and a report without a validity window simply yields no
``INITIAL`` segment.
"""

from __future__ import annotations

from bisect import bisect_right
import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import logging
import re
from typing import Optional

from minimawatch.domain import PROB_THRESHOLD_PCT, SegmentKind

logger = logging.getLogger("minimawatch.services.taf_segments")

_WINDOW_RE = re.compile(r"\b(\d{2})(\d{2})/(\d{2})(\d{2})\b")
_PERIOD_RE = re.compile(r"(\d{2})(\d{2})/(\d{2})(\d{2})")
_FM_RE = re.compile(r"FM(\d{2})(\d{2})(\d{2})")
_PROB_RE = re.compile(r"PROB(\d{2})")

# "PROB30 TEMPO 0112/0114" is one probabilistic group, not two.
_MARKER_RE = re.compile(r"FM\d{6}|BECMG|(?<!PROB\d\d )TEMPO|PROB\d{2}")

# Days apart before a reference is assumed to sit in the neighbouring month.
_HALF_MONTH_DAYS = 15


@dataclass
class Segment:
    """One validity segment of a TAF."""

    kind: SegmentKind
    start: datetime
    end: Optional[datetime]
    condition: str
    line_index: int
    probability: Optional[int] = None
    # The validity window's closing instant still belongs to the forecast.
    end_inclusive: bool = False
    # Earliest instant covered when that precedes ``start`` (INITIAL lead-in).
    lead_in: Optional[datetime] = None


@dataclass(frozen=True)
class ValidityWindow:
    """Overall validity of a TAF, e.g. ``0106/0212``."""

    start: datetime
    end: datetime
    start_day: int
    end_day: int

    @property
    def crosses_month(self) -> bool:
        return self.end_day < self.start_day


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _build_instant(year: int, month: int, day: int, hour: int, minute: int = 0) -> datetime:
    """Build a UTC instant, accepting TAF style hour ``24`` as next-day 00Z."""

    if not 1 <= day <= calendar.monthrange(year, month)[1]:
        raise ValueError(f"day {day} out of range for {year}-{month:02d}")
    if not 0 <= minute <= 59 or not 0 <= hour <= 24 or (hour == 24 and minute):
        raise ValueError(f"invalid time {hour:02d}{minute:02d}")
    return datetime(year, month, day, tzinfo=timezone.utc) + timedelta(hours=hour, minutes=minute)


class _ReportCalendar:
    """Resolve TAF day/hour/minute groups into absolute instants."""

    def __init__(self, reference: datetime, start_day: int | None = None, end_day: int | None = None):
        self.year, self.month = reference.year, reference.month
        self.start_day = start_day
        self.crosses_month = start_day is not None and end_day is not None and end_day < start_day

        if start_day is not None:
            if start_day - reference.day > _HALF_MONTH_DAYS:
                self.year, self.month = _shift_month(self.year, self.month, -1)
            elif reference.day - start_day > _HALF_MONTH_DAYS:
                self.year, self.month = _shift_month(self.year, self.month, 1)

    def instant(self, day: int, hour: int, minute: int = 0) -> datetime:
        year, month = self.year, self.month
        if self.crosses_month and day < self.start_day:
            year, month = _shift_month(year, month, 1)
        return _build_instant(year, month, day, hour, minute)


def find_validity_window(raw: str, reference: datetime) -> ValidityWindow | None:
    """Locate the ``DDHH/DDHH`` validity window anywhere in ``raw``."""

    match = _WINDOW_RE.search(raw or "")
    if not match:
        return None

    start_day, start_hour, end_day, end_hour = (int(group) for group in match.groups())
    cal = _ReportCalendar(as_utc(reference), start_day, end_day)
    try:
        start = cal.instant(start_day, start_hour)
        end = cal.instant(end_day, end_hour)
    except ValueError as exc:
        logger.debug("Ignoring unreadable validity window %s: %s", match.group(0), exc)
        return None
    return ValidityWindow(start=start, end=end, start_day=start_day, end_day=end_day)


def _body_start(text: str) -> int:
    """Offset just past the header, i.e. past a validity window no change group precedes."""

    match = _WINDOW_RE.search(text)
    if not match:
        return 0
    marker = _MARKER_RE.search(text)
    if marker and marker.start() < match.start():
        return 0
    return match.end()


def _chunk_report(raw: str) -> list[tuple[str, int]]:
    """Split the report into ``(chunk, line_index)`` pairs at change-group markers."""

    tokens: list[str] = []
    offsets: list[int] = []
    token_lines: list[int] = []
    position = 0

    for line_index, line in enumerate(raw.split("\n")):
        for token in line.split():
            tokens.append(token)
            offsets.append(position)
            token_lines.append(line_index)
            position += len(token) + 1

    text = " ".join(tokens)
    if not text:
        return []

    body = _body_start(text)
    cuts = [body] + [m.start() for m in _MARKER_RE.finditer(text) if m.start() > body] + [len(text)]
    chunks: list[tuple[str, int]] = []
    for begin, finish in zip(cuts, cuts[1:]):
        piece = text[begin:finish]
        chunk = piece.strip()
        if not chunk:
            continue
        first = begin + len(piece) - len(piece.lstrip())
        chunks.append((chunk, token_lines[bisect_right(offsets, first) - 1]))
    return chunks


def segment_taf(
    raw: str | None,
    reference: datetime,
    *,
    prob_threshold: int = PROB_THRESHOLD_PCT,
) -> list[Segment]:
    """Split ``raw`` into segments in source order.

    ``reference`` supplies the year and month (normally the instant being
    evaluated). FM segments are open-ended until the final pass gives each
    one the start of the next FM, or the validity window's end.
    """

    if not raw:
        return []

    reference = as_utc(reference)
    window = find_validity_window(raw, reference)
    if window:
        cal = _ReportCalendar(reference, window.start_day, window.end_day)
    else:
        cal = _ReportCalendar(reference)

    segments: list[Segment] = []
    initial_seen = False

    for chunk, line_index in _chunk_report(raw):
        try:
            if chunk.startswith("FM"):
                fm = _FM_RE.match(chunk)
                if not fm:
                    logger.debug("Skipping malformed FM group: %r", chunk)
                    continue
                day, hour, minute = (int(group) for group in fm.groups())
                segments.append(
                    Segment(
                        kind=SegmentKind.FM,
                        start=cal.instant(day, hour, minute),
                        end=None,
                        condition=chunk[fm.end():].strip(),
                        line_index=line_index,
                    )
                )
            elif chunk.startswith(("BECMG", "TEMPO", "PROB")):
                probability = None
                if chunk.startswith("PROB"):
                    prob = _PROB_RE.match(chunk)
                    if not prob:
                        logger.debug("Skipping malformed PROB group: %r", chunk)
                        continue
                    probability = int(prob.group(1))
                    if probability < prob_threshold:
                        logger.debug("Discarding PROB%02d group: %r", probability, chunk)
                        continue

                period = _PERIOD_RE.search(chunk)
                if not period:
                    logger.debug("Skipping change group without a period: %r", chunk)
                    continue
                start_day, start_hour, end_day, end_hour = (int(group) for group in period.groups())
                end = cal.instant(end_day, end_hour)

                if probability is not None:
                    kind = SegmentKind.PROB
                elif chunk.startswith("BECMG"):
                    kind = SegmentKind.BECMG
                else:
                    kind = SegmentKind.TEMPO

                segments.append(
                    Segment(
                        kind=kind,
                        start=cal.instant(start_day, start_hour),
                        end=end,
                        condition=chunk[period.end():].strip(),
                        line_index=line_index,
                        probability=probability,
                        end_inclusive=window is not None and end == window.end,
                    )
                )
            elif window and not initial_seen:
                initial_seen = True
                segments.append(
                    Segment(
                        kind=SegmentKind.INITIAL,
                        start=window.start,
                        end=window.end,
                        condition=chunk,
                        line_index=line_index,
                        end_inclusive=True,
                        lead_in=window.start.replace(hour=0, minute=0),
                    )
                )
            else:
                logger.debug("Dropping unclassified chunk: %r", chunk)
        except ValueError as exc:
            logger.debug("Skipping chunk %r with unreadable time group: %s", chunk, exc)

    for index, current in enumerate(segments):
        if current.kind is not SegmentKind.FM:
            continue
        following = next(
            (seg for seg in segments[index + 1:] if seg.kind is SegmentKind.FM), None
        )
        if following is not None:
            current.end = following.start
        elif window is not None:
            current.end = window.end
            current.end_inclusive = True

    return segments


__all__ = ["Segment", "ValidityWindow", "as_utc", "find_validity_window", "segment_taf"]
