"""Ceiling and visibility extraction from a single report line."""

from __future__ import annotations

from dataclasses import dataclass
import math
import re

_CEILING_RE = re.compile(r"(BKN|OVC|VV)(\d{3})")

# Statute-mile visibility: "6SM", "P6SM", "1/2SM", "1 1/2SM", "M1/4SM".
_VISIBILITY_RE = re.compile(
    r"(?<![\d/])(?P<prefix>[PM])?"
    r"(?:(?P<whole>\d{1,2}) (?=\d/))?"
    r"(?:(?P<num>\d)/(?P<den>\d{1,2})|(?P<miles>\d{1,2}))SM"
)

# Plain "P?nnSM" reading for groups the fraction form rejects, e.g. "11/2SM".
_WHOLE_MILES_RE = re.compile(r"(?P<prefix>P)?(?P<miles>\d{1,2})SM")


@dataclass(frozen=True)
class Minima:
    """Ceiling and visibility thresholds supplied per query."""

    ceiling_ft: float
    visibility_sm: float


@dataclass(frozen=True)
class ParsedCondition:
    """Ceiling and visibility figures read from one condition line.

    ``math.inf`` stands for "no group in this line" and never fails a minimum.
    ``visibility_is_at_least`` marks a ``P<n>SM`` group: the real visibility
    exceeds ``visibility_sm``.
    """

    ceiling_ft: float = math.inf
    visibility_sm: float = math.inf
    visibility_is_at_least: bool = False


def _visibility_from_match(match: re.Match) -> float:
    if match.group("miles") is not None:
        return float(int(match.group("miles")))

    denominator = int(match.group("den"))
    if denominator == 0:
        return math.inf
    value = int(match.group("num")) / denominator
    if match.group("whole") is not None:
        value += int(match.group("whole"))
    return value


def extract(line: str | None) -> ParsedCondition:
    """Extract ceiling (feet) and visibility (statute miles) from ``line``."""

    if not line:
        return ParsedCondition()

    ceiling = math.inf
    cloud = _CEILING_RE.search(line)
    if cloud:
        ceiling = float(int(cloud.group(2)) * 100)

    visibility = math.inf
    is_at_least = False
    vis = _VISIBILITY_RE.search(line) or _WHOLE_MILES_RE.search(line)
    if vis:
        visibility = _visibility_from_match(vis)
        is_at_least = vis.group("prefix") == "P"

    return ParsedCondition(
        ceiling_ft=ceiling,
        visibility_sm=visibility,
        visibility_is_at_least=is_at_least,
    )


def is_below(parsed: ParsedCondition, minima: Minima) -> bool:
    """Return True when ``parsed`` breaches either dimension of ``minima``."""

    visibility_ok = parsed.visibility_is_at_least or parsed.visibility_sm >= minima.visibility_sm
    ceiling_ok = parsed.ceiling_ft >= minima.ceiling_ft
    return not (visibility_ok and ceiling_ok)


__all__ = ["Minima", "ParsedCondition", "extract", "is_below"]
