"""In-memory cache of raw reports keyed by station and report kind."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from threading import Lock
import time
from typing import Callable, Mapping

from minimawatch.config import settings
from minimawatch.domain import ReportKind

logger = logging.getLogger("minimawatch.ingestors.cache")


@dataclass(frozen=True)
class CachedReport:
    """Raw report text and the clock reading when it was fetched."""

    data: str
    fetched_at: float


def default_ttls() -> dict[ReportKind, float]:
    """Freshness windows taken from the configured settings."""

    return {
        ReportKind.TAF: settings.taf_cache_seconds,
        ReportKind.METAR: settings.metar_cache_seconds,
    }


class ReportCache:
    """Station/kind keyed report cache with an independent TTL per kind."""

    def __init__(
        self,
        ttls: Mapping[ReportKind, float] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttls = dict(ttls) if ttls is not None else default_ttls()
        self.clock = clock
        self._lock = Lock()
        self._entries: dict[tuple[str, ReportKind], CachedReport] = {}

    def get(self, station: str, kind: ReportKind) -> str | None:
        """Return the cached text if it is still fresh, otherwise ``None``."""

        key = (station.upper(), kind)
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None

        age = self.clock() - entry.fetched_at
        if age >= self.ttls.get(kind, 0.0):
            logger.debug("Cached %s for %s expired after %.1fs", kind.value, key[0], age)
            return None
        return entry.data

    def put(self, station: str, kind: ReportKind, data: str) -> None:
        with self._lock:
            self._entries[(station.upper(), kind)] = CachedReport(data=data, fetched_at=self.clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["CachedReport", "ReportCache", "default_ttls"]
