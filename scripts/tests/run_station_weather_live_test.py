#!/usr/bin/env python
"""
Run this to fetch live TAF/METAR text for a station and print the minima checks.

Usage (from repo root):
    python scripts/tests/run_station_weather_live_test.py [ICAO] [HOURS_AHEAD]
"""

import asyncio
from datetime import datetime, timedelta, timezone
import sys

from minimawatch.services import Minima, StationWeatherService


STATION = sys.argv[1] if len(sys.argv) > 1 else "KBOI"
HOURS_AHEAD = float(sys.argv[2]) if len(sys.argv) > 2 else 3.0
MINIMA = Minima(ceiling_ft=500, visibility_sm=1)


async def main() -> None:
    now = datetime.now(timezone.utc)
    eta = now + timedelta(hours=HOURS_AHEAD)
    service = StationWeatherService()

    print(f"=== Live minima check for {STATION} (UTC now: {now.isoformat()}) ===\n")

    summary = await service.station_summary(STATION, MINIMA)
    print(f"METAR: {summary.metar or '(none)'}")
    print(f"METAR below minima: {summary.metar_below}\n")

    print("TAF, line by line:")
    for line in summary.taf_lines:
        marker = "!!" if line.below else "  "
        print(f"{marker} {line.line}")

    flight = await service.flight_check(arrival=STATION, eta=eta, minima=MINIMA)
    print(f"\nAt ETA {eta.strftime('%d%H%MZ')}:")
    if flight.check is None or flight.check.condition is None:
        print("No TAF condition applies (indeterminate).")
    else:
        print(f"Governing condition (line {flight.check.line_index}): {flight.check.condition}")
        print("Below minima" if flight.below else "Above minima")


if __name__ == "__main__":
    asyncio.run(main())
