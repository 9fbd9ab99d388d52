from datetime import datetime, timezone

import pytest

from minimawatch.config import settings
from minimawatch.services.line_extractor import Minima
from minimawatch.services.station_weather import StationWeatherService, default_minima

TAF_KAAA = """TAF KAAA 010520Z 0106/0212 18010KT P6SM BKN020
     FM011200 20012KT 3SM BR OVC008
     TEMPO 0112/0114 1SM BR OVC003"""

TAF_KBBB = "TAF KBBB 010520Z 0106/0212 P6SM SCT040"


class FakeAviationWeatherIngestor:
    def __init__(self, tafs: dict[str, str] | None = None, metars: dict[str, str] | None = None, fail: bool = False):
        self.tafs = tafs or {}
        self.metars = metars or {}
        self.fail = fail
        self.requested: list[tuple[str, str]] = []

    async def get_taf(self, station):
        self.requested.append(("TAF", station))
        if self.fail:
            raise RuntimeError("Weather service error")
        return self.tafs.get(station, "")

    async def get_metar(self, station):
        self.requested.append(("METAR", station))
        if self.fail:
            raise RuntimeError("Weather service error")
        return self.metars.get(station, "")


def _service(**kwargs) -> StationWeatherService:
    return StationWeatherService(ingestor=FakeAviationWeatherIngestor(**kwargs))


@pytest.mark.anyio
async def test_station_summary_flags_lines():
    service = _service(
        tafs={"KAAA": TAF_KAAA},
        metars={"KAAA": "METAR KAAA 011053Z 18010KT 10SM BKN025"},
    )

    summary = await service.station_summary("kaaa", Minima(ceiling_ft=500, visibility_sm=1))

    assert summary.station == "KAAA"
    assert [line.below for line in summary.taf_lines] == [False, False, True]
    assert summary.taf_below is True
    assert summary.metar_below is False
    assert len(summary.metar_lines) == 1


@pytest.mark.anyio
async def test_station_summary_without_reports():
    summary = await _service().station_summary("KZZZ")

    assert summary.taf == ""
    assert summary.taf_lines == []
    assert summary.metar_lines == []
    assert summary.taf_below is False


@pytest.mark.anyio
async def test_station_summary_uses_global_minima(monkeypatch):
    monkeypatch.setattr(settings, "default_min_ceiling_ft", 1000.0)
    monkeypatch.setattr(settings, "default_min_visibility_sm", 3.0)

    service = _service(tafs={"KAAA": TAF_KAAA})
    summary = await service.station_summary("KAAA")

    assert summary.minima == Minima(ceiling_ft=1000.0, visibility_sm=3.0)
    assert [line.below for line in summary.taf_lines] == [False, True, True]


@pytest.mark.anyio
async def test_flight_check_uses_arrival_by_default():
    service = _service(tafs={"KAAA": TAF_KAAA, "KBBB": TAF_KBBB})

    result = await service.flight_check(
        arrival="KAAA",
        alternate="KBBB",
        eta=datetime(2024, 3, 1, 13, tzinfo=timezone.utc),
        minima=Minima(ceiling_ft=500, visibility_sm=1),
    )

    assert result.station == "KAAA"
    assert result.below is True
    assert result.check.condition == "1SM BR OVC003"
    assert result.check.line_index == 2


@pytest.mark.anyio
async def test_flight_check_on_alternate():
    ingestor = FakeAviationWeatherIngestor(tafs={"KAAA": TAF_KAAA, "KBBB": TAF_KBBB})
    service = StationWeatherService(ingestor=ingestor)

    result = await service.flight_check(
        arrival="KAAA",
        alternate="KBBB",
        use_alternate=True,
        eta=datetime(2024, 3, 1, 13, tzinfo=timezone.utc),
    )

    assert result.station == "KBBB"
    assert result.use_alternate is True
    assert result.below is False
    assert ("TAF", "KBBB") in ingestor.requested
    assert ("TAF", "KAAA") not in ingestor.requested


@pytest.mark.anyio
async def test_flight_check_without_taf_is_not_below():
    result = await _service().flight_check(
        arrival="KAAA", eta=datetime(2024, 3, 1, 13, tzinfo=timezone.utc)
    )

    assert result.check is None
    assert result.below is False


@pytest.mark.anyio
async def test_flight_check_requires_alternate_when_requested():
    with pytest.raises(ValueError):
        await _service().flight_check(
            arrival="KAAA",
            use_alternate=True,
            eta=datetime(2024, 3, 1, 13, tzinfo=timezone.utc),
        )


@pytest.mark.anyio
async def test_ingestion_failure_propagates():
    with pytest.raises(RuntimeError):
        await _service(fail=True).station_summary("KAAA")


def test_default_minima_follow_settings(monkeypatch):
    monkeypatch.setattr(settings, "default_min_ceiling_ft", 800.0)
    monkeypatch.setattr(settings, "default_min_visibility_sm", 2.0)

    assert default_minima() == Minima(ceiling_ft=800.0, visibility_sm=2.0)


@pytest.mark.anyio
async def test_station_summary_logs_under_services_logger(caplog):
    service = _service(tafs={"KAAA": TAF_KAAA})

    with caplog.at_level("INFO", logger="minimawatch.services.station_weather"):
        await service.station_summary("KAAA", Minima(ceiling_ft=500, visibility_sm=1))

    records = [r for r in caplog.records if r.name == "minimawatch.services.station_weather"]
    assert any("Station summary computed: station=KAAA" in r.getMessage() for r in records)
