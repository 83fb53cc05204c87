"""Tests for the status sinks."""

from __future__ import annotations

import logging

import pytest

from shp_geojson.core.status import LoggingStatusSink, RecordingStatusSink, StatusSink


class TestRecordingStatusSink:
    """In-memory sink."""

    def test_records_levels_in_order(self) -> None:
        sink = RecordingStatusSink()
        sink.update("reading")
        sink.warn("unknown type")
        sink.error("missing type")
        sink.succeed("done")
        assert [e.level for e in sink.events] == ["update", "warn", "error", "succeed"]
        assert sink.texts("warn") == ["unknown type"]

    def test_is_status_sink(self) -> None:
        assert isinstance(RecordingStatusSink(), StatusSink)


class TestLoggingStatusSink:
    """Logger-backed sink."""

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = LoggingStatusSink()
        with caplog.at_level(logging.DEBUG, logger="shp_geojson.status"):
            sink.update("progress")
            sink.warn("careful")
            sink.error("bad")
            sink.fail("stage: broken")
            sink.succeed("finished")
        levels = [(r.levelname, r.getMessage()) for r in caplog.records]
        assert levels == [
            ("DEBUG", "progress"),
            ("WARNING", "careful"),
            ("ERROR", "bad"),
            ("ERROR", "FAILED | stage: broken"),
            ("INFO", "finished"),
        ]

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = LoggingStatusSink(logging.getLogger("custom.status"))
        with caplog.at_level(logging.INFO, logger="custom.status"):
            sink.succeed("ok")
        assert caplog.records[0].name == "custom.status"

    def test_abstract(self) -> None:
        with pytest.raises(TypeError):
            StatusSink()  # type: ignore[abstract]
