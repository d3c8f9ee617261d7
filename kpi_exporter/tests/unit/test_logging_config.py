"""Tests for the JSON log formatter and logging setup."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator

import pytest

from kpi_exporter.config import ExporterSettings
from kpi_exporter.logging_config import JSONFormatter, configure_logging


@pytest.fixture
def formatter() -> JSONFormatter:
    return JSONFormatter()


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str = "test message", level: int = logging.INFO, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="kpi_exporter.dispatcher",
        level=level,
        pathname="dispatcher.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Verify structured JSON output from the formatter."""

    def test_basic_format(self, formatter: JSONFormatter) -> None:
        data = json.loads(formatter.format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "kpi_exporter.dispatcher"
        assert data["message"] == "test message"
        assert "timestamp" in data
        assert "topic" not in data

    def test_single_line_output(self, formatter: JSONFormatter) -> None:
        assert "\n" not in formatter.format(_record("multi\nline"))

    def test_topic_included(self, formatter: JSONFormatter) -> None:
        data = json.loads(formatter.format(_record(level=logging.WARNING, topic="mystery.kpis")))
        assert data["topic"] == "mystery.kpis"

    def test_only_topic_extra_carried(self, formatter: JSONFormatter) -> None:
        data = json.loads(formatter.format(_record(topic="onos.kpis", device_id="of:0001")))
        assert data["topic"] == "onos.kpis"
        assert "device_id" not in data

    def test_exception_included(self, formatter: JSONFormatter) -> None:
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()
        data = json.loads(formatter.format(record))
        assert "ValueError: boom" in data["exc_info"]


class TestConfigureLogging:
    @pytest.mark.usefixtures("restore_root_logger")
    def test_structured_handler(self) -> None:
        handler = configure_logging(ExporterSettings(_env_file=None, structured_logging=True))
        root = logging.getLogger()
        assert root.handlers == [handler]
        assert isinstance(handler.formatter, JSONFormatter)
        assert root.level == logging.INFO

    @pytest.mark.usefixtures("restore_root_logger")
    def test_plain_handler(self) -> None:
        handler = configure_logging(ExporterSettings(_env_file=None, log_level="WARNING"))
        assert not isinstance(handler.formatter, JSONFormatter)
        assert logging.getLogger().level == logging.WARNING

    @pytest.mark.usefixtures("restore_root_logger")
    def test_debug_forces_debug_level(self) -> None:
        configure_logging(ExporterSettings(_env_file=None, debug=True))
        assert logging.getLogger().level == logging.DEBUG

    @pytest.mark.usefixtures("restore_root_logger")
    def test_repeated_calls_do_not_stack_handlers(self) -> None:
        settings = ExporterSettings(_env_file=None)
        configure_logging(settings)
        configure_logging(settings)
        assert len(logging.getLogger().handlers) == 1
