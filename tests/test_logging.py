"""Tests for logging configuration."""

import io
import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from lpoweather.utils.logging import configure_logging, get_logger, log_context


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_json_lines_with_context(self) -> None:
        """Test JSON output carries the event, level and bound context."""
        stream = io.StringIO()
        configure_logging(level="INFO", json_output=True, stream=stream)

        with log_context(day="2015-02-03"):
            get_logger("lpoweather.test").info("Fetched source", bytes=120)

        record = json.loads(stream.getvalue().splitlines()[-1])
        assert record["event"] == "Fetched source"
        assert record["level"] == "info"
        assert record["day"] == "2015-02-03"
        assert record["bytes"] == 120

    def test_level_filters(self) -> None:
        """Test messages below the configured level are dropped."""
        stream = io.StringIO()
        configure_logging(level="warning", stream=stream)

        log = get_logger("lpoweather.test")
        log.info("Accumulated rows", rows=3)
        log.warning("Row date differs from summary date")

        output = stream.getvalue()
        assert "Accumulated rows" not in output
        assert "Row date differs from summary date" in output

    def test_http_loggers_quiet_unless_debug(self) -> None:
        """Test per-request HTTP logging only shows at DEBUG."""
        configure_logging(level="INFO", stream=io.StringIO())
        assert logging.getLogger("httpx").level == logging.WARNING

        configure_logging(level="DEBUG", stream=io.StringIO())
        assert logging.getLogger("httpx").level == logging.DEBUG
