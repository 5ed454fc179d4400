"""Tests for the logging service."""

import json
import logging
import logging.handlers
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import structlog
from hypothesis import given, settings, strategies as st

from pokedex.services.logging import LoggingService, setup_logging


def read_json_lines(path: Path) -> list[dict[str, object]]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


class TestLoggingService:
    """Test cases for LoggingService."""

    def test_development_console_uses_console_renderer(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            service = LoggingService(log_level="INFO")
            processors = service._get_processors()

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_production_uses_json_renderer(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            service = LoggingService(log_level="INFO")
            processors = service._get_processors()

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_log_directory_forces_json(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            service = LoggingService(log_level="INFO", log_dir=Path("logs"))
            processors = service._get_processors()

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_tui_mode_has_no_console_handler(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            service = LoggingService(log_level="INFO", log_dir=Path(temp_dir), tui_mode=True)
            service.configure()

            handlers = logging.getLogger().handlers
            assert handlers
            assert all(isinstance(h, logging.handlers.RotatingFileHandler) for h in handlers)

            for handler in handlers:
                handler.close()

    def test_console_mode_has_stdout_handler(self) -> None:
        service = LoggingService(log_level="WARNING")
        service.configure()

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.WARNING
        assert logging.getLogger().level == logging.WARNING

    def test_httpx_request_logs_are_quieted(self) -> None:
        service = LoggingService(log_level="DEBUG")
        service.configure()

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_file_logging_setup(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_dir = Path(temp_dir)
            with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
                service = LoggingService(log_level="INFO", log_dir=log_dir, tui_mode=True)
                service.configure()

                logger = service.get_logger("test")
                logger.info("catalog batch loaded", batch=3, percent=17)

            assert (log_dir / "app.log").exists()
            assert (log_dir / "error.log").exists()

            records = read_json_lines(log_dir / "app.log")
            assert records[-1]["event"] == "catalog batch loaded"
            assert records[-1]["batch"] == 3
            assert records[-1]["percent"] == 17
            assert records[-1]["level"] == "info"
            assert "timestamp" in records[-1]

            for handler in logging.getLogger().handlers:
                handler.close()

    def test_error_file_only_gets_errors(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_dir = Path(temp_dir)
            with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
                service = LoggingService(log_level="DEBUG", log_dir=log_dir, tui_mode=True)
                service.configure()

                logger = service.get_logger("test")
                logger.info("entry fetched", entry_id=25)
                logger.error("entry fetch failed", entry_id=26, status_code=500)

            records = read_json_lines(log_dir / "error.log")
            assert len(records) == 1
            assert records[0]["event"] == "entry fetch failed"
            assert records[0]["status_code"] == 500
            assert records[0]["level"] == "error"

            for handler in logging.getLogger().handlers:
                handler.close()


class TestStructuredLoggingProperties:
    """Property-based tests for structured logging consistency."""

    @given(
        log_level=st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
        message=st.text(min_size=1, max_size=100).filter(lambda s: "\n" not in s and "\r" not in s),
        context_data=st.dictionaries(
            keys=st.from_regex(r"ctx_[a-z]{1,10}", fullmatch=True),
            values=st.one_of(st.text(max_size=50), st.integers(), st.booleans()),
            max_size=4,
        ),
    )
    @settings(max_examples=25, deadline=None)
    def test_structured_logging_consistency(
        self,
        log_level: str,
        message: str,
        context_data: dict[str, str | int | bool],
    ) -> None:
        """Every record carries the event, level, logger name and its context."""
        with tempfile.TemporaryDirectory() as temp_dir:
            log_dir = Path(temp_dir)
            with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
                service = LoggingService(log_level="DEBUG", log_dir=log_dir, tui_mode=True)
                service.configure()

                logger = service.get_logger("pokedex.test")
                getattr(logger, log_level.lower())(message, **context_data)

            records = read_json_lines(log_dir / "app.log")
            for handler in logging.getLogger().handlers:
                handler.close()

        assert len(records) == 1
        parsed = records[0]
        assert parsed["event"] == message
        assert parsed["level"] == log_level.lower()
        assert parsed["logger"] == "pokedex.test"
        for key, value in context_data.items():
            assert parsed[key] == value


def test_setup_logging_function() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        with patch.dict(os.environ, {}, clear=False):
            service = setup_logging(
                log_level="debug",
                log_dir=Path(temp_dir),
                environment="production",
                tui_mode=True,
            )

            assert isinstance(service, LoggingService)
            assert service.log_level == "DEBUG"
            assert service.tui_mode
            assert os.environ["ENVIRONMENT"] == "production"

        for handler in logging.getLogger().handlers:
            handler.close()
