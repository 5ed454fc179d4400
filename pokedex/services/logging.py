"""Logging configuration for the Pokédex TUI application."""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog


@dataclass(frozen=True)
class RotatingLogFile:
    """One rotating log file written when a log directory is configured."""
    filename: str
    max_bytes: int
    backup_count: int
    min_level: int | None = None  # None: follow the configured level


LOG_FILES: tuple[RotatingLogFile, ...] = (
    RotatingLogFile("app.log", max_bytes=10 * 1024 * 1024, backup_count=5),
    RotatingLogFile("error.log", max_bytes=5 * 1024 * 1024, backup_count=3, min_level=logging.ERROR),
)

# Libraries whose INFO chatter (one line per request) is kept out of the logs
QUIET_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


class LoggingService:
    """Configures structlog on top of the standard library logging tree.

    Console output is human-readable in development and JSON in production.
    Log files are always JSON. In TUI mode nothing goes to stdout, since it
    would corrupt the terminal display.
    """

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Path | None = None,
        tui_mode: bool = False,
    ) -> None:
        self.log_level = log_level.upper()
        self.log_dir = log_dir
        self.tui_mode = tui_mode
        self.is_development = os.getenv("ENVIRONMENT", "development") == "development"

    @property
    def numeric_level(self) -> int:
        return logging.getLevelNamesMapping().get(self.log_level, logging.INFO)

    def configure(self) -> None:
        """Install stdlib handlers, then point structlog at them."""
        self._configure_stdlib_logging()

        structlog.configure(
            processors=self._get_processors(),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _configure_stdlib_logging(self) -> None:
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(self.numeric_level)

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(max(self.numeric_level, logging.WARNING))

        if not self.tui_mode:
            root_logger.addHandler(self._console_handler())

        if self.log_dir:
            self._setup_file_logging(root_logger)

    def _console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self.numeric_level)
        if self.is_development:
            handler.setFormatter(logging.Formatter(
                fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            ))
        else:
            handler.setFormatter(logging.Formatter("%(message)s"))
        return handler

    def _setup_file_logging(self, root_logger: logging.Logger) -> None:
        """Add one rotating handler per entry in ``LOG_FILES``."""
        if not self.log_dir:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        formatter = logging.Formatter("%(message)s")

        for log_file in LOG_FILES:
            handler = logging.handlers.RotatingFileHandler(
                filename=self.log_dir / log_file.filename,
                maxBytes=log_file.max_bytes,
                backupCount=log_file.backup_count,
                encoding="utf-8",
            )
            handler.setLevel(log_file.min_level if log_file.min_level is not None else self.numeric_level)
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)

    def _get_processors(self) -> list[Any]:
        processors: list[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        # Coloured output only for a development console with no files
        if self.is_development and not self.log_dir:
            processors.append(structlog.dev.ConsoleRenderer(colors=True))
        else:
            processors.append(structlog.processors.JSONRenderer())
        return processors

    def get_logger(self, name: str | None = None) -> structlog.stdlib.BoundLogger:
        return structlog.stdlib.get_logger(name)


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    environment: str | None = None,
    tui_mode: bool = False,
) -> LoggingService:
    """Set up application logging.

    Args:
        log_level: Minimum log level to capture
        log_dir: Directory for ``app.log`` / ``error.log`` (None for no files)
        environment: Overrides the ``ENVIRONMENT`` variable (development/production)
        tui_mode: Suppress console output while the TUI owns the terminal

    Returns:
        Configured LoggingService instance
    """
    if environment:
        os.environ["ENVIRONMENT"] = environment

    service = LoggingService(log_level=log_level, log_dir=log_dir, tui_mode=tui_mode)
    service.configure()
    return service
