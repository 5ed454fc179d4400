"""Configuration service for loading application settings."""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import structlog

from ..models import AppConfig, MAX_ENTRY_ID
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_VIEW_MODES = ("grid", "list")


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for reading application configuration.

    The configuration file is read-only from the application's point of
    view: nothing about a session is written back.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "pokedex-tui" / "config.json"
        log.info("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file or return the default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self.get_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise TypeError("configuration root must be an object")

            config = self._dict_to_config(data)
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self.get_default_config()

        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
            return self.get_default_config()

        log.info("Configuration loaded successfully")
        return config

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        parsed = urlparse(config.api_base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append("api_base_url must be an http(s) URL")

        if not isinstance(config.universe_size, int) or config.universe_size < 1:
            errors.append("universe_size must be a positive integer")
        elif config.universe_size > MAX_ENTRY_ID:
            errors.append(f"universe_size should not exceed {MAX_ENTRY_ID}")

        if not isinstance(config.batch_size, int) or config.batch_size < 1:
            errors.append("batch_size must be a positive integer")
        elif config.batch_size > 200:
            errors.append("batch_size should not exceed 200")

        if not isinstance(config.page_size, int) or config.page_size < 1:
            errors.append("page_size must be a positive integer")
        elif config.page_size > 120:
            errors.append("page_size should not exceed 120")

        if not isinstance(config.request_timeout, (int, float)) or config.request_timeout <= 0:
            errors.append("request_timeout must be a positive number")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        if not (isinstance(config.description_language, str)
                and len(config.description_language) == 2
                and config.description_language.isalpha()):
            errors.append("description_language must be a two-letter language code")

        if config.default_view_mode not in VALID_VIEW_MODES:
            errors.append(f"default_view_mode must be one of: {', '.join(VALID_VIEW_MODES)}")

        return ValidationResult(len(errors) == 0, errors)

    def ensure_valid(self, config: AppConfig) -> AppConfig:
        """Return the configuration unchanged, or raise if it fails validation.

        Raises:
            ConfigurationError: If any setting is invalid
        """
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(
                "Invalid configuration",
                errors=validation_result.errors,
            )
        return config

    def get_default_config(self) -> AppConfig:
        """Get default configuration."""
        return AppConfig()

    def _dict_to_config(self, data: dict[str, Any]) -> AppConfig:
        """Convert a decoded JSON object to AppConfig, defaulting missing keys."""
        defaults = AppConfig()

        def _int(key: str, default: int) -> int:
            value = data.get(key, default)
            return int(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else default

        timeout_raw = data.get("request_timeout", defaults.request_timeout)
        request_timeout = (
            float(timeout_raw) if isinstance(timeout_raw, (int, float)) and not isinstance(timeout_raw, bool)
            else defaults.request_timeout
        )

        return AppConfig(
            api_base_url=str(data.get("api_base_url", defaults.api_base_url)).rstrip("/"),
            universe_size=_int("universe_size", defaults.universe_size),
            batch_size=_int("batch_size", defaults.batch_size),
            page_size=_int("page_size", defaults.page_size),
            request_timeout=request_timeout,
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
            description_language=str(data.get("description_language", defaults.description_language)).lower(),
            default_view_mode=str(data.get("default_view_mode", defaults.default_view_mode)).lower(),
        )
