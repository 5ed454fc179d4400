"""Property-based tests for configuration service."""

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest
from hypothesis import given, strategies as st

from pokedex.models import AppConfig
from pokedex.services import ConfigurationError, ConfigurationService


valid_log_levels = st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])

valid_config_strategy = st.builds(
    AppConfig,
    api_base_url=st.sampled_from(["https://pokeapi.co/api/v2", "http://localhost:8000/api/v2"]),
    universe_size=st.integers(min_value=1, max_value=898),
    batch_size=st.integers(min_value=1, max_value=200),
    page_size=st.integers(min_value=1, max_value=120),
    request_timeout=st.floats(min_value=0.1, max_value=300.0, allow_nan=False, allow_infinity=False),
    log_level=valid_log_levels,
    description_language=st.sampled_from(["en", "fr", "de", "ja", "es"]),
    default_view_mode=st.sampled_from(["grid", "list"]),
)


def write_config(directory: str, data: Any) -> Path:
    path = Path(directory) / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@given(valid_config_strategy)
def test_configuration_validation_accepts_valid(config: AppConfig) -> None:
    result = ConfigurationService().validate_config(config)

    assert result.is_valid
    assert result.errors == []


@pytest.mark.parametrize("overrides,expected_fragment", [
    ({"api_base_url": "ftp://pokeapi.co"}, "api_base_url"),
    ({"api_base_url": "not a url"}, "api_base_url"),
    ({"universe_size": 0}, "universe_size"),
    ({"universe_size": 899}, "universe_size"),
    ({"batch_size": 0}, "batch_size"),
    ({"batch_size": 201}, "batch_size"),
    ({"page_size": 0}, "page_size"),
    ({"page_size": 121}, "page_size"),
    ({"request_timeout": 0.0}, "request_timeout"),
    ({"request_timeout": -5.0}, "request_timeout"),
    ({"log_level": "VERBOSE"}, "log_level"),
    ({"description_language": "eng"}, "description_language"),
    ({"description_language": "e1"}, "description_language"),
    ({"default_view_mode": "table"}, "default_view_mode"),
])
def test_configuration_validation_rejects_each_bad_field(
    overrides: dict[str, Any], expected_fragment: str
) -> None:
    result = ConfigurationService().validate_config(AppConfig(**overrides))

    assert not result.is_valid
    assert len(result.errors) == 1
    assert expected_fragment in result.errors[0]


def test_missing_file_gives_defaults() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        service = ConfigurationService(Path(temp_dir) / "absent.json")
        assert service.load_config() == AppConfig()


def test_config_file_is_loaded() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        path = write_config(temp_dir, {
            "api_base_url": "http://localhost:8000/api/v2/",
            "universe_size": 151,
            "batch_size": 25,
            "page_size": 12,
            "request_timeout": 5,
            "log_level": "debug",
            "description_language": "FR",
            "default_view_mode": "list",
        })

        config = ConfigurationService(path).load_config()

    assert config == AppConfig(
        api_base_url="http://localhost:8000/api/v2",
        universe_size=151,
        batch_size=25,
        page_size=12,
        request_timeout=5.0,
        log_level="DEBUG",
        description_language="fr",
        default_view_mode="list",
    )


def test_missing_keys_use_defaults() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        path = write_config(temp_dir, {"page_size": 48})

        config = ConfigurationService(path).load_config()

    assert config.page_size == 48
    assert config.batch_size == AppConfig().batch_size
    assert config.universe_size == 898


@pytest.mark.parametrize("content", [
    "{ not json",
    "[1, 2, 3]",
    json.dumps({"batch_size": 500}),
    json.dumps({"default_view_mode": "cards"}),
])
def test_invalid_file_gives_defaults(content: str) -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "config.json"
        path.write_text(content, encoding="utf-8")

        assert ConfigurationService(path).load_config() == AppConfig()


def test_load_does_not_write_file() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "config.json"
        ConfigurationService(path).load_config()

        assert not path.exists()


def test_ensure_valid_raises_configuration_error() -> None:
    service = ConfigurationService()

    assert service.ensure_valid(AppConfig()) == AppConfig()

    with pytest.raises(ConfigurationError) as exc_info:
        service.ensure_valid(AppConfig(batch_size=0, page_size=0))

    assert len(exc_info.value.errors) == 2
