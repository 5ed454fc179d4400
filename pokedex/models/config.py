"""Configuration data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    api_base_url: str = "https://pokeapi.co/api/v2"
    universe_size: int = 898  # Highest national dex number requested from the index
    batch_size: int = 50  # Detail fetches issued concurrently per batch
    page_size: int = 24
    request_timeout: float = 30.0
    log_level: str = "INFO"
    description_language: str = "en"
    default_view_mode: str = "grid"  # "grid" or "list"
