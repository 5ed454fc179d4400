"""Data models for the Pokédex TUI application."""

from .category import FALLBACK_TYPE_COLOR, TYPE_COLORS, type_color
from .config import AppConfig
from .entry import (
    NO_DESCRIPTION,
    PLACEHOLDER_IMAGE,
    Entry,
    EntryDetail,
    IndexRef,
    StatValue,
)
from .generation import GENERATIONS, MAX_ENTRY_ID, Generation, generation_info, get_generation
from .progress import LoadProgress

__all__ = [
    "AppConfig",
    "Entry",
    "EntryDetail",
    "FALLBACK_TYPE_COLOR",
    "GENERATIONS",
    "Generation",
    "IndexRef",
    "LoadProgress",
    "MAX_ENTRY_ID",
    "NO_DESCRIPTION",
    "PLACEHOLDER_IMAGE",
    "StatValue",
    "TYPE_COLORS",
    "generation_info",
    "get_generation",
    "type_color",
]
