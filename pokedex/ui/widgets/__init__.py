"""Custom widgets for the TUI application."""

from .entry_card import EntryCard, generation_marker, type_badges
from .pagination import PaginationBar
from .progress import LoadProgressWidget, reached_generations

__all__ = [
    "EntryCard",
    "LoadProgressWidget",
    "PaginationBar",
    "generation_marker",
    "reached_generations",
    "type_badges",
]
