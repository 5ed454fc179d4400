"""Filter, paginate and window the in-memory catalog.

The catalog screen keeps one ``ViewState`` and recomputes the visible page
with ``derive_page`` whenever the collection or any input changes. Every
function here is pure.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Literal

from ..models import Entry

ALL = "all"
MAX_PAGE_BUTTONS = 7

ViewMode = Literal["grid", "list"]
GenerationFilter = int | Literal["all"]

_FILTER_FIELDS = ("search", "category", "generation")


@dataclass(frozen=True)
class ViewState:
    """All mutable view state of the catalog screen."""
    search: str = ""
    category: str = ALL
    generation: GenerationFilter = ALL
    page: int = 1
    page_size: int = 24
    view_mode: ViewMode = "grid"


@dataclass(frozen=True)
class CatalogPage:
    """Result of running the pipeline over the collection."""
    entries: list[Entry]
    total_matches: int
    total_pages: int
    page: int
    window: list[int]

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def matches_search(entry: Entry, search: str) -> bool:
    """Case-insensitive name substring, or substring of the decimal id."""
    if not search:
        return True
    return search.lower() in entry.name.lower() or search in str(entry.id)


def matches_category(entry: Entry, category: str) -> bool:
    return category == ALL or category in entry.types


def matches_generation(entry: Entry, generation: GenerationFilter) -> bool:
    return generation == ALL or entry.generation == int(generation)


def filter_entries(
    entries: Iterable[Entry],
    search: str = "",
    category: str = ALL,
    generation: GenerationFilter = ALL,
) -> list[Entry]:
    """Apply the three filters (ANDed) preserving collection order."""
    return [
        entry for entry in entries
        if matches_search(entry, search)
        and matches_category(entry, category)
        and matches_generation(entry, generation)
    ]


def parse_generation(value: str | int | None) -> GenerationFilter:
    """Normalise a generation filter value coming from a control or the CLI.

    Raises:
        ValueError: If the value is neither the sentinel nor a band number
    """
    if value is None or value == ALL:
        return ALL
    return int(value)


def update_filters(state: ViewState, **changes: str | int) -> ViewState:
    """Return a new state with filter changes applied.

    Any filter that actually changes value sends the viewer back to page 1.

    Raises:
        TypeError: If a key is not a filter field
    """
    unknown = set(changes) - set(_FILTER_FIELDS)
    if unknown:
        raise TypeError(f"Not filter fields: {', '.join(sorted(unknown))}")

    if "generation" in changes:
        changes["generation"] = parse_generation(changes["generation"])

    changed = any(getattr(state, key) != value for key, value in changes.items())
    if not changed:
        return state
    return replace(state, page=1, **changes)


def reset_for_collection(state: ViewState) -> ViewState:
    """State to use after the underlying collection changes."""
    return replace(state, page=1)


def set_view_mode(state: ViewState, view_mode: ViewMode) -> ViewState:
    """Switch between grid and list without touching filters or page."""
    return replace(state, view_mode=view_mode)


def total_pages(count: int, page_size: int) -> int:
    """Number of pages, never less than one."""
    return max(1, math.ceil(count / page_size))


def go_to_page(state: ViewState, page: int, pages: int) -> ViewState:
    """Move to a page, clamped to ``[1, pages]``."""
    return replace(state, page=min(max(page, 1), max(pages, 1)))


def paginate(entries: Sequence[Entry], page: int, page_size: int) -> list[Entry]:
    start = (page - 1) * page_size
    return list(entries[start:start + page_size])


def page_window(current: int, total: int, max_buttons: int = MAX_PAGE_BUTTONS) -> list[int]:
    """Page numbers to render as buttons.

    Shows everything when it fits; otherwise a window of ``max_buttons``
    centred on the current page, pinned to the first or last pages near
    either end.
    """
    if total <= max_buttons:
        return list(range(1, total + 1))

    half = max_buttons // 2
    if current <= half + 1:
        first = 1
    elif current >= total - half:
        first = total - max_buttons + 1
    else:
        first = current - half
    return list(range(first, first + max_buttons))


def derive_page(entries: Sequence[Entry], state: ViewState) -> CatalogPage:
    """Run the full pipeline: filter, count pages, slice, window."""
    matches = filter_entries(entries, state.search, state.category, state.generation)
    pages = total_pages(len(matches), state.page_size)
    page = min(max(state.page, 1), pages)
    return CatalogPage(
        entries=paginate(matches, page, state.page_size),
        total_matches=len(matches),
        total_pages=pages,
        page=page,
        window=page_window(page, pages),
    )


def available_categories(entries: Iterable[Entry]) -> list[str]:
    """Sorted distinct category tags present in the collection."""
    return sorted({tag for entry in entries for tag in entry.types})
