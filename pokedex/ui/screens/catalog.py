"""Catalog screen: search, filter and page through the loaded collection."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Grid, Horizontal
from textual.widgets import Button, DataTable, Input, Select, Static

import structlog

from pokedex.models import GENERATIONS, Entry, generation_info
from pokedex.services.catalog_view import (
    ALL,
    CatalogPage,
    ViewState,
    available_categories,
    derive_page,
    go_to_page,
    reset_for_collection,
    set_view_mode,
    update_filters,
)
from pokedex.ui.widgets import EntryCard, PaginationBar, generation_marker, type_badges

from .base import BaseScreen

log = structlog.stdlib.get_logger()


def list_row(entry: Entry) -> tuple[str, str, str, str, str, str]:
    """Cells for one entry in the list view."""
    return (
        f"{generation_marker(entry)} {entry.display_number}",
        entry.name.capitalize(),
        generation_info(entry.generation).name,
        type_badges(entry.types),
        f"{entry.height_m:.1f}m",
        f"{entry.weight_kg:.1f}kg",
    )


class CatalogScreen(BaseScreen):
    """Browse the catalog as a grid of cards or a list table.

    Every control change goes through the pure pipeline in
    ``catalog_view``: the screen holds one ``ViewState`` and re-derives
    the visible page from it.
    """

    SCREEN_TITLE: ClassVar[str] = "National Pokédex"
    SCREEN_NAME: ClassVar[str] = "catalog"

    CSS: ClassVar[str] = """
    #catalog-container {
        width: 100%;
        height: 100%;
        padding: 0 2;
    }

    #catalog-subtitle {
        text-align: center;
        color: $text-muted;
    }

    #generation-row {
        height: auto;
    }

    #generation-row Button {
        min-width: 8;
        margin-right: 1;
    }

    #filter-row {
        height: 3;
        margin-top: 1;
    }

    #search-input {
        width: 2fr;
    }

    #type-select {
        width: 1fr;
        margin-left: 1;
    }

    #filter-row Button {
        margin-left: 1;
        min-width: 8;
    }

    #stats-row {
        height: 1;
        margin-top: 1;
    }

    #stat-showing {
        width: 1fr;
        color: $text-muted;
    }

    #stat-loaded {
        width: auto;
        color: $success;
    }

    #results-grid {
        grid-size: 6;
        grid-gutter: 1 1;
        height: 1fr;
        margin-top: 1;
        overflow-y: auto;
    }

    #results-table {
        height: 1fr;
        margin-top: 1;
    }

    #no-results {
        text-align: center;
        color: $text-muted;
        padding: 2;
        display: none;
    }

    .hidden {
        display: none;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "go_back", "Back", show=False),
        Binding("f", "focus_search", "Search", show=True),
        Binding("g", "toggle_view", "Grid/List", show=True),
        Binding("left_square_bracket", "previous_page", "Prev page", show=True),
        Binding("right_square_bracket", "next_page", "Next page", show=True),
    ]

    _entries: list[Entry]
    _state: ViewState
    _page: CatalogPage | None
    _categories: list[str]

    def __init__(self) -> None:
        super().__init__()
        self._entries = []
        self._state = ViewState()
        self._page = None
        self._categories = []

    @property
    def view_state(self) -> ViewState:
        return self._state

    @property
    def current_page(self) -> CatalogPage | None:
        return self._page

    @override
    def compose(self) -> ComposeResult:
        with Container(id="catalog-container"):
            yield self.create_title_widget()
            yield Static("", id="catalog-subtitle")

            yield Static("Generations", classes="section-title")
            with Horizontal(id="generation-row"):
                yield Button("⚡ All", id="gen-all", variant="primary")
                for generation in GENERATIONS:
                    yield Button(
                        f"{generation.name} ({generation.range_label})",
                        id=f"gen-{generation.id}",
                        variant="default",
                    )

            with Horizontal(id="filter-row"):
                yield Input(placeholder="Search by name or number...", id="search-input")
                yield Select(
                    [("All types", ALL)],
                    value=ALL,
                    allow_blank=False,
                    id="type-select",
                )
                yield Button("▦ Grid", id="btn-grid", variant="primary")
                yield Button("☰ List", id="btn-list", variant="default")

            with Horizontal(id="stats-row"):
                yield Static("Showing 0 of 0", id="stat-showing")
                yield Static("✓ All entries loaded", id="stat-loaded")

            yield Grid(id="results-grid")
            yield DataTable(id="results-table", cursor_type="row", classes="hidden")
            yield Static("No entries match your search criteria.", id="no-results")
            yield PaginationBar(id="pagination")

    @override
    async def on_mount(self) -> None:
        await super().on_mount()
        config = self.dex_app.config
        self._state = ViewState(
            page_size=config.page_size,
            view_mode="list" if config.default_view_mode == "list" else "grid",
        )
        self.query_one("#results-table", DataTable).add_columns(
            "No.", "Name", "Generation", "Types", "Height", "Weight"
        )
        await self._load_entries()

    async def _load_entries(self) -> None:
        """Take the collection from app state and re-derive from page 1."""
        self._entries = list(self.dex_app.app_state.entries)
        self._categories = available_categories(self._entries)

        type_select = self.query_one("#type-select", Select)
        type_select.set_options(
            [("All types", ALL)] + [(tag.capitalize(), tag) for tag in self._categories]
        )
        type_select.value = self._state.category if self._state.category in self._categories else ALL

        self.query_one("#catalog-subtitle", Static).update(
            f"{len(GENERATIONS)} Generations • {len(self._entries)} Pokémon"
        )

        self._state = reset_for_collection(self._state)
        await self._refresh_view()
        log.info("Catalog entries loaded", total_entries=len(self._entries))

    async def _apply(self, state: ViewState) -> None:
        """Adopt a new view state and re-render if it differs."""
        if state == self._state and self._page is not None:
            return
        self._state = state
        await self._refresh_view()

    async def _refresh_view(self) -> None:
        page = derive_page(self._entries, self._state)
        if page.page != self._state.page:
            self._state = go_to_page(self._state, page.page, page.total_pages)
        self._page = page

        self.query_one("#stat-showing", Static).update(
            f"Showing {len(page.entries)} of {page.total_matches} Pokémon"
        )
        self._update_toggle_buttons()

        grid = self.query_one("#results-grid", Grid)
        table = self.query_one("#results-table", DataTable)
        is_grid = self._state.view_mode == "grid"
        grid.set_class(not is_grid, "hidden")
        table.set_class(is_grid, "hidden")

        if is_grid:
            await grid.remove_children()
            await grid.mount_all(EntryCard(entry) for entry in page.entries)
            grid.scroll_home(animate=False)
        else:
            table.clear()
            for entry in page.entries:
                table.add_row(*list_row(entry), key=str(entry.id))

        self.query_one("#no-results", Static).display = page.total_matches == 0
        await self.query_one("#pagination", PaginationBar).update_page(page)

        log.debug(
            "Catalog view derived",
            search=self._state.search,
            category=self._state.category,
            generation=self._state.generation,
            page=page.page,
            total_pages=page.total_pages,
            total_matches=page.total_matches,
        )

    def _update_toggle_buttons(self) -> None:
        selected_generation = str(self._state.generation)
        self.query_one("#gen-all", Button).variant = "primary" if selected_generation == ALL else "default"
        for generation in GENERATIONS:
            button = self.query_one(f"#gen-{generation.id}", Button)
            button.variant = "primary" if selected_generation == str(generation.id) else "default"

        is_grid = self._state.view_mode == "grid"
        self.query_one("#btn-grid", Button).variant = "primary" if is_grid else "default"
        self.query_one("#btn-list", Button).variant = "default" if is_grid else "primary"

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""

        if button_id == "gen-all":
            await self._apply(update_filters(self._state, generation=ALL))
        elif button_id.startswith("gen-"):
            await self._apply(update_filters(self._state, generation=int(button_id.removeprefix("gen-"))))
        elif button_id == "btn-grid":
            await self._apply(set_view_mode(self._state, "grid"))
        elif button_id == "btn-list":
            await self._apply(set_view_mode(self._state, "list"))

    async def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            await self._apply(update_filters(self._state, search=event.value))

    async def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "type-select" and isinstance(event.value, str):
            await self._apply(update_filters(self._state, category=event.value))

    async def on_pagination_bar_page_selected(self, event: PaginationBar.PageSelected) -> None:
        await self._go_to(event.page)

    async def on_entry_card_selected(self, event: EntryCard.Selected) -> None:
        await self._open_detail(event.entry_id)

    async def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.row_key and event.row_key.value:
            await self._open_detail(int(event.row_key.value))

    async def _open_detail(self, entry_id: int) -> None:
        log.info("Opening entry detail", entry_id=entry_id)
        await self.dex_app.push_screen_with_tracking("detail", entry_id=entry_id)

    async def _go_to(self, page: int) -> None:
        total = self._page.total_pages if self._page else 1
        await self._apply(go_to_page(self._state, page, total))

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    async def action_toggle_view(self) -> None:
        mode = "list" if self._state.view_mode == "grid" else "grid"
        await self._apply(set_view_mode(self._state, mode))

    async def action_previous_page(self) -> None:
        await self._go_to(self._state.page - 1)

    async def action_next_page(self) -> None:
        await self._go_to(self._state.page + 1)
