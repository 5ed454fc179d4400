"""Detail screen: one entry's stats, abilities and description."""

import asyncio
from typing import ClassVar, override

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Label, ProgressBar, Static

import structlog

from pokedex.models import EntryDetail, generation_info
from pokedex.models.entry import MAX_STAT_VALUE
from pokedex.services.errors import EntryNotFoundError
from pokedex.ui.widgets import type_badges

from .base import BaseScreen

log = structlog.stdlib.get_logger()


def ability_label(ability: str) -> str:
    return ability.replace("-", " ")


def stat_label(stat: str) -> str:
    return stat.replace("-", " ").title()


class DetailScreen(BaseScreen):
    """Full record for a single entry.

    The record is fetched fresh every time the screen is shown. Previous
    and next buttons replace this screen with the adjacent entry, so the
    back action always returns to the catalog.
    """

    class DetailLoaded(Message):
        detail: EntryDetail

        def __init__(self, detail: EntryDetail) -> None:
            super().__init__()
            self.detail = detail

    class DetailNotFound(Message):
        error: EntryNotFoundError

        def __init__(self, error: EntryNotFoundError) -> None:
            super().__init__()
            self.error = error

    SCREEN_TITLE: ClassVar[str] = "Pokémon Details"
    SCREEN_NAME: ClassVar[str] = "detail"

    CSS: ClassVar[str] = """
    #detail-container {
        width: 100%;
        height: 100%;
        padding: 0 2;
    }

    #detail-nav {
        height: 3;
    }

    #detail-nav Button {
        margin-right: 1;
    }

    #detail-status {
        text-align: center;
        color: $text-muted;
        padding: 1;
    }

    #detail-body {
        height: 1fr;
    }

    #detail-header {
        text-style: bold;
        margin-top: 1;
    }

    .detail-line {
        margin-top: 1;
    }

    .stat-row {
        height: 1;
    }

    .stat-name {
        width: 16;
    }

    .stat-value {
        width: 5;
        text-align: right;
        margin-right: 1;
    }

    #not-found {
        align: center middle;
        height: auto;
        padding: 2;
    }

    #not-found Static {
        text-align: center;
        width: 100%;
        margin-bottom: 1;
    }

    .hidden {
        display: none;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "go_back", "Back", show=True),
        Binding("left", "previous_entry", "Previous", show=True),
        Binding("right", "next_entry", "Next", show=True),
    ]

    entry_id: int
    _detail: EntryDetail | None

    def __init__(self, entry_id: int = 1) -> None:
        super().__init__()
        self.entry_id = entry_id
        self._detail = None

    @property
    def detail(self) -> EntryDetail | None:
        return self._detail

    @override
    def compose(self) -> ComposeResult:
        with Container(id="detail-container"):
            with Horizontal(id="detail-nav"):
                yield Button("← Back to catalog", id="btn-back", variant="default")
                yield Button("Previous", id="btn-previous", variant="default")
                yield Button("Next", id="btn-next", variant="default")
            yield Static(f"Loading #{self.entry_id:03d}...", id="detail-status")
            yield VerticalScroll(id="detail-body", classes="hidden")
            with Container(id="not-found", classes="hidden"):
                yield Static("[bold]Pokémon not found[/]")
                yield Static("This entry could not be loaded.")
                yield Button("Back to catalog", id="btn-not-found-back", variant="primary")

    @override
    async def on_mount(self) -> None:
        await super().on_mount()
        self._update_nav_buttons()

        if self.dex_app.detail_service is None:
            log.error("No detail service configured")
            self._show_not_found()
            return

        _ = self.run_worker(
            self._fetch_detail(),
            name="detail_loader",
            exclusive=True,
            exit_on_error=False,
        )

    async def _fetch_detail(self) -> None:
        """Fetch the entry record (executed in a worker)."""
        service = self.dex_app.detail_service
        if service is None:
            return

        try:
            detail = await service.fetch_entry_detail(self.entry_id)
        except asyncio.CancelledError:
            log.info("Detail fetch cancelled", entry_id=self.entry_id)
            raise
        except EntryNotFoundError as e:
            self.post_message(self.DetailNotFound(e))
            return

        self.post_message(self.DetailLoaded(detail))

    async def on_detail_screen_detail_loaded(self, event: DetailLoaded) -> None:
        self._detail = event.detail
        self.query_one("#detail-status", Static).add_class("hidden")

        body = self.query_one("#detail-body", VerticalScroll)
        await body.remove_children()
        await body.mount_all(self._build_body(event.detail))
        body.remove_class("hidden")

        for stat in event.detail.stats:
            self.query_one(f"#stat-bar-{stat.name}", ProgressBar).update(progress=stat.value)

    def on_detail_screen_detail_not_found(self, event: DetailNotFound) -> None:
        _ = self.handle_exception(
            event.error, "fetch_entry_detail", context={"entry_id": self.entry_id}, notify=False
        )
        self._show_not_found()

    def _show_not_found(self) -> None:
        self.query_one("#detail-status", Static).add_class("hidden")
        self.query_one("#detail-body", VerticalScroll).add_class("hidden")
        self.query_one("#not-found", Container).remove_class("hidden")

    def _build_body(self, detail: EntryDetail) -> list[Static | Horizontal]:
        generation = generation_info(detail.generation)
        widgets: list[Static | Horizontal] = [
            Static(
                f"[dim]{detail.display_number}[/]  {detail.name.capitalize()}",
                id="detail-header",
            ),
            Static(
                f"{type_badges(detail.types)}  "
                f"[bold white on {generation.color}] {generation.name} [/]",
                classes="detail-line",
            ),
            Static(detail.description, classes="detail-line"),
            Static(f"[dim]Artwork:[/] {detail.image_or_placeholder}", classes="detail-line"),
            Static(
                f"[bold]Height[/] {detail.height_m:.1f} m    [bold]Weight[/] {detail.weight_kg:.1f} kg",
                classes="detail-line",
            ),
            Static(
                "[bold]Abilities[/] " + ", ".join(ability_label(a) for a in detail.abilities),
                classes="detail-line",
            ),
            Static("Base Stats", classes="section-title"),
        ]

        for stat in detail.stats:
            widgets.append(
                Horizontal(
                    Label(stat_label(stat.name), classes="stat-name"),
                    Label(str(stat.value), classes="stat-value"),
                    ProgressBar(
                        total=MAX_STAT_VALUE,
                        show_eta=False,
                        show_percentage=False,
                        id=f"stat-bar-{stat.name}",
                    ),
                    classes="stat-row",
                )
            )

        widgets.append(Static(f"[bold]Total[/] {detail.total_stats}", classes="detail-line"))
        return widgets

    def _update_nav_buttons(self) -> None:
        service = self.dex_app.detail_service
        previous_id = service.previous_id(self.entry_id) if service else None
        next_id = service.next_id(self.entry_id) if service else None

        previous_button = self.query_one("#btn-previous", Button)
        previous_button.disabled = previous_id is None
        previous_button.label = f"← #{previous_id:03d}" if previous_id else "Previous"

        next_button = self.query_one("#btn-next", Button)
        next_button.disabled = next_id is None
        next_button.label = f"#{next_id:03d} →" if next_id else "Next"

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id in ("btn-back", "btn-not-found-back"):
            await self.action_go_back()
        elif button_id == "btn-previous":
            await self.action_previous_entry()
        elif button_id == "btn-next":
            await self.action_next_entry()

    async def _show_entry(self, entry_id: int | None) -> None:
        if entry_id is None:
            return
        log.info("Showing adjacent entry", from_entry=self.entry_id, to_entry=entry_id)
        _ = self.dex_app.call_later(self.dex_app.switch_screen_with_tracking, "detail", entry_id=entry_id)

    async def action_previous_entry(self) -> None:
        service = self.dex_app.detail_service
        if service is not None:
            await self._show_entry(service.previous_id(self.entry_id))

    async def action_next_entry(self) -> None:
        service = self.dex_app.detail_service
        if service is not None:
            await self._show_entry(service.next_id(self.entry_id))
