"""Loading screen: runs the catalog load and shows its progress."""

import asyncio
from typing import ClassVar, override

from textual.app import ComposeResult
from textual.containers import Container
from textual.message import Message
from textual.widgets import Static
from textual.worker import Worker, WorkerState

import structlog

from pokedex.models import Entry, LoadProgress
from pokedex.services.errors import CatalogLoadError
from pokedex.ui.widgets import LoadProgressWidget

from .base import BaseScreen

log = structlog.stdlib.get_logger()


class LoadingScreen(BaseScreen):
    """Shown while the catalog loads.

    On success the app switches to the catalog. If the index fetch fails
    this screen stays up for the rest of the session with an empty
    collection; there is no retry.
    """

    class ProgressUpdate(Message):
        """Posted after every completed batch."""

        progress: LoadProgress

        def __init__(self, progress: LoadProgress) -> None:
            super().__init__()
            self.progress = progress

    class CatalogLoaded(Message):
        """Posted once the whole collection is loaded and sorted."""

        entries: list[Entry]

        def __init__(self, entries: list[Entry]) -> None:
            super().__init__()
            self.entries = entries

    class CatalogLoadFailed(Message):
        """Posted when the index fetch fails."""

        error: CatalogLoadError

        def __init__(self, error: CatalogLoadError) -> None:
            super().__init__()
            self.error = error

    SCREEN_TITLE: ClassVar[str] = "Loading National Pokédex"
    SCREEN_NAME: ClassVar[str] = "loading"

    CSS: ClassVar[str] = """
    LoadingScreen {
        align: center middle;
    }

    #loading-container {
        width: 90;
        height: auto;
        padding: 1 2;
        border: solid $primary;
        background: $surface;
    }

    #loading-spinner-text {
        text-align: center;
        color: $text-muted;
        margin-bottom: 1;
    }
    """

    _load_worker: Worker[None] | None

    def __init__(self) -> None:
        super().__init__()
        self._load_worker = None

    @override
    def compose(self) -> ComposeResult:
        with Container(id="loading-container"):
            yield self.create_title_widget()
            yield Static("Fetching entries from PokeAPI...", id="loading-spinner-text")
            yield LoadProgressWidget(id="load-progress")

    @override
    async def on_mount(self) -> None:
        await super().on_mount()
        self._start_load()

    def _start_load(self) -> None:
        if self.dex_app.catalog_loader is None:
            log.error("No catalog loader configured")
            self.dex_app.mark_load_failed()
            self._show_stuck()
            return

        self._load_worker = self.run_worker(
            self._run_load(),
            name="catalog_loader",
            exclusive=True,
            exit_on_error=False,
        )

    async def _run_load(self) -> None:
        """Run the catalog load (executed in a worker)."""
        loader = self.dex_app.catalog_loader
        if loader is None:
            return

        try:
            entries = await loader.load_catalog(
                on_progress=lambda progress: self.post_message(self.ProgressUpdate(progress))
            )
        except asyncio.CancelledError:
            log.info("Catalog load worker cancelled")
            raise
        except CatalogLoadError as e:
            self.post_message(self.CatalogLoadFailed(e))
            return

        self.post_message(self.CatalogLoaded(entries))

    def on_loading_screen_progress_update(self, event: ProgressUpdate) -> None:
        self.query_one("#load-progress", LoadProgressWidget).update_progress(event.progress)
        self.dex_app.set_load_percent(event.progress.percent)

    def on_loading_screen_catalog_loaded(self, event: CatalogLoaded) -> None:
        log.info("Catalog loaded", entries=len(event.entries))
        self.dex_app.update_catalog(event.entries)
        # Runs on the app's queue; this screen is the one being replaced
        _ = self.dex_app.call_later(self.dex_app.switch_screen_with_tracking, "catalog")

    def on_loading_screen_catalog_load_failed(self, event: CatalogLoadFailed) -> None:
        _ = self.handle_exception(event.error, "load_catalog", notify=False)
        self.dex_app.mark_load_failed()
        self._show_stuck()

    def _show_stuck(self) -> None:
        # Generic wording only; details are in the log
        self.query_one("#loading-spinner-text", Static).update("Still loading...")
        self.query_one("#load-progress", LoadProgressWidget).set_status(
            "The catalog is not available right now."
        )

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.worker.name == "catalog_loader":
            log.debug("Catalog load worker state changed", state=event.state)
            if event.state == WorkerState.ERROR:
                self.dex_app.mark_load_failed()
                self._show_stuck()
