"""Progress widget for the catalog load."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import ProgressBar, Static

import structlog

from pokedex.models import GENERATIONS, LoadProgress

log = structlog.stdlib.get_logger()

# Each of the eight tiles covers an equal share of the bar
TILE_SHARE: float = 100 / len(GENERATIONS)


def reached_generations(percent: float) -> list[int]:
    """Generation ids whose tile is lit at a given percentage."""
    return [
        generation.id
        for index, generation in enumerate(GENERATIONS)
        if percent > index * TILE_SHARE
    ]


class LoadProgressWidget(Widget):
    """Progress bar, percentage scale and generation tiles for the catalog load."""

    DEFAULT_CSS: ClassVar[str] = """
    LoadProgressWidget {
        height: auto;
        padding: 1;
        border: solid $primary-darken-2;
        background: $surface;
    }

    LoadProgressWidget #load-status {
        margin-bottom: 1;
    }

    LoadProgressWidget .progress-bar-container {
        height: 1;
        margin-bottom: 1;
    }

    LoadProgressWidget #percent-scale {
        height: 1;
        color: $text-muted;
    }

    LoadProgressWidget .scale-label {
        width: 1fr;
    }

    LoadProgressWidget #scale-current {
        text-align: center;
        text-style: bold;
    }

    LoadProgressWidget #scale-end {
        text-align: right;
    }

    LoadProgressWidget #generation-tiles {
        height: auto;
        margin-top: 1;
    }

    LoadProgressWidget .gen-tile {
        width: 1fr;
        text-align: center;
        color: $text-muted;
        background: $panel;
        margin: 0 1 0 0;
    }

    LoadProgressWidget .gen-tile.reached {
        color: $text;
        background: $primary-darken-2;
    }
    """

    percent: reactive[int] = reactive(0, init=False)

    def __init__(
        self,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._status: str = "Loading all 8 generations..."
        self.percent = 0

    @override
    def compose(self) -> ComposeResult:
        yield Static(self._status, id="load-status")
        with Vertical(classes="progress-bar-container"):
            yield ProgressBar(id="load-bar", total=100, show_eta=False)
        with Horizontal(id="percent-scale"):
            yield Static("0%", classes="scale-label")
            yield Static("0%", id="scale-current", classes="scale-label")
            yield Static("100%", id="scale-end", classes="scale-label")
        with Horizontal(id="generation-tiles"):
            for generation in GENERATIONS:
                yield Static(
                    f"[{generation.color}]●[/] {generation.name}",
                    id=f"gen-tile-{generation.id}",
                    classes="gen-tile",
                )

    def update_progress(self, progress: LoadProgress) -> None:
        """Show a new progress snapshot."""
        self.percent = progress.percent
        self._refresh_display()

    def set_status(self, status: str) -> None:
        self._status = status
        self._refresh_display()

    def _refresh_display(self) -> None:
        try:
            self.query_one("#load-status", Static).update(self._status)
            self.query_one("#load-bar", ProgressBar).update(progress=self.percent)
            self.query_one("#scale-current", Static).update(f"{self.percent}%")

            reached = set(reached_generations(self.percent))
            for generation in GENERATIONS:
                tile = self.query_one(f"#gen-tile-{generation.id}", Static)
                tile.set_class(generation.id in reached, "reached")
        except Exception as e:
            log.debug("Failed to refresh load progress display", error=str(e))
