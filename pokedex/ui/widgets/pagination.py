"""Pagination controls for the catalog screen."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button

import structlog

from pokedex.services.catalog_view import CatalogPage

log = structlog.stdlib.get_logger()


class PaginationBar(Widget):
    """Previous / page-number window / next controls.

    Hidden entirely when there is only one page.
    """

    class PageSelected(Message):
        """Posted when the user asks for a page."""

        page: int

        def __init__(self, page: int) -> None:
            super().__init__()
            self.page = page

    DEFAULT_CSS: ClassVar[str] = """
    PaginationBar {
        height: auto;
        align: center middle;
        margin-top: 1;
    }

    PaginationBar.single-page {
        display: none;
    }

    PaginationBar #pagination-row {
        height: auto;
        width: auto;
    }

    PaginationBar #page-numbers {
        height: auto;
        width: auto;
        margin: 0 1;
    }

    PaginationBar .page-button {
        min-width: 6;
        margin: 0 0 0 1;
    }
    """

    _current: int
    _total: int

    def __init__(
        self,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._current = 1
        self._total = 1

    @override
    def compose(self) -> ComposeResult:
        with Horizontal(id="pagination-row"):
            yield Button("Previous", id="page-prev", variant="default")
            yield Horizontal(id="page-numbers")
            yield Button("Next", id="page-next", variant="default")

    async def update_page(self, page: CatalogPage) -> None:
        """Rebuild the controls for a derived catalog page."""
        self._current = page.page
        self._total = page.total_pages
        self.set_class(page.total_pages <= 1, "single-page")

        self.query_one("#page-prev", Button).disabled = not page.has_previous
        self.query_one("#page-next", Button).disabled = not page.has_next

        numbers = self.query_one("#page-numbers", Horizontal)
        await numbers.remove_children()
        await numbers.mount_all(
            Button(
                str(number),
                name=str(number),
                classes="page-button",
                variant="primary" if number == page.page else "default",
            )
            for number in page.window
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button = event.button

        if button.id == "page-prev":
            target = self._current - 1
        elif button.id == "page-next":
            target = self._current + 1
        elif button.name and button.name.isdigit():
            target = int(button.name)
        else:
            return

        log.debug("Page requested", page=target, total_pages=self._total)
        self.post_message(self.PageSelected(target))
