"""Entry card for the catalog grid, plus shared badge formatting."""

from typing import ClassVar

from textual import events
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Static

from pokedex.models import Entry, generation_info, type_color


def type_badges(types: list[str]) -> str:
    """Markup for coloured category badges."""
    return " ".join(f"[bold white on {type_color(tag)}] {tag} [/]" for tag in types)


def generation_marker(entry: Entry) -> str:
    """Coloured dot for the entry's generation band."""
    return f"[{generation_info(entry.generation).color}]●[/]"


class EntryCard(Static, can_focus=True):
    """A focusable card showing number, name, types and generation."""

    class Selected(Message):
        """Posted when the card is clicked or activated with enter."""

        entry_id: int

        def __init__(self, entry_id: int) -> None:
            super().__init__()
            self.entry_id = entry_id

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("enter", "select", "Open", show=False),
    ]

    DEFAULT_CSS: ClassVar[str] = """
    EntryCard {
        height: 5;
        padding: 0 1;
        border: round $primary-darken-2;
        background: $panel;
        content-align: center middle;
        text-align: center;
    }

    EntryCard:hover {
        border: round $primary;
    }

    EntryCard:focus {
        border: round $accent;
        background: $boost;
    }
    """

    def __init__(self, entry: Entry) -> None:
        super().__init__(self._render_entry(entry), classes="entry-card")
        self.entry = entry

    @staticmethod
    def _render_entry(entry: Entry) -> str:
        return (
            f"{generation_marker(entry)} [dim]{entry.display_number}[/]\n"
            f"[bold]{entry.name.capitalize()}[/]\n"
            f"{type_badges(entry.types)}"
        )

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Selected(self.entry.id))

    def action_select(self) -> None:
        self.post_message(self.Selected(self.entry.id))
