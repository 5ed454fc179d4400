"""Main Textual application with screen management and shared state."""

from dataclasses import dataclass, field
from typing import Any, ClassVar, override

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.reactive import reactive
from textual.widgets import Footer, Header

import structlog

from pokedex.models import AppConfig, Entry
from pokedex.services.catalog_loader import CatalogLoaderService
from pokedex.services.detail_service import DetailService


log = structlog.stdlib.get_logger()


@dataclass
class AppState:
    """Application state shared between screens for one session."""

    entries: list[Entry] = field(default_factory=list)
    loading: bool = True
    load_failed: bool = False
    load_percent: int = 0
    current_config: AppConfig | None = None


class PokedexApp(App[None]):
    """Terminal Pokédex: loads the catalog once, then browses it.

    The app owns the session state (the loaded collection) and the
    navigation stack; screens get services through it.
    """

    CSS: ClassVar[str] = """
    Screen {
        background: $surface;
    }

    .title {
        text-align: center;
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }

    .section-title {
        text-style: bold;
        color: $secondary;
        margin-top: 1;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True, priority=True),
        Binding("escape", "go_back", "Back", show=True),
        Binding("?", "show_help", "Help", show=True),
    ]

    app_state: reactive[AppState] = reactive(AppState, init=False)

    _catalog_loader: CatalogLoaderService | None
    _detail_service: DetailService | None
    _navigation_stack: list[str]

    def __init__(
        self,
        config: AppConfig | None = None,
        catalog_loader: CatalogLoaderService | None = None,
        detail_service: DetailService | None = None,
    ) -> None:
        """Initialize the application with optional service injection.

        Args:
            config: Application configuration (defaults when omitted)
            catalog_loader: Service that loads the catalog at startup
            detail_service: Service that fetches entry details
        """
        super().__init__()
        self.title = "Pokédex"  # type: ignore[assignment]
        self.sub_title = "National Pokédex · 8 generations"  # type: ignore[assignment]
        self._catalog_loader = catalog_loader
        self._detail_service = detail_service
        self._navigation_stack = []
        self.app_state = AppState(current_config=config or AppConfig())

        log.info("PokedexApp initialized")

    @property
    def config(self) -> AppConfig:
        return self.app_state.current_config or AppConfig()

    @property
    def catalog_loader(self) -> CatalogLoaderService | None:
        return self._catalog_loader

    @property
    def detail_service(self) -> DetailService | None:
        return self._detail_service

    @property
    def navigation_stack(self) -> list[str]:
        """Get a copy of the current navigation stack."""
        return self._navigation_stack.copy()

    @override
    def compose(self) -> ComposeResult:
        yield Header()
        yield Footer()

    async def on_mount(self) -> None:
        """Show the loading screen; it starts the catalog load."""
        log.info("Application mounted")
        await self.push_screen_with_tracking("loading")

    async def push_screen_with_tracking(self, screen_name: str, **kwargs: Any) -> None:
        """Push a screen and track it in the navigation stack.

        Args:
            screen_name: Registered name of the screen
            **kwargs: Arguments for the screen constructor (e.g. ``entry_id``)
        """
        # Lazy import to avoid circular dependency
        from pokedex.ui.screens import get_screen_by_name

        screen = get_screen_by_name(screen_name, **kwargs)
        if screen:
            self._navigation_stack.append(screen_name)
            await self.push_screen(screen)
            log.info("Screen pushed", screen=screen_name, stack_depth=len(self._navigation_stack))
        else:
            log.warning("Unknown screen requested", screen=screen_name)

    async def switch_screen_with_tracking(self, screen_name: str, **kwargs: Any) -> None:
        """Replace the current screen, keeping the navigation stack depth."""
        from pokedex.ui.screens import get_screen_by_name

        screen = get_screen_by_name(screen_name, **kwargs)
        if screen is None:
            log.warning("Unknown screen requested", screen=screen_name)
            return

        previous = self._navigation_stack.pop() if self._navigation_stack else None
        self._navigation_stack.append(screen_name)
        await self.switch_screen(screen)
        log.info("Screen switched", from_screen=previous, to_screen=screen_name)

    async def action_go_back(self) -> None:
        """Navigate back to the previous screen."""
        if len(self._navigation_stack) > 1:
            current = self._navigation_stack.pop()
            log.info("Navigating back", from_screen=current, stack_depth=len(self._navigation_stack))
            _ = self.pop_screen()
        else:
            log.debug("Already at root screen, cannot go back")

    async def action_show_help(self) -> None:
        log.info("Help requested")
        self.notify(
            "q quit · escape back · f search · g grid/list · [ ] pages · ←/→ adjacent entry"
        )

    def update_catalog(self, entries: list[Entry]) -> None:
        """Store the loaded collection and mark loading complete."""
        self.app_state = AppState(
            entries=entries,
            loading=False,
            load_failed=False,
            load_percent=100,
            current_config=self.app_state.current_config,
        )
        log.info("Catalog stored", entry_count=len(entries))

    def set_load_percent(self, percent: int) -> None:
        self.app_state = AppState(
            entries=self.app_state.entries,
            loading=True,
            load_failed=False,
            load_percent=percent,
            current_config=self.app_state.current_config,
        )

    def mark_load_failed(self) -> None:
        """Record a fatal catalog load; the collection stays empty."""
        self.app_state = AppState(
            entries=[],
            loading=True,
            load_failed=True,
            load_percent=self.app_state.load_percent,
            current_config=self.app_state.current_config,
        )
        log.error("Catalog load failed; staying on loading screen")
