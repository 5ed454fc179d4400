"""Shared behaviour for the loading, catalog and detail screens."""

from typing import TYPE_CHECKING, ClassVar, Literal

from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Static

import structlog

from pokedex.services.errors import (
    ErrorSeverity,
    UserFriendlyError,
    get_error_service,
    handle_error,
)

if TYPE_CHECKING:
    from pokedex.ui.app import PokedexApp

log = structlog.stdlib.get_logger()

NotifySeverity = Literal["information", "warning", "error"]

_NOTIFY_SEVERITY: dict[ErrorSeverity, NotifySeverity] = {
    ErrorSeverity.WARNING: "warning",
    ErrorSeverity.ERROR: "error",
    ErrorSeverity.CRITICAL: "error",
}


class BaseScreen(Screen[None]):
    """Screen with access to the Pokédex app, lifecycle logging and error reporting.

    Subclasses set ``SCREEN_NAME`` (the registry key) and ``SCREEN_TITLE``.
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "go_back", "Back", show=True),
    ]

    SCREEN_TITLE: ClassVar[str] = "Screen"
    SCREEN_NAME: ClassVar[str] = "base"

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name=name or self.SCREEN_NAME)

    @property
    def dex_app(self) -> "PokedexApp":
        """The owning PokedexApp.

        Raises:
            RuntimeError: If the screen is mounted in some other app
        """
        from pokedex.ui.app import PokedexApp

        if not isinstance(self.app, PokedexApp):
            raise RuntimeError("Screen is not attached to a PokedexApp")
        return self.app

    async def on_mount(self) -> None:
        log.info("Screen mounted", screen=self.SCREEN_NAME, title=self.SCREEN_TITLE)

    async def on_unmount(self) -> None:
        log.info("Screen unmounted", screen=self.SCREEN_NAME)

    def on_screen_resume(self) -> None:
        log.debug("Screen resumed", screen=self.SCREEN_NAME)

    def on_screen_suspend(self) -> None:
        log.debug("Screen suspended", screen=self.SCREEN_NAME)

    async def action_go_back(self) -> None:
        await self.dex_app.action_go_back()

    def create_title_widget(self, title: str | None = None) -> Static:
        return Static(title or self.SCREEN_TITLE, classes="title")

    def notify_user(self, message: str, severity: NotifySeverity = "information") -> None:
        """Show a toast and mirror it into the log at the matching level."""
        self.notify(message, severity=severity)
        log_method = {"information": log.info, "warning": log.warning}.get(severity, log.error)
        log_method("User notification", message=message, screen=self.SCREEN_NAME)

    def handle_exception(
        self,
        error: Exception,
        operation: str,
        context: dict[str, str | int | float | bool] | None = None,
        notify: bool = True,
    ) -> UserFriendlyError:
        """Route an exception through the error service.

        Technical details only reach the log. When ``notify`` is set the user
        sees the generic message, without suggestions.
        """
        user_error = handle_error(
            error=error,
            operation=operation,
            component=self.SCREEN_NAME,
            context=context,
        )

        if notify:
            self.notify_user(
                get_error_service().create_user_message(user_error, include_suggestions=False),
                _NOTIFY_SEVERITY[user_error.severity],
            )
        return user_error
