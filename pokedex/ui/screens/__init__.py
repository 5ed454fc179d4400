"""Screen components for the TUI application."""

from typing import Any

from .base import BaseScreen
from .catalog import CatalogScreen
from .detail import DetailScreen
from .loading import LoadingScreen

# Screen registry for navigation
_SCREEN_REGISTRY: dict[str, type[BaseScreen]] = {
    "loading": LoadingScreen,
    "catalog": CatalogScreen,
    "detail": DetailScreen,
}


def get_screen_by_name(name: str, **kwargs: Any) -> BaseScreen | None:
    """Get a screen instance by its registered name.

    Args:
        name: The registered name of the screen
        **kwargs: Passed to the screen constructor

    Returns:
        A new instance of the screen, or None if not found
    """
    screen_class = _SCREEN_REGISTRY.get(name)
    if screen_class:
        return screen_class(**kwargs)
    return None


__all__ = [
    "BaseScreen",
    "CatalogScreen",
    "DetailScreen",
    "LoadingScreen",
    "get_screen_by_name",
]
