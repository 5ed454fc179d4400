"""User interface components using Textual framework."""

from .app import AppState, PokedexApp
from .screens import (
    BaseScreen,
    CatalogScreen,
    DetailScreen,
    LoadingScreen,
    get_screen_by_name,
)

__all__ = [
    "AppState",
    "BaseScreen",
    "CatalogScreen",
    "DetailScreen",
    "LoadingScreen",
    "PokedexApp",
    "get_screen_by_name",
]
