"""Light/dark theme preference."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

THEME_KEY = "god-services-theme"
THEME_DARK = "dark"
THEME_LIGHT = "light"
THEMES = (THEME_DARK, THEME_LIGHT)
DEFAULT_THEME = THEME_DARK


@dataclass(frozen=True)
class ThemeState:
    """Active theme and which toggle icon the page shows for it."""

    theme: str

    @property
    def show_sun_icon(self) -> bool:
        return self.theme == THEME_DARK

    @property
    def show_moon_icon(self) -> bool:
        return self.theme != THEME_DARK


class ThemeController:
    """Read and flip the persisted theme of one owner.

    ``store`` must provide ``get(key)`` and ``update(key, transform)``.
    ``owner`` identifies whose preference this is (a signed-in user or one
    browser); without it the controller uses the bare preference key.
    """

    def __init__(self, store: Any, owner: str | None = None) -> None:
        self._store = store
        self.key = THEME_KEY if owner is None else f"{THEME_KEY}:{owner}"

    def init_theme(self) -> ThemeState:
        """Return the saved theme, falling back to dark."""

        return ThemeState(theme=_valid_theme(self._store.get(self.key)))

    def toggle_theme(self) -> ThemeState:
        """Switch between dark and light and persist the choice."""

        new_theme = self._store.update(self.key, _flip)
        return ThemeState(theme=new_theme)


def _valid_theme(value: str | None) -> str:
    return value if value in THEMES else DEFAULT_THEME


def _flip(value: str | None) -> str:
    return THEME_LIGHT if _valid_theme(value) == THEME_DARK else THEME_DARK


__all__ = [
    "DEFAULT_THEME",
    "THEMES",
    "THEME_DARK",
    "THEME_KEY",
    "THEME_LIGHT",
    "ThemeController",
    "ThemeState",
]
