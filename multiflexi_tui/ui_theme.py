"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the dashboard chrome (menu bar, tables, dialogs).
Pygments highlighting of raw records uses its own style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    menu_title: str
    menu_item: str
    menu_selected: str
    menu_selected_unfocused: str
    hint: str
    heading: str
    table_header: str
    row_selected: str
    label: str
    value: str
    dim: str
    error: str
    success: str
    status: str
    button: str
    button_active: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    menu_title="\033[1;38;5;81m",
    menu_item="\033[38;5;252m",
    menu_selected="\033[1;30;48;5;81m",
    menu_selected_unfocused="\033[1;38;5;81m",
    hint="\033[2;38;5;250m",
    heading="\033[1;38;5;81m",
    table_header="\033[1;38;5;229m",
    row_selected="\033[7m",
    label="\033[38;5;110m",
    value="\033[38;5;252m",
    dim="\033[2;38;5;250m",
    error="\033[1;38;5;203m",
    success="\033[38;5;42m",
    status="\033[38;5;214m",
    button="\033[38;5;252m",
    button_active="\033[1;30;48;5;214m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    menu_title="\033[1;38;5;45m",
    menu_item="\033[38;5;153m",
    menu_selected="\033[1;30;48;5;45m",
    menu_selected_unfocused="\033[1;38;5;45m",
    hint="\033[2;38;5;110m",
    heading="\033[1;38;5;45m",
    table_header="\033[1;38;5;153m",
    row_selected="\033[7m",
    label="\033[38;5;117m",
    value="\033[38;5;252m",
    dim="\033[2;38;5;110m",
    error="\033[1;38;5;210m",
    success="\033[38;5;84m",
    status="\033[38;5;215m",
    button="\033[38;5;153m",
    button_active="\033[1;30;48;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    menu_title="",
    menu_item="",
    menu_selected="",
    menu_selected_unfocused="",
    hint="",
    heading="",
    table_header="",
    row_selected="",
    label="",
    value="",
    dim="",
    error="",
    success="",
    status="",
    button="",
    button_active="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    candidate = str(name or "").strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
