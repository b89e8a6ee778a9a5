"""Full-screen frame composition and output.

``compose_frame`` is pure: it turns an ``AppState`` into exactly
``state.height`` display lines. ``render_frame`` clears the screen and writes
them in one ``os.write`` call.
"""

from __future__ import annotations

import os
import sys

from ..ansi import pad_ansi_line
from ..layout import content_height
from ..runtime.menu import MENU_TITLE, hint_for, visible_items
from ..state import AppState, Focus
from ..ui_theme import DEFAULT_THEME, UITheme

MENU_FOOTER = "←/→: move • Enter: select • Tab/↓: content • q: quit"


def _menu_bar(state: AppState, theme: UITheme) -> str:
    parts = [f"{theme.menu_title}{MENU_TITLE}{theme.reset}  "]
    focused = state.focus is Focus.MENU
    for position, (idx, item) in enumerate(visible_items(state.menu_offset, state.width)):
        if position:
            parts.append(" ")
        if idx == state.menu_cursor:
            style = theme.menu_selected if focused else theme.menu_selected_unfocused
        else:
            style = theme.menu_item
        parts.append(f"{style} {item.label} {theme.reset}")
    return "".join(parts)


def _footer(state: AppState, theme: UITheme) -> str:
    if state.status_message:
        return f"{theme.status}{state.status_message}{theme.reset}"
    if state.focus is Focus.MENU:
        return f"{theme.hint}{MENU_FOOTER}{theme.reset}"
    model = state.current_view
    footer = getattr(model, "footer", "") if model is not None else ""
    return f"{theme.hint}{footer}{theme.reset}"


def compose_frame(state: AppState, theme: UITheme = DEFAULT_THEME) -> list[str]:
    width = max(1, state.width)
    rows = content_height(state.height)
    divider = f"{theme.divider}{'─' * width}{theme.reset}"

    lines = [
        pad_ansi_line(_menu_bar(state, theme), width),
        pad_ansi_line(f"{theme.hint}{hint_for(state.menu_cursor)}{theme.reset}", width),
        divider,
    ]

    model = state.current_view
    body = model.render(width, rows, theme) if model is not None else []
    for row in range(rows):
        lines.append(pad_ansi_line(body[row], width) if row < len(body) else "")

    lines.append(divider)
    lines.append(pad_ansi_line(_footer(state, theme), width))
    return lines[: max(1, state.height)]


def render_frame(lines: list[str]) -> None:
    out: list[str] = []
    out.append("\033[H\033[J")
    for row, line in enumerate(lines):
        out.append(line)
        if "\033" in line:
            out.append("\033[0m")
        if row < len(lines) - 1:
            out.append("\r\n")
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))
