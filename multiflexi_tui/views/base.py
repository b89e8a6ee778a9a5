"""Shared view-model protocol and key groups.

View models are frozen dataclasses. Input returns a new view plus the intents
and background commands it produced; nothing here performs side effects.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from ..ansi import pad_ansi_line
from ..runtime.messages import Command
from ..ui_theme import DEFAULT_THEME, UITheme

UP_KEYS = frozenset({"UP", "k"})
DOWN_KEYS = frozenset({"DOWN", "j"})
LEFT_KEYS = frozenset({"LEFT", "h"})
RIGHT_KEYS = frozenset({"RIGHT", "l"})
BACK_KEYS = frozenset({"ESC", "q"})

NO_INTENTS: tuple = ()
NO_COMMANDS: tuple[Command, ...] = ()


class ViewModel:
    """Default behavior for view models; subclasses are frozen dataclasses
    with ``width`` and ``height`` fields."""

    footer = "Tab: switch focus • F10: commands • Ctrl+C: quit"

    def handle_key(self, key: str):
        return self, NO_INTENTS, NO_COMMANDS

    def handle_message(self, message: object):
        return self, NO_COMMANDS

    def resize(self, width: int, height: int):
        if (width, height) == (self.width, self.height):
            return self
        return replace(self, width=width, height=height)

    def render(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
        return []


def scroll_clamp(scroll: int, total: int, rows: int) -> int:
    return max(0, min(scroll, max(0, total - rows)))


def scroll_key(key: str, scroll: int, total: int, rows: int) -> int | None:
    """New scroll offset for a line-scrolling key, or ``None`` if not a scroll key."""
    if key in UP_KEYS:
        return scroll_clamp(scroll - 1, total, rows)
    if key in DOWN_KEYS:
        return scroll_clamp(scroll + 1, total, rows)
    if key == "PAGE_UP":
        return scroll_clamp(scroll - max(1, rows - 1), total, rows)
    if key in {"PAGE_DOWN", " "}:
        return scroll_clamp(scroll + max(1, rows - 1), total, rows)
    if key in {"HOME", "g"}:
        return 0
    if key in {"END", "G"}:
        return scroll_clamp(total, total, rows)
    return None


def titled(title: str, body: Sequence[str], width: int, height: int, theme: UITheme) -> list[str]:
    """Heading line, blank spacer, then ``body`` clipped to the area."""
    if height <= 0:
        return []
    lines = [f"{theme.heading}{pad_ansi_line(title, width)}{theme.reset}"]
    if height > 1:
        lines.append("")
    for line in body:
        if len(lines) >= height:
            break
        lines.append(pad_ansi_line(line, width))
    return lines


def error_lines(error: Exception, theme: UITheme) -> list[str]:
    return [f"{theme.error}Error: {error}{theme.reset}"]
