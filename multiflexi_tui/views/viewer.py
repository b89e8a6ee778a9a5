"""Scrollable viewer for command help text."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..render.highlight import sanitize_terminal_text
from ..runtime.messages import Back, HelpFailed, HelpLoaded
from ..state import ViewId
from ..ui_theme import DEFAULT_THEME, UITheme
from .base import BACK_KEYS, NO_COMMANDS, NO_INTENTS, ViewModel, error_lines, scroll_key, titled


@dataclass(frozen=True)
class HelpView(ViewModel):
    command: str
    lines: tuple[str, ...] = ()
    scroll: int = 0
    loading: bool = True
    error: Exception | None = None
    return_to: ViewId = ViewId.MENU
    width: int = 80
    height: int = 20

    footer = "↑/↓: scroll • PgUp/PgDn: page • q/Esc: back"

    def _rows(self) -> int:
        return max(1, self.height - 2)

    def handle_key(self, key: str):
        if key in BACK_KEYS:
            return self, (Back(),), NO_COMMANDS
        scroll = scroll_key(key, self.scroll, len(self.lines), self._rows())
        if scroll is not None and scroll != self.scroll:
            return replace(self, scroll=scroll), NO_INTENTS, NO_COMMANDS
        return self, NO_INTENTS, NO_COMMANDS

    def handle_message(self, message: object):
        if isinstance(message, HelpLoaded) and message.command == self.command:
            lines = tuple(sanitize_terminal_text(message.text).splitlines())
            return replace(self, lines=lines, scroll=0, loading=False, error=None), NO_COMMANDS
        if isinstance(message, HelpFailed) and message.command == self.command:
            return replace(self, loading=False, error=message.error), NO_COMMANDS
        return self, NO_COMMANDS

    def render(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
        if self.error is not None:
            body = error_lines(self.error, theme)
        elif self.loading:
            body = [f"{theme.dim}Loading help...{theme.reset}"]
        else:
            body = list(self.lines[self.scroll :])
        return titled(f"Help: {self.command}", body, width, height, theme)
