"""Browser over the command catalogue reported by ``multiflexi-cli describe``."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..ansi import fit_cell, pad_ansi_line
from ..data.records import CommandInfo
from ..render.table import window_start
from ..runtime.messages import CommandsFailed, CommandsLoaded, ShowHelp, ShowMenu
from ..ui_theme import DEFAULT_THEME, UITheme
from .base import DOWN_KEYS, NO_COMMANDS, NO_INTENTS, UP_KEYS, ViewModel, error_lines

NAME_WIDTH = 20


@dataclass(frozen=True)
class CommandsView(ViewModel):
    commands: tuple[CommandInfo, ...] = ()
    cursor: int = 0
    loading: bool = True
    error: Exception | None = None
    width: int = 80
    height: int = 20

    footer = "↑/↓: select • Enter: show help • Esc: menu"

    def handle_key(self, key: str):
        if key in UP_KEYS and self.cursor > 0:
            return replace(self, cursor=self.cursor - 1), NO_INTENTS, NO_COMMANDS
        if key in DOWN_KEYS and self.cursor < len(self.commands) - 1:
            return replace(self, cursor=self.cursor + 1), NO_INTENTS, NO_COMMANDS
        if key == "ENTER" and self.commands:
            return self, (ShowHelp(self.commands[self.cursor].name),), NO_COMMANDS
        if key == "ESC":
            return self, (ShowMenu(),), NO_COMMANDS
        return self, NO_INTENTS, NO_COMMANDS

    def handle_message(self, message: object):
        if isinstance(message, CommandsLoaded):
            cursor = min(self.cursor, max(0, len(message.commands) - 1))
            return replace(self, commands=message.commands, cursor=cursor, loading=False, error=None), NO_COMMANDS
        if isinstance(message, CommandsFailed):
            return replace(self, loading=False, error=message.error), NO_COMMANDS
        return self, NO_COMMANDS

    def render(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
        if height <= 0:
            return []
        lines = [f"{theme.heading}Available Commands{theme.reset}"]
        if self.error is not None:
            lines.extend(error_lines(self.error, theme))
        elif self.loading:
            lines.append(f"{theme.dim}Loading commands...{theme.reset}")
        rows = max(0, height - len(lines))
        start = window_start(self.cursor, len(self.commands), rows)
        for idx in range(start, min(len(self.commands), start + rows)):
            info = self.commands[idx]
            row = pad_ansi_line(f"{fit_cell(info.name, NAME_WIDTH)} {info.description}", width)
            if idx == self.cursor:
                row = f"{theme.row_selected}{row}{theme.reset}"
            lines.append(row)
        return lines[:height]
