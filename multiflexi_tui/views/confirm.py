"""Yes/No confirmation dialog for record deletion."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..runtime.messages import ConfirmNo, ConfirmYes
from ..state import PendingDelete
from ..ui_theme import DEFAULT_THEME, UITheme
from .base import LEFT_KEYS, NO_COMMANDS, NO_INTENTS, RIGHT_KEYS, ViewModel, titled


@dataclass(frozen=True)
class ConfirmView(ViewModel):
    pending: PendingDelete
    yes_selected: bool = False
    width: int = 80
    height: int = 20

    footer = "y: delete • n/Esc: cancel • ←/→: choose • Enter: confirm"

    def handle_key(self, key: str):
        if key in {"y", "Y"}:
            return self, (ConfirmYes(),), NO_COMMANDS
        if key in {"n", "N", "ESC", "q"}:
            return self, (ConfirmNo(),), NO_COMMANDS
        if key in LEFT_KEYS | RIGHT_KEYS | {"TAB"}:
            return replace(self, yes_selected=not self.yes_selected), NO_INTENTS, NO_COMMANDS
        if key == "ENTER":
            return self, (ConfirmYes() if self.yes_selected else ConfirmNo(),), NO_COMMANDS
        return self, NO_INTENTS, NO_COMMANDS

    def render(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
        yes_style = theme.button_active if self.yes_selected else theme.button
        no_style = theme.button if self.yes_selected else theme.button_active
        body = [
            f"Delete {self.pending.label}?",
            "",
            f"{theme.error}This cannot be undone.{theme.reset}",
            "",
            f"{yes_style}[ Yes ]{theme.reset}  {no_style}[ No ]{theme.reset}",
        ]
        return titled("Confirm Delete", body, width, height, theme)
