"""Admin action pages: log/job pruning and encryption setup."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..data.actions import DEFAULT_PRUNE_KEEP
from ..runtime.messages import ActionFinished, RunAction, SetStatus, ShowMenu
from ..ui_theme import DEFAULT_THEME, UITheme
from .base import NO_COMMANDS, NO_INTENTS, ViewModel, error_lines, titled

PRUNE_FIELDS = ("logs", "jobs", "keep")


def _result_lines(output: str, error: Exception | None, theme: UITheme) -> list[str]:
    if error is not None:
        return error_lines(error, theme)
    if output:
        return [f"{theme.success}{line}{theme.reset}" for line in output.splitlines()]
    return []


@dataclass(frozen=True)
class PruneView(ViewModel):
    logs: bool = True
    jobs: bool = False
    keep: str = str(DEFAULT_PRUNE_KEEP)
    focus_index: int = 0
    running: bool = False
    output: str = ""
    error: Exception | None = None
    width: int = 80
    height: int = 20

    footer = "↑/↓: move • Space: toggle • 0-9: keep count • Enter: prune • Esc: menu"

    def handle_key(self, key: str):
        if key == "ESC":
            return self, (ShowMenu(),), NO_COMMANDS
        if key in {"UP", "SHIFT_TAB"}:
            return replace(self, focus_index=(self.focus_index - 1) % len(PRUNE_FIELDS)), NO_INTENTS, NO_COMMANDS
        if key in {"DOWN", "TAB"}:
            return replace(self, focus_index=(self.focus_index + 1) % len(PRUNE_FIELDS)), NO_INTENTS, NO_COMMANDS
        focused = PRUNE_FIELDS[self.focus_index]
        if key == " " and focused == "logs":
            return replace(self, logs=not self.logs), NO_INTENTS, NO_COMMANDS
        if key == " " and focused == "jobs":
            return replace(self, jobs=not self.jobs), NO_INTENTS, NO_COMMANDS
        if focused == "keep" and key.isdigit() and len(key) == 1:
            return replace(self, keep=(self.keep + key).lstrip("0") or "0"), NO_INTENTS, NO_COMMANDS
        if focused == "keep" and key == "BACKSPACE":
            return replace(self, keep=self.keep[:-1]), NO_INTENTS, NO_COMMANDS
        if key == "ENTER":
            if self.running:
                return self, NO_INTENTS, NO_COMMANDS
            if not self.logs and not self.jobs:
                return self, (SetStatus("Select logs, jobs, or both to prune"),), NO_COMMANDS
            keep = int(self.keep) if self.keep else DEFAULT_PRUNE_KEEP
            view = replace(self, keep=str(keep), running=True, output="", error=None)
            intent = RunAction("prune", {"logs": self.logs, "jobs": self.jobs, "keep": keep})
            return view, (intent,), NO_COMMANDS
        return self, NO_INTENTS, NO_COMMANDS

    def handle_message(self, message: object):
        if isinstance(message, ActionFinished) and message.kind == "prune":
            return replace(self, running=False, output=message.output, error=message.error), NO_COMMANDS
        return self, NO_COMMANDS

    def render(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
        def marker(idx: int) -> str:
            return f"{theme.reverse}>{theme.reset}" if idx == self.focus_index else " "

        body = [
            f"{marker(0)} [{'x' if self.logs else ' '}] Prune logs",
            f"{marker(1)} [{'x' if self.jobs else ' '}] Prune jobs",
            f"{marker(2)} Keep newest: {self.keep or DEFAULT_PRUNE_KEEP}",
            "",
        ]
        if self.running:
            body.append(f"{theme.dim}Pruning...{theme.reset}")
        body.extend(_result_lines(self.output, self.error, theme))
        return titled("Prune Logs and Jobs", body, width, height, theme)


@dataclass(frozen=True)
class EncryptionView(ViewModel):
    running: bool = False
    output: str = ""
    error: Exception | None = None
    width: int = 80
    height: int = 20

    footer = "Enter: initialize encryption • Esc: menu"

    def handle_key(self, key: str):
        if key == "ESC":
            return self, (ShowMenu(),), NO_COMMANDS
        if key == "ENTER" and not self.running:
            view = replace(self, running=True, output="", error=None)
            return view, (RunAction("init_encryption"),), NO_COMMANDS
        return self, NO_INTENTS, NO_COMMANDS

    def handle_message(self, message: object):
        if isinstance(message, ActionFinished) and message.kind == "init_encryption":
            return replace(self, running=False, output=message.output, error=message.error), NO_COMMANDS
        return self, NO_COMMANDS

    def render(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
        body = ["Press Enter to initialize encryption keys.", ""]
        if self.running:
            body.append(f"{theme.dim}Initializing...{theme.reset}")
        body.extend(_result_lines(self.output, self.error, theme))
        return titled("Encryption", body, width, height, theme)
