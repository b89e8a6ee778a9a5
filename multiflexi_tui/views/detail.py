"""Read-only record detail with a raw JSON toggle."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..ansi import fit_cell
from ..data.records import Record
from ..listing.registry import EntitySpec
from ..render.highlight import DEFAULT_STYLE, highlight_json, record_json, record_payload, sanitize_terminal_text
from ..runtime.messages import Back, Delete, Edit, Schedule, SetStatus
from ..ui_theme import DEFAULT_THEME, PLAIN_THEME, UITheme
from .base import BACK_KEYS, NO_COMMANDS, NO_INTENTS, ViewModel, scroll_key, titled

LABEL_WIDTH = 18


def field_label(name: str) -> str:
    return name.replace("_", " ").replace("-", " ").title()


@dataclass(frozen=True)
class DetailView(ViewModel):
    item: Record
    spec: EntitySpec | None = None
    raw: bool = False
    scroll: int = 0
    syntax_style: str = DEFAULT_STYLE
    width: int = 80
    height: int = 20

    @property
    def footer(self) -> str:
        keys = []
        if self.spec is not None and self.spec.editor is not None:
            keys.append("e: edit")
        if self.spec is not None and self.spec.schedulable:
            keys.append("s: schedule")
        if self.spec is not None and self.spec.deletable:
            keys.append("d: delete")
        keys.extend(["v: raw JSON", "Esc/q: back"])
        return " • ".join(keys)

    @property
    def title(self) -> str:
        kind = self.spec.title if self.spec is not None else type(self.item).__name__
        return f"{kind} #{self.item.id}"

    def body_lines(self, theme: UITheme = DEFAULT_THEME) -> list[str]:
        if self.raw:
            return highlight_json(record_json(self.item), style=self.syntax_style, no_color=not theme.reset)
        out = []
        for key, value in record_payload(self.item).items():
            label = fit_cell(field_label(key) + ":", LABEL_WIDTH)
            text = sanitize_terminal_text("" if value is None else str(value))
            out.append(f"{theme.label}{label}{theme.reset} {theme.value}{text}{theme.reset}")
        return out

    def handle_key(self, key: str):
        if key in BACK_KEYS:
            return self, (Back(),), NO_COMMANDS
        if key == "e":
            if self.spec is None or self.spec.editor is None:
                return self, (SetStatus(f"{type(self.item).__name__} records cannot be edited"),), NO_COMMANDS
            return self, (Edit(self.item),), NO_COMMANDS
        if key == "s":
            if self.spec is None or not self.spec.schedulable:
                return self, (SetStatus(f"{type(self.item).__name__} records cannot be scheduled"),), NO_COMMANDS
            return self, (Schedule(self.item),), NO_COMMANDS
        if key == "d":
            return self, (Delete(self.item),), NO_COMMANDS
        if key == "v":
            return replace(self, raw=not self.raw, scroll=0), NO_INTENTS, NO_COMMANDS
        rows = max(1, self.height - 2)
        scroll = scroll_key(key, self.scroll, len(self.body_lines(PLAIN_THEME)), rows)
        if scroll is not None and scroll != self.scroll:
            return replace(self, scroll=scroll), NO_INTENTS, NO_COMMANDS
        return self, NO_INTENTS, NO_COMMANDS

    def render(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
        body = self.body_lines(theme)
        return titled(self.title, body[self.scroll :], width, height, theme)
