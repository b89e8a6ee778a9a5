"""Form editors for records and the run-template scheduler.

One ``EditorView`` class serves every editor; the field list is chosen by the
view identity. Saving emits a ``Save`` intent carrying an updated copy.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..ansi import fit_cell
from ..data.records import Record
from ..runtime.messages import Back, Save
from ..state import ViewId
from ..ui_theme import DEFAULT_THEME, UITheme
from .base import NO_COMMANDS, NO_INTENTS, ViewModel, titled

LABEL_WIDTH = 16


@dataclass(frozen=True)
class EditorField:
    label: str
    attr: str


EDITOR_FIELDS: dict[ViewId, tuple[EditorField, ...]] = {
    ViewId.JOB_EDITOR: (
        EditorField("Command", "command"),
        EditorField("Executor", "executor"),
        EditorField("Schedule Type", "schedule_type"),
    ),
    ViewId.COMPANY_EDITOR: (
        EditorField("Name", "name"),
        EditorField("Email", "email"),
        EditorField("IC", "ic"),
        EditorField("Slug", "slug"),
    ),
    ViewId.APPLICATION_EDITOR: (EditorField("Name", "name"),),
    ViewId.RUN_TEMPLATE_EDITOR: (EditorField("Name", "name"),),
    ViewId.SCHEDULER: (EditorField("Interval", "interv"),),
}

EDITOR_TITLES: dict[ViewId, str] = {
    ViewId.JOB_EDITOR: "Edit Job",
    ViewId.COMPANY_EDITOR: "Edit Company",
    ViewId.APPLICATION_EDITOR: "Edit Application",
    ViewId.RUN_TEMPLATE_EDITOR: "Edit Run Template",
    ViewId.SCHEDULER: "Schedule Run Template",
}


@dataclass(frozen=True)
class EditorView(ViewModel):
    view_id: ViewId
    item: Record
    values: tuple[str, ...]
    focus_index: int = 0
    width: int = 80
    height: int = 20

    footer = "Tab/↓: next field • Shift+Tab/↑: previous • Enter: save • Esc: back"

    @classmethod
    def open(cls, view_id: ViewId, item: Record, width: int = 80, height: int = 20) -> EditorView:
        fields = EDITOR_FIELDS[view_id]
        values = tuple(str(getattr(item, field.attr) or "") for field in fields)
        return cls(view_id=view_id, item=item, values=values, width=width, height=height)

    @property
    def fields(self) -> tuple[EditorField, ...]:
        return EDITOR_FIELDS[self.view_id]

    def edited_item(self) -> Record:
        """Copy of the record with the form values applied."""
        changes = {field.attr: value for field, value in zip(self.fields, self.values)}
        return replace(self.item, **changes)

    def _set_value(self, value: str) -> EditorView:
        values = list(self.values)
        values[self.focus_index] = value
        return replace(self, values=tuple(values))

    def handle_key(self, key: str):
        count = len(self.fields)
        if key == "ESC":
            return self, (Back(),), NO_COMMANDS
        if key == "ENTER":
            return self, (Save(self.edited_item()),), NO_COMMANDS
        if key in {"TAB", "DOWN"}:
            return replace(self, focus_index=(self.focus_index + 1) % count), NO_INTENTS, NO_COMMANDS
        if key in {"SHIFT_TAB", "UP"}:
            return replace(self, focus_index=(self.focus_index - 1) % count), NO_INTENTS, NO_COMMANDS
        current = self.values[self.focus_index]
        if key == "BACKSPACE":
            return self._set_value(current[:-1]), NO_INTENTS, NO_COMMANDS
        if key == "CTRL_U":
            return self._set_value(""), NO_INTENTS, NO_COMMANDS
        if len(key) == 1 and key.isprintable():
            return self._set_value(current + key), NO_INTENTS, NO_COMMANDS
        return self, NO_INTENTS, NO_COMMANDS

    def render(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
        name = getattr(self.item, "name", "") or getattr(self.item, "command", "")
        title = f"{EDITOR_TITLES[self.view_id]} #{self.item.id}"
        if name:
            title += f": {name}"
        body = []
        for idx, (field, value) in enumerate(zip(self.fields, self.values)):
            label = fit_cell(field.label + ":", LABEL_WIDTH)
            if idx == self.focus_index:
                body.append(f"{theme.label}{label}{theme.reset} {theme.reverse}{value}▏{theme.reset}")
            else:
                body.append(f"{theme.label}{label}{theme.reset} {value}")
        body.append("")
        body.append(f"{theme.dim}(press Enter to save, Esc to cancel){theme.reset}")
        return titled(title, body, width, height, theme)
