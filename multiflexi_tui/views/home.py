"""System dashboard: status snapshot plus a glance at recent jobs and templates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from ..ansi import fit_cell
from ..data.records import StatusInfo
from ..listing.controller import PageRequest
from ..listing.registry import get_entity
from ..render.table import render_table
from ..runtime.messages import BatchDataLoaded, Command, DataError, DataLoaded, StatusLoaded
from ..ui_theme import DEFAULT_THEME, UITheme
from .base import NO_COMMANDS, NO_INTENTS, ViewModel, titled

LABEL_WIDTH = 15
GLANCE_ROWS = 5
DATABASE_DISPLAY_CHARS = 80

GLANCE_REQUESTS = (
    PageRequest(key="jobs", entity="job", limit=GLANCE_ROWS),
    PageRequest(key="runtemplates", entity="runtemplate", limit=GLANCE_ROWS),
)
GLANCE_TITLES = {"jobs": "Recent Jobs", "runtemplates": "Run Templates"}


def status_rows(status: StatusInfo) -> list[tuple[str, str]]:
    return [
        ("CLI Version", status.version),
        ("User", status.user),
        ("PHP", status.php),
        ("OS", status.os),
        ("Companies", str(status.companies)),
        ("Applications", str(status.apps)),
        ("Templates", str(status.templates)),
        ("Executor", status.executor),
        ("Scheduler", status.scheduler),
        ("Encryption", status.encryption),
        ("Zabbix", status.zabbix),
        ("Telemetry", status.telemetry),
    ]


@dataclass(frozen=True)
class HomeView(ViewModel):
    status: StatusInfo | None = None
    glance: Mapping[str, DataLoaded | DataError] = field(default_factory=dict)
    refresh_commands: tuple[Command, ...] = field(default=(), compare=False, repr=False)
    width: int = 80
    height: int = 20

    footer = "r: refresh • Tab: switch focus • F10: commands • Ctrl+C: quit"

    def handle_key(self, key: str):
        if key == "r" and self.refresh_commands:
            return self, NO_INTENTS, self.refresh_commands
        return self, NO_INTENTS, NO_COMMANDS

    def handle_message(self, message: object):
        if isinstance(message, StatusLoaded):
            return replace(self, status=message.status), NO_COMMANDS
        if isinstance(message, BatchDataLoaded):
            return replace(self, glance=dict(message.results)), NO_COMMANDS
        return self, NO_COMMANDS

    def _status_lines(self, theme: UITheme) -> list[str]:
        status = self.status
        if status is None:
            return [f"{theme.dim}Loading system status...{theme.reset}"]
        lines = []
        for label, value in status_rows(status):
            if value == "active":
                style = theme.success
            elif value == "disabled" or status.version == "Error":
                style = theme.error
            else:
                style = theme.value
            lines.append(f"{theme.label}{fit_cell(label + ':', LABEL_WIDTH)}{theme.reset} {style}{value}{theme.reset}")
        if status.database:
            database = status.database
            if len(database) > DATABASE_DISPLAY_CHARS:
                database = database[: DATABASE_DISPLAY_CHARS - 3] + "..."
            lines.extend(["", "Database Information:", f"{theme.dim}   {database}{theme.reset}"])
        return lines

    def _glance_lines(self, width: int, theme: UITheme) -> list[str]:
        lines: list[str] = []
        for request in GLANCE_REQUESTS:
            outcome = self.glance.get(request.key)
            if outcome is None:
                continue
            lines.extend(["", f"{theme.heading}{GLANCE_TITLES[request.key]}{theme.reset}"])
            if isinstance(outcome, DataError):
                lines.append(f"{theme.error}Error: {outcome.error}{theme.reset}")
                continue
            if not outcome.data:
                lines.append(f"{theme.dim}none{theme.reset}")
                continue
            columns = get_entity(request.entity).columns
            lines.extend(render_table(columns, outcome.data, -1, width, GLANCE_ROWS + 1, theme))
        return lines

    def render(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
        body = self._status_lines(theme) + self._glance_lines(width, theme)
        return titled("MultiFlexi System Dashboard", body, width, height, theme)
