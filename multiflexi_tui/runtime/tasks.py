"""Background command builders for status, help, and record actions.

Each builder returns a zero-argument callable that resolves to exactly one
result message. Typed dashboard errors are converted into failure messages.
"""

from __future__ import annotations

from ..data.actions import DEFAULT_PRUNE_KEEP, Actions
from ..data.adapter import CliDataSource
from ..data.errors import DashboardError, UnsupportedItemKindError
from ..data.records import Record, StatusInfo
from .messages import (
    ActionFinished,
    Command,
    CommandsFailed,
    CommandsLoaded,
    DeleteFailed,
    DeleteSucceeded,
    HelpFailed,
    HelpLoaded,
    SaveFailed,
    SaveSucceeded,
    StatusLoaded,
)

STATUS_ERROR_CHARS = 20


def status_placeholder(error: Exception) -> StatusInfo:
    return StatusInfo(version="Error", user=str(error)[:STATUS_ERROR_CHARS])


def load_status(source: CliDataSource) -> Command:
    def command():
        try:
            return StatusLoaded(status=source.status())
        except DashboardError as exc:
            return StatusLoaded(status=status_placeholder(exc))

    return command


def load_commands(source: CliDataSource) -> Command:
    def command():
        try:
            return CommandsLoaded(commands=tuple(source.commands()))
        except DashboardError as exc:
            return CommandsFailed(error=exc)

    return command


def load_help(source: CliDataSource, command_name: str) -> Command:
    def command():
        try:
            return HelpLoaded(command=command_name, text=source.command_help(command_name))
        except DashboardError as exc:
            return HelpFailed(command=command_name, error=exc)

    return command


def save_record(actions: Actions, item: Record) -> Command:
    def command():
        try:
            actions.update_record(item)
        except DashboardError as exc:
            return SaveFailed(item=item, error=exc)
        return SaveSucceeded(item=item)

    return command


def delete_record(actions: Actions, item: Record) -> Command:
    def command():
        try:
            actions.delete_record(item)
        except DashboardError as exc:
            return DeleteFailed(item=item, error=exc)
        return DeleteSucceeded(item=item)

    return command


def run_action(actions: Actions, kind: str, params: dict) -> Command:
    """Command for a named admin action; unknown names fail as unsupported."""

    def command():
        try:
            if kind == "prune":
                output = actions.prune(
                    bool(params.get("logs")),
                    bool(params.get("jobs")),
                    int(params.get("keep", DEFAULT_PRUNE_KEEP)),
                )
            elif kind == "init_encryption":
                output = actions.init_encryption()
            elif kind == "truncate_queue":
                output = actions.truncate_queue()
            else:
                raise UnsupportedItemKindError(kind, "action")
        except DashboardError as exc:
            return ActionFinished(kind=kind, error=exc)
        return ActionFinished(kind=kind, output=output)

    return command
