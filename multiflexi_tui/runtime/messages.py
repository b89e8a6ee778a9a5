"""Intents, result messages, and effects exchanged with the controller.

Views emit intents. Background commands resolve to exactly one result
message. The controller answers with effects for the loop to perform.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..data.records import CommandInfo, Record, StatusInfo

if TYPE_CHECKING:
    from ..listing.controller import ListingState


# Intents


@dataclass(frozen=True)
class OpenDetail:
    item: Record


@dataclass(frozen=True)
class Edit:
    item: Record


@dataclass(frozen=True)
class Schedule:
    item: Record


@dataclass(frozen=True)
class Delete:
    item: Record


@dataclass(frozen=True)
class Save:
    item: Record


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class ShowMenu:
    pass


@dataclass(frozen=True)
class ShowHelp:
    command: str


@dataclass(frozen=True)
class ConfirmYes:
    pass


@dataclass(frozen=True)
class ConfirmNo:
    pass


@dataclass(frozen=True)
class SetStatus:
    text: str


@dataclass(frozen=True)
class RunAction:
    """Admin action by name: ``prune``, ``init_encryption`` or ``truncate_queue``."""

    kind: str
    params: Mapping[str, object] = field(default_factory=dict)


Intent = (
    OpenDetail
    | Edit
    | Schedule
    | Delete
    | Save
    | Back
    | ShowMenu
    | ShowHelp
    | ConfirmYes
    | ConfirmNo
    | SetStatus
    | RunAction
)


# Result messages


@dataclass(frozen=True)
class DataLoaded:
    entity: str
    data: list
    state: ListingState


@dataclass(frozen=True)
class DataError:
    entity: str
    error: Exception


@dataclass(frozen=True)
class BatchDataLoaded:
    results: Mapping[str, DataLoaded | DataError]


@dataclass(frozen=True)
class RefreshTick:
    entity: str
    generation: int


@dataclass(frozen=True)
class StatusLoaded:
    status: StatusInfo


@dataclass(frozen=True)
class CommandsLoaded:
    commands: tuple[CommandInfo, ...]


@dataclass(frozen=True)
class CommandsFailed:
    error: Exception


@dataclass(frozen=True)
class HelpLoaded:
    command: str
    text: str


@dataclass(frozen=True)
class HelpFailed:
    command: str
    error: Exception


@dataclass(frozen=True)
class SaveSucceeded:
    item: Record


@dataclass(frozen=True)
class SaveFailed:
    item: Record
    error: Exception


@dataclass(frozen=True)
class DeleteSucceeded:
    item: Record


@dataclass(frozen=True)
class DeleteFailed:
    item: Record
    error: Exception


@dataclass(frozen=True)
class ActionFinished:
    kind: str
    output: str = ""
    error: Exception | None = None


@dataclass(frozen=True)
class CommandFailed:
    """A background command raised instead of producing its message."""

    error: Exception


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


# Effects


Command = Callable[[], object]


@dataclass(frozen=True)
class RunCommand:
    command: Command


@dataclass(frozen=True)
class Quit:
    pass


Effect = RunCommand | Quit
