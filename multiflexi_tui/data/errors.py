"""Error taxonomy for the data-access and action layers.

Every failure of the external CLI is representable as one of these types.
The UI never sees raw ``subprocess`` or ``json`` exceptions.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for all recoverable dashboard errors."""


class RemoteExecutionError(DashboardError):
    """External process could not run, exited non-zero, or timed out.

    ``reason`` is one of ``"not_found"``, ``"exit_status"`` or ``"timeout"``.
    """

    def __init__(self, message: str, *, reason: str, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.reason = reason
        self.returncode = returncode
        self.stderr = stderr

    @property
    def timed_out(self) -> bool:
        return self.reason == "timeout"


class DecodeError(DashboardError):
    """Process exited cleanly but its output did not have the expected shape."""


class ActionError(DashboardError):
    """An update/delete/prune/init/truncate action failed."""


class UnsupportedItemKindError(DashboardError):
    """An intent carried a record kind that has no registered handler."""

    def __init__(self, kind: str, action: str) -> None:
        super().__init__(f"unsupported item kind for {action}: {kind}")
        self.kind = kind
        self.action = action
