"""Application state value threaded through the controller.

``AppState`` is immutable; every controller step builds a new one with
``dataclasses.replace``.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from .data.records import Record, StatusInfo


class ViewId(enum.Enum):
    HOME = "home"
    RUN_TEMPLATES = "runtemplates"
    JOBS = "jobs"
    APPLICATIONS = "applications"
    COMPANIES = "companies"
    CREDENTIALS = "credentials"
    TOKENS = "tokens"
    USERS = "users"
    ARTIFACTS = "artifacts"
    CRED_TYPES = "credtypes"
    COMPANY_APPS = "companyapps"
    CR_PROTOTYPES = "crprototypes"
    QUEUE = "queue"
    ENCRYPTION = "encryption"
    PRUNE = "prune"
    MENU = "menu"
    HELP = "help"
    DETAIL = "detail"
    JOB_EDITOR = "job_editor"
    APPLICATION_EDITOR = "application_editor"
    COMPANY_EDITOR = "company_editor"
    RUN_TEMPLATE_EDITOR = "runtemplate_editor"
    SCHEDULER = "scheduler"
    CONFIRM_DELETE = "confirm_delete"


class Focus(enum.Enum):
    MENU = "menu"
    CONTENT = "content"


LISTING_VIEWS = frozenset(
    {
        ViewId.RUN_TEMPLATES,
        ViewId.JOBS,
        ViewId.APPLICATIONS,
        ViewId.COMPANIES,
        ViewId.CREDENTIALS,
        ViewId.TOKENS,
        ViewId.USERS,
        ViewId.ARTIFACTS,
        ViewId.CRED_TYPES,
        ViewId.COMPANY_APPS,
        ViewId.CR_PROTOTYPES,
        ViewId.QUEUE,
    }
)

EDITOR_VIEWS = frozenset(
    {
        ViewId.JOB_EDITOR,
        ViewId.APPLICATION_EDITOR,
        ViewId.COMPANY_EDITOR,
        ViewId.RUN_TEMPLATE_EDITOR,
        ViewId.SCHEDULER,
    }
)

MODAL_VIEWS = EDITOR_VIEWS | {ViewId.DETAIL, ViewId.CONFIRM_DELETE}


def is_listing(view: ViewId) -> bool:
    return view in LISTING_VIEWS


def is_modal(view: ViewId) -> bool:
    return view in MODAL_VIEWS


@dataclass(frozen=True)
class PendingDelete:
    """Record awaiting delete confirmation."""

    label: str
    identity: int
    item: Record

    @property
    def kind(self) -> str:
        return type(self.item).__name__


@dataclass(frozen=True)
class AppState:
    view: ViewId = ViewId.HOME
    previous: ViewId = ViewId.HOME
    focus: Focus = Focus.MENU
    views: Mapping[ViewId, object] = field(default_factory=dict)
    menu_cursor: int = 0
    menu_offset: int = 0
    status_message: str = ""
    system_status: StatusInfo | None = None
    pending_delete: PendingDelete | None = None
    width: int = 80
    height: int = 24
    refresh_generation: int = 0

    @property
    def current_view(self) -> object | None:
        return self.views.get(self.view)

    def with_view_model(self, view_id: ViewId, model: object) -> AppState:
        """Return a copy whose ``views`` maps ``view_id`` to ``model``."""
        views = dict(self.views)
        views[view_id] = model
        return replace(self, views=views)
