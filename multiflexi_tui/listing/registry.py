"""Registry of listable entity types.

Each ``EntitySpec`` names the CLI noun, the record type it decodes into,
the table columns, and the paging/caching parameters. Adding a listing means
adding an entry here.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..data.records import (
    Application,
    Artifact,
    Company,
    CompanyApp,
    Credential,
    CredType,
    CrPrototype,
    Job,
    QueueItem,
    RunTemplate,
    Token,
    User,
)
from ..state import ViewId

DEFAULT_PAGE_SIZE = 10
DEFAULT_CACHE_TTL = 30.0


@dataclass(frozen=True)
class Column:
    header: str
    width: int
    value: Callable[[object], object]

    def cell(self, item: object) -> str:
        text = self.value(item)
        return "" if text is None else str(text)


@dataclass(frozen=True)
class EntitySpec:
    """Static description of one entity listing."""

    tag: str
    noun: str
    title: str
    record_type: type
    view: ViewId
    columns: tuple[Column, ...]
    page_size: int = DEFAULT_PAGE_SIZE
    cache_ttl: float = DEFAULT_CACHE_TTL
    refresh_interval: float = 0.0
    timeout: float | None = None
    editor: ViewId | None = None
    schedulable: bool = False
    deletable: bool = False
    listing_action: str | None = None


def _attr(name: str) -> Callable[[object], object]:
    return lambda item: getattr(item, name)


def _active(item: RunTemplate) -> str:
    return "active" if item.active else "inactive"


def _enabled(item: Application | Company) -> str:
    return "enabled" if item.enabled else "disabled"


def _full_name(item: User) -> str:
    return f"{item.firstname} {item.lastname}".strip()


ENTITIES: dict[str, EntitySpec] = {}


def register(spec: EntitySpec) -> EntitySpec:
    ENTITIES[spec.tag] = spec
    return spec


register(
    EntitySpec(
        tag="runtemplate",
        noun="runtemplate",
        title="Run Templates",
        record_type=RunTemplate,
        view=ViewId.RUN_TEMPLATES,
        columns=(
            Column("ID", 5, _attr("id")),
            Column("Name", 25, _attr("name")),
            Column("App ID", 8, _attr("app_id")),
            Column("Company", 8, _attr("company_id")),
            Column("Status", 9, _active),
            Column("Interval", 9, _attr("interv")),
            Column("Executor", 15, _attr("executor")),
        ),
        editor=ViewId.RUN_TEMPLATE_EDITOR,
        schedulable=True,
        deletable=True,
    )
)
register(
    EntitySpec(
        tag="job",
        noun="job",
        title="Jobs",
        record_type=Job,
        view=ViewId.JOBS,
        columns=(
            Column("ID", 8, _attr("id")),
            Column("Command", 25, _attr("command")),
            Column("Status", 10, lambda item: item.status),
            Column("Schedule", 20, _attr("schedule")),
            Column("Executor", 12, _attr("executor")),
        ),
        cache_ttl=15.0,
        refresh_interval=30.0,
        timeout=15.0,
        editor=ViewId.JOB_EDITOR,
        deletable=True,
    )
)
register(
    EntitySpec(
        tag="application",
        noun="application",
        title="Applications",
        record_type=Application,
        view=ViewId.APPLICATIONS,
        columns=(
            Column("ID", 6, _attr("id")),
            Column("Name", 25, _attr("name")),
            Column("Version", 10, _attr("version")),
            Column("Status", 9, _enabled),
            Column("Executable", 20, _attr("executable")),
        ),
        cache_ttl=120.0,
        refresh_interval=300.0,
        editor=ViewId.APPLICATION_EDITOR,
        deletable=True,
    )
)
register(
    EntitySpec(
        tag="company",
        noun="company",
        title="Companies",
        record_type=Company,
        view=ViewId.COMPANIES,
        columns=(
            Column("ID", 6, _attr("id")),
            Column("Name", 30, _attr("name")),
            Column("IC", 15, _attr("ic")),
            Column("Status", 9, _enabled),
            Column("Email", 20, _attr("email")),
        ),
        cache_ttl=300.0,
        refresh_interval=600.0,
        editor=ViewId.COMPANY_EDITOR,
        deletable=True,
    )
)
register(
    EntitySpec(
        tag="credential",
        noun="credential",
        title="Credentials",
        record_type=Credential,
        view=ViewId.CREDENTIALS,
        columns=(
            Column("ID", 8, _attr("id")),
            Column("Name", 25, _attr("name")),
            Column("Company ID", 12, _attr("company_id")),
            Column("Type ID", 10, _attr("credential_type_id")),
        ),
        deletable=True,
    )
)
register(
    EntitySpec(
        tag="token",
        noun="token",
        title="Tokens",
        record_type=Token,
        view=ViewId.TOKENS,
        columns=(
            Column("ID", 8, _attr("id")),
            Column("User", 20, _attr("user")),
            Column("Token", 40, _attr("token")),
        ),
        deletable=True,
    )
)
register(
    EntitySpec(
        tag="user",
        noun="user",
        title="Users",
        record_type=User,
        view=ViewId.USERS,
        columns=(
            Column("ID", 6, _attr("id")),
            Column("Login", 15, _attr("login")),
            Column("Name", 25, _full_name),
            Column("Email", 25, _attr("email")),
        ),
    )
)
register(
    EntitySpec(
        tag="artifact",
        noun="artifact",
        title="Artifacts",
        record_type=Artifact,
        view=ViewId.ARTIFACTS,
        columns=(
            Column("ID", 8, _attr("id")),
            Column("Job ID", 8, _attr("job_id")),
            Column("Filename", 25, _attr("filename")),
            Column("Type", 15, _attr("content_type")),
            Column("Created", 20, _attr("created_at")),
        ),
    )
)
register(
    EntitySpec(
        tag="credtype",
        noun="credtype",
        title="Credential Types",
        record_type=CredType,
        view=ViewId.CRED_TYPES,
        columns=(
            Column("ID", 6, _attr("id")),
            Column("Name", 25, _attr("name")),
            Column("Class", 20, _attr("class_name")),
            Column("Company", 8, _attr("company_id")),
            Column("Version", 8, _attr("version")),
        ),
    )
)
register(
    EntitySpec(
        tag="companyapp",
        noun="companyapp",
        title="Company Applications",
        record_type=CompanyApp,
        view=ViewId.COMPANY_APPS,
        columns=(
            Column("ID", 8, _attr("id")),
            Column("Company ID", 12, _attr("company_id")),
            Column("App ID", 10, _attr("app_id")),
        ),
    )
)
register(
    EntitySpec(
        tag="crprototype",
        noun="crprototype",
        title="Credential Prototypes",
        record_type=CrPrototype,
        view=ViewId.CR_PROTOTYPES,
        columns=(
            Column("ID", 6, _attr("id")),
            Column("Name", 25, _attr("name")),
            Column("Version", 10, _attr("version")),
            Column("Description", 30, _attr("description")),
        ),
        cache_ttl=60.0,
        refresh_interval=120.0,
    )
)
register(
    EntitySpec(
        tag="queue",
        noun="queue",
        title="Job Queue",
        record_type=QueueItem,
        view=ViewId.QUEUE,
        columns=(
            Column("ID", 8, _attr("id")),
            Column("Message", 60, _attr("message")),
        ),
        listing_action="truncate_queue",
    )
)


def get_entity(tag: str) -> EntitySpec:
    try:
        return ENTITIES[tag]
    except KeyError:
        raise KeyError(f"unknown entity type: {tag!r}") from None


def entity_for_record(item: object) -> EntitySpec | None:
    for spec in ENTITIES.values():
        if type(item) is spec.record_type:
            return spec
    return None
