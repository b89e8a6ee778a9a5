"""Mutating operations against ``multiflexi-cli``.

Each action either returns normally or raises ``ActionError`` wrapping the
underlying adapter failure. A successful action clears the fetch cache so the
next listing load sees fresh data.
"""

from __future__ import annotations

from ..log import get_logger
from .adapter import CliDataSource
from .cache import FetchCache
from .errors import ActionError, DashboardError, UnsupportedItemKindError
from .records import (
    Application,
    Artifact,
    Company,
    CompanyApp,
    Credential,
    CredType,
    CrPrototype,
    Job,
    QueueItem,
    Record,
    RunTemplate,
    Token,
    User,
    record_label,
)

DEFAULT_PRUNE_KEEP = 1000

logger = get_logger(__name__)

NOUNS: dict[type, str] = {
    Application: "application",
    Artifact: "artifact",
    Company: "company",
    CompanyApp: "companyapp",
    Credential: "credential",
    CredType: "credtype",
    CrPrototype: "crprototype",
    Job: "job",
    QueueItem: "queue",
    RunTemplate: "runtemplate",
    Token: "token",
    User: "user",
}

UPDATE_FIELDS: dict[type, tuple[str, ...]] = {
    Application: ("name",),
    Company: ("name", "email", "ic", "slug"),
    Job: ("command", "executor", "schedule_type"),
    RunTemplate: ("name", "interv"),
}


def update_args(item: Record) -> list[str]:
    """CLI arguments that persist the editable fields of ``item``."""
    kind = type(item)
    if kind not in UPDATE_FIELDS:
        raise UnsupportedItemKindError(kind.__name__, "update")
    args = [NOUNS[kind], "update", f"--id={item.id}"]
    for name in UPDATE_FIELDS[kind]:
        args.append(f"--{name}={getattr(item, name)}")
    return args


def delete_args(item: Record) -> list[str]:
    kind = type(item)
    if kind not in NOUNS:
        raise UnsupportedItemKindError(kind.__name__, "delete")
    return [NOUNS[kind], "remove", f"--id={item.id}"]


def prune_args(logs: bool, jobs: bool, keep: int) -> list[str]:
    args = ["prune"]
    if logs:
        args.append("--logs")
    if jobs:
        args.append("--jobs")
    args.extend(["--keep", str(keep)])
    return args


class Actions:
    """Fallible admin operations sharing one data source and cache."""

    def __init__(self, source: CliDataSource, cache: FetchCache | None = None) -> None:
        self.source = source
        self.cache = cache

    def _run(self, args: list[str], description: str) -> str:
        try:
            output = self.source.run_text(args)
        except DashboardError as exc:
            logger.info("%s failed: %s", description, exc)
            raise ActionError(f"{description} failed: {exc}") from exc
        if self.cache is not None:
            self.cache.clear()
        logger.info("%s succeeded", description)
        return output

    def update_record(self, item: Record) -> None:
        self._run(update_args(item), f"update {record_label(item)}")

    def delete_record(self, item: Record) -> None:
        self._run(delete_args(item), f"delete {record_label(item)}")

    def prune(self, logs: bool, jobs: bool, keep: int = DEFAULT_PRUNE_KEEP) -> str:
        """Remove old log and/or job rows, keeping the newest ``keep``."""
        if not logs and not jobs:
            raise ActionError("prune: select logs, jobs, or both")
        if keep < 0:
            raise ActionError(f"prune: keep must be >= 0, got {keep}")
        return self._run(prune_args(logs, jobs, keep), "prune").strip()

    def init_encryption(self) -> str:
        return self._run(["encryption", "init"], "encryption init").strip()

    def truncate_queue(self) -> str:
        return self._run(["queue", "truncate"], "queue truncate").strip()
