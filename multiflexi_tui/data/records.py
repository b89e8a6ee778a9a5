"""Typed record definitions for entities listed by ``multiflexi-cli``.

Records are plain mutable dataclasses. A field whose JSON key differs from the
attribute name declares it with ``json_key`` metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def json_field(key: str, default: object = None):
    """Declare a dataclass field decoded from JSON key ``key``."""
    return field(default=default, metadata={"json_key": key})


@dataclass
class Application:
    id: int = 0
    enabled: int = 0
    name: str = ""
    description: str = ""
    executable: str = ""
    version: str = ""
    code: str = ""
    topics: str = ""


@dataclass
class Company:
    id: int = 0
    enabled: int = 0
    name: str = ""
    ic: str = ""
    email: str = ""
    slug: str = ""


@dataclass
class RunTemplate:
    id: int = 0
    app_id: int = 0
    company_id: int = 0
    name: str = ""
    interv: str = ""
    active: int = 0
    executor: str = ""
    cron: str = ""
    last_schedule: str = ""
    next_schedule: str = ""


@dataclass
class Job:
    id: int = 0
    app_id: int = json_field("app", 0)
    command: str = ""
    begin: str = ""
    end: str = ""
    exitcode: int = 0
    executor: str = ""
    pid: int = 0
    schedule: str = ""
    schedule_type: str = ""

    @property
    def status(self) -> str:
        if self.pid != 0:
            return "Running"
        if self.exitcode == -1:
            return "Scheduled"
        return "Success" if self.exitcode == 0 else "Failed"


@dataclass
class Credential:
    id: int = 0
    name: str = ""
    company_id: int = 0
    credential_type_id: int = 0


@dataclass
class Token:
    id: int = 0
    user: str = ""
    token: str = ""


@dataclass
class User:
    id: int = 0
    login: str = ""
    firstname: str = ""
    lastname: str = ""
    email: str = ""


@dataclass
class Artifact:
    id: int = 0
    job_id: int = 0
    filename: str = ""
    content_type: str = ""
    artifact: str = ""
    created_at: str = ""
    note: str = ""


@dataclass
class CredType:
    id: int = 0
    uuid: str = ""
    name: str = ""
    class_name: str = json_field("class", "")
    company_id: int = 0
    url: str = ""
    version: int = 0


@dataclass
class CompanyApp:
    id: int = 0
    company_id: int = 0
    app_id: int = 0


@dataclass
class CrPrototype:
    id: int = 0
    name: str = ""
    description: str = ""
    version: str = ""


@dataclass
class QueueItem:
    id: int = 0
    message: str = ""


@dataclass
class StatusInfo:
    version: str = json_field("version-cli", "")
    user: str = ""
    php: str = ""
    os: str = ""
    companies: int = 0
    apps: int = 0
    templates: int = json_field("runtemplates", 0)
    executor: str = ""
    scheduler: str = ""
    zabbix: str = ""
    telemetry: str = ""
    encryption: str = ""
    database: str = ""


@dataclass
class CommandInfo:
    name: str = ""
    description: str = ""


Record = (
    Application
    | Company
    | RunTemplate
    | Job
    | Credential
    | Token
    | User
    | Artifact
    | CredType
    | CompanyApp
    | CrPrototype
    | QueueItem
)


def record_label(item: Record) -> str:
    """Short human label used in confirmations and status lines."""
    kind = type(item).__name__
    name = getattr(item, "name", "") or getattr(item, "login", "") or getattr(item, "command", "")
    if name:
        return f"{kind} #{item.id} ({name})"
    return f"{kind} #{item.id}"
