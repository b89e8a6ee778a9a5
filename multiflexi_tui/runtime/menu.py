"""Horizontal command menu: entries, scroll offset, and click hit-testing.

The bar is laid out as ``TITLE`` followed by two spaces and then each
visible entry rendered as `` label `` with one space between entries.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import display_width
from ..state import ViewId

MENU_TITLE = "MultiFlexi TUI"
TITLE_GAP = 2
ITEM_GAP = 1
DEFAULT_HINT = "Navigation: ←/→ to move, Enter to select"


@dataclass(frozen=True)
class MenuItem:
    label: str
    hint: str
    view: ViewId | None = None
    entity: str | None = None
    quits: bool = False

    @property
    def cell_width(self) -> int:
        return display_width(self.label) + 2


MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem("Status", "View system dashboard with status information", view=ViewId.HOME),
    MenuItem(
        "RunTemplates",
        "View and manage run templates with pagination controls",
        view=ViewId.RUN_TEMPLATES,
        entity="runtemplate",
    ),
    MenuItem("Jobs", "View and manage running jobs with pagination controls", view=ViewId.JOBS, entity="job"),
    MenuItem(
        "Applications",
        "Browse available MultiFlexi applications and their status",
        view=ViewId.APPLICATIONS,
        entity="application",
    ),
    MenuItem(
        "Companies",
        "View registered companies and their configuration",
        view=ViewId.COMPANIES,
        entity="company",
    ),
    MenuItem("Credentials", "Browse stored credentials", view=ViewId.CREDENTIALS, entity="credential"),
    MenuItem("Tokens", "Browse API tokens", view=ViewId.TOKENS, entity="token"),
    MenuItem("Users", "Browse MultiFlexi users", view=ViewId.USERS, entity="user"),
    MenuItem("Artifacts", "Browse job artifacts", view=ViewId.ARTIFACTS, entity="artifact"),
    MenuItem("CredTypes", "Browse credential types", view=ViewId.CRED_TYPES, entity="credtype"),
    MenuItem(
        "CompanyApps",
        "Browse applications assigned to companies",
        view=ViewId.COMPANY_APPS,
        entity="companyapp",
    ),
    MenuItem(
        "CrPrototypes",
        "Browse credential prototypes",
        view=ViewId.CR_PROTOTYPES,
        entity="crprototype",
    ),
    MenuItem("Encryption", "Initialize encryption keys", view=ViewId.ENCRYPTION),
    MenuItem("Queue", "Inspect and truncate the job queue", view=ViewId.QUEUE, entity="queue"),
    MenuItem("Prune", "Remove old logs and jobs", view=ViewId.PRUNE),
    MenuItem("Commands", "Browse available MultiFlexi commands and their documentation", view=ViewId.MENU),
    MenuItem("Help", "View help and documentation for using this interface", view=ViewId.HELP),
    MenuItem("Quit", "Exit the MultiFlexi TUI application", quits=True),
)

COMMANDS_INDEX = next(idx for idx, item in enumerate(MENU_ITEMS) if item.view == ViewId.MENU)


def items_start_col(title: str = MENU_TITLE) -> int:
    """0-based column where the first visible entry begins."""
    return display_width(title) + TITLE_GAP


def hint_for(cursor: int, items: tuple[MenuItem, ...] = MENU_ITEMS) -> str:
    if 0 <= cursor < len(items):
        return items[cursor].hint
    return DEFAULT_HINT


def clamp_cursor(cursor: int, items: tuple[MenuItem, ...] = MENU_ITEMS) -> int:
    return max(0, min(len(items) - 1, cursor))


def compute_offset(
    cursor: int,
    offset: int,
    width: int,
    items: tuple[MenuItem, ...] = MENU_ITEMS,
    title: str = MENU_TITLE,
) -> int:
    """Return a scroll offset that keeps ``cursor`` inside the visible bar.

    The result satisfies ``0 <= offset <= cursor`` and never exceeds
    ``len(items)``.
    """
    if not items:
        return 0
    cursor = clamp_cursor(cursor, items)
    offset = max(0, min(offset, cursor, len(items)))
    available = max(0, width - items_start_col(title))

    def span(start: int) -> int:
        cells = [items[idx].cell_width for idx in range(start, cursor + 1)]
        return sum(cells) + ITEM_GAP * (len(cells) - 1)

    while offset < cursor and span(offset) > available:
        offset += 1
    return offset


def hit_test(col: int, offset: int, items: tuple[MenuItem, ...] = MENU_ITEMS, title: str = MENU_TITLE) -> int | None:
    """Map a 1-based mouse column on the bar row to a menu index."""
    x = col - 1
    start = items_start_col(title)
    if x < start:
        return None
    for idx in range(max(0, offset), len(items)):
        width = items[idx].cell_width
        if start <= x < start + width:
            return idx
        start += width + ITEM_GAP
    return None


def visible_items(
    offset: int,
    width: int,
    items: tuple[MenuItem, ...] = MENU_ITEMS,
    title: str = MENU_TITLE,
) -> list[tuple[int, MenuItem]]:
    """Entries from ``offset`` that fit entirely within ``width`` columns."""
    out: list[tuple[int, MenuItem]] = []
    x = items_start_col(title)
    for idx in range(max(0, offset), len(items)):
        item = items[idx]
        if x + item.cell_width > width:
            break
        out.append((idx, item))
        x += item.cell_width + ITEM_GAP
    return out
