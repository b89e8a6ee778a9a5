"""Fixed-width table rendering for entity listings."""

from __future__ import annotations

from collections.abc import Sequence

from ..ansi import fit_cell, pad_ansi_line
from ..listing.registry import Column
from ..ui_theme import DEFAULT_THEME, UITheme

COLUMN_GAP = " "


def window_start(cursor: int, total: int, rows: int) -> int:
    """First visible row index so ``cursor`` stays inside ``rows`` rows."""
    if rows <= 0 or total <= rows:
        return 0
    start = max(0, cursor - rows + 1)
    return min(start, total - rows)


def render_table(
    columns: Sequence[Column],
    items: Sequence[object],
    cursor: int,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Render a header row plus as many item rows as fit in ``height``."""
    if height <= 0 or width <= 0:
        return []
    header = COLUMN_GAP.join(fit_cell(column.header, column.width) for column in columns)
    lines = [f"{theme.table_header}{pad_ansi_line(header, width)}{theme.reset}"]

    rows = height - 1
    start = window_start(cursor, len(items), rows)
    for idx in range(start, min(len(items), start + rows)):
        item = items[idx]
        text = COLUMN_GAP.join(fit_cell(column.cell(item), column.width) for column in columns)
        row = pad_ansi_line(text, width)
        if idx == cursor:
            row = f"{theme.row_selected}{row}{theme.reset}"
        lines.append(row)
    return lines
