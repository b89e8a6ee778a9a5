"""ANSI-aware text measurement and line shaping utilities.

Clipping and padding preserve escape sequences so styled cells stay aligned
when color codes and wide characters are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_ESCAPE_SPLIT_RE = re.compile(f"({ANSI_ESCAPE_RE.pattern})")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Visible column count of ``text`` ignoring escape sequences."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are kept, including ones after the cut, so a trailing
    reset still applies. Tabs become spaces.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    clipped = False
    for part in _ESCAPE_SPLIT_RE.split(text):
        if not part:
            continue
        if ANSI_ESCAPE_RE.fullmatch(part):
            out.append(part)
            continue
        if clipped:
            continue
        for ch in part:
            w = char_display_width(ch, col)
            if col + w > max_cols:
                clipped = True
                break
            out.append(" " * w if ch == "\t" else ch)
            col += w
    return "".join(out)


def fit_cell(text: str, width: int) -> str:
    """Clip or right-pad plain ``text`` to exactly ``width`` columns.

    Text that does not fit is shortened with a trailing ``…``.
    """
    if width <= 0:
        return ""
    clean = " ".join(str(text).split())
    if display_width(clean) > width:
        clean = clip_ansi_line(clean, max(0, width - 1)) + "…"
    return clean + " " * max(0, width - display_width(clean))


def pad_ansi_line(text: str, width: int) -> str:
    """Clip a styled line to ``width`` and pad it with spaces to full width."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))
