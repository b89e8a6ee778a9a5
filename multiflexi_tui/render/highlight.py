"""Raw JSON rendering of records with Pygments highlighting.

Pygments is imported on first use so startup does not pay for lexer loading.
"""

from __future__ import annotations

import json
import re
from dataclasses import fields

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, object] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def record_payload(item: object) -> dict[str, object]:
    """Dataclass record as a dict keyed by its CLI JSON field names."""
    return {field.metadata.get("json_key", field.name): getattr(item, field.name) for field in fields(item)}


def record_json(item: object) -> str:
    return json.dumps(record_payload(item), indent=2, ensure_ascii=False)


def sanitize_terminal_text(text: str) -> str:
    """Escape control bytes so record values cannot move the cursor or ring the bell."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


def _normalize_style(style: str) -> str:
    from pygments.styles import get_style_by_name
    from pygments.util import ClassNotFound

    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str):
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        from pygments.formatters import TerminalFormatter

        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def highlight_json(text: str, *, style: str = DEFAULT_STYLE, no_color: bool = False) -> list[str]:
    """Return ``text`` split into lines, colorized as JSON unless ``no_color``."""
    text = sanitize_terminal_text(text)
    if no_color:
        return text.splitlines()

    from pygments import highlight
    from pygments.lexers import JsonLexer

    rendered = highlight(text, JsonLexer(), _formatter_for_style(_normalize_style(style)))
    return rendered.rstrip("\n").splitlines()
