"""Rendering helpers: frame composition, tables, and raw record highlighting."""

from __future__ import annotations

from .frame import compose_frame, content_height, render_frame
from .highlight import highlight_json, record_json
from .table import render_table

__all__ = [
    "compose_frame",
    "content_height",
    "highlight_json",
    "record_json",
    "render_frame",
    "render_table",
]
