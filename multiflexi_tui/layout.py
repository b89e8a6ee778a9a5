"""Screen geometry shared by the controller and the frame renderer.

Rows 1-3 hold the menu bar, the hint line, and a separator. The last two
rows hold a separator and the footer/status line. Content fills the rest.
"""

from __future__ import annotations

MENU_ROW = 1
HEADER_ROWS = 3
FOOTER_ROWS = 2
MIN_CONTENT_ROWS = 1


def content_height(height: int) -> int:
    return max(MIN_CONTENT_ROWS, height - HEADER_ROWS - FOOTER_ROWS)
