"""Frame composition tests using the plain theme."""

from __future__ import annotations

import unittest
from dataclasses import replace

from multiflexi_tui.ansi import display_width
from multiflexi_tui.render.frame import MENU_FOOTER, compose_frame
from multiflexi_tui.state import AppState, Focus, ViewId
from multiflexi_tui.ui_theme import PLAIN_THEME
from multiflexi_tui.views import HomeView


class ComposeFrameTests(unittest.TestCase):
    def _state(self, **kwargs) -> AppState:
        state = AppState(width=100, height=20, **kwargs)
        return state.with_view_model(ViewId.HOME, HomeView(width=100, height=15))

    def test_frame_has_exactly_height_lines_of_full_width(self) -> None:
        lines = compose_frame(self._state(), PLAIN_THEME)

        self.assertEqual(len(lines), 20)
        for line in lines:
            self.assertLessEqual(display_width(line), 100)

    def test_menu_bar_and_hint_rows(self) -> None:
        lines = compose_frame(self._state(), PLAIN_THEME)

        self.assertTrue(lines[0].startswith("MultiFlexi TUI   Status "))
        self.assertIn("View system dashboard", lines[1])
        self.assertTrue(lines[2].startswith("─"))
        self.assertIn("MultiFlexi System Dashboard", lines[3])

    def test_footer_shows_status_message_first(self) -> None:
        state = replace(self._state(), status_message="Saved Job #1")

        self.assertEqual(compose_frame(state, PLAIN_THEME)[-1].rstrip(), "Saved Job #1")

    def test_footer_depends_on_focus(self) -> None:
        menu_footer = compose_frame(self._state(focus=Focus.MENU), PLAIN_THEME)[-1]
        content_footer = compose_frame(self._state(focus=Focus.CONTENT), PLAIN_THEME)[-1]

        self.assertEqual(menu_footer.rstrip(), MENU_FOOTER)
        self.assertEqual(content_footer.rstrip(), HomeView.footer)

    def test_tiny_terminal_is_truncated_to_height(self) -> None:
        state = replace(self._state(), height=3)

        self.assertEqual(len(compose_frame(state, PLAIN_THEME)), 3)
