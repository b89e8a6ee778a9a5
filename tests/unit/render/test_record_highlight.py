"""Raw record rendering, terminal sanitization, and table layout."""

from __future__ import annotations

import unittest

from multiflexi_tui.ansi import clip_ansi_line, display_width, fit_cell, pad_ansi_line, strip_ansi
from multiflexi_tui.data.records import CredType, Job
from multiflexi_tui.listing.registry import get_entity
from multiflexi_tui.render.highlight import highlight_json, record_json, record_payload, sanitize_terminal_text
from multiflexi_tui.render.table import render_table, window_start
from multiflexi_tui.ui_theme import PLAIN_THEME


class HighlightTests(unittest.TestCase):
    def test_payload_uses_cli_field_names(self) -> None:
        payload = record_payload(CredType(id=1, class_name="Office365"))

        self.assertEqual(payload["class"], "Office365")
        self.assertNotIn("class_name", payload)

    def test_control_characters_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x1b[2Jb\x07"), "a\\x1b[2Jb\\x07")
        self.assertEqual(sanitize_terminal_text("plain\ttext"), "plain\ttext")

    def test_colorized_json_keeps_text(self) -> None:
        text = record_json(Job(id=3, command="sync"))

        lines = highlight_json(text, style="no-such-style")

        self.assertEqual([strip_ansi(line) for line in lines], text.splitlines())

    def test_no_color_returns_plain_lines(self) -> None:
        text = record_json(Job(id=3))

        self.assertEqual(highlight_json(text, no_color=True), text.splitlines())


class TableTests(unittest.TestCase):
    def test_fit_cell_clips_with_ellipsis(self) -> None:
        self.assertEqual(fit_cell("abcdefgh", 5), "abcd…")
        self.assertEqual(fit_cell("ab", 4), "ab  ")

    def test_clip_keeps_escapes_after_the_cut(self) -> None:
        styled = "\x1b[1mheading\x1b[0m"

        self.assertEqual(clip_ansi_line(styled, 4), "\x1b[1mhead\x1b[0m")
        self.assertEqual(pad_ansi_line("\tx", 10), " " * 8 + "x ")
        self.assertEqual(display_width("\u4e2d\u6587"), 4)

    def test_window_keeps_cursor_visible(self) -> None:
        self.assertEqual(window_start(0, 20, 5), 0)
        self.assertEqual(window_start(12, 20, 5), 8)
        self.assertEqual(window_start(19, 20, 5), 15)

    def test_rows_are_clipped_to_width(self) -> None:
        jobs = [Job(id=idx, command="x" * 50) for idx in range(3)]

        lines = render_table(get_entity("job").columns, jobs, 1, 40, 10, PLAIN_THEME)

        self.assertEqual(len(lines), 4)
        self.assertTrue(all(display_width(line) == 40 for line in lines))
        self.assertTrue(lines[0].startswith("ID"))
