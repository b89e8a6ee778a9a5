"""Raw-key decoding tests.

Covers ESC timing, navigation and function key sequences, SGR mouse events,
and CR/LF folding.
"""

from __future__ import annotations

import os
import time
import unittest

from multiflexi_tui import input as input_mod


def _decode(data: bytes, count: int = 1) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, data)
        return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = _decode(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(_decode(b"\x1bq", count=2), ["ESC", "q"])

    def test_arrow_keys(self) -> None:
        self.assertEqual(_decode(b"\x1b[A\x1b[B\x1b[C\x1b[D", count=4), ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_function_and_paging_keys(self) -> None:
        self.assertEqual(
            _decode(b"\x1b[21~\x1b[5~\x1b[6~\x1b[Z", count=4),
            ["F10", "PAGE_UP", "PAGE_DOWN", "SHIFT_TAB"],
        )

    def test_home_and_end_variants(self) -> None:
        self.assertEqual(
            _decode(b"\x1b[H\x1b[F\x1bOH\x1b[1~\x1b[4~", count=5),
            ["HOME", "END", "HOME", "HOME", "END"],
        )

    def test_control_keys(self) -> None:
        self.assertEqual(
            _decode(b"\x03\t\x7f\x15\r\n", count=6),
            ["CTRL_C", "TAB", "BACKSPACE", "CTRL_U", "ENTER_CR", "ENTER_LF"],
        )

    def test_utf8_character_is_read_whole(self) -> None:
        self.assertEqual(_decode("č".encode("utf-8")), ["č"])

    def test_sgr_mouse_events(self) -> None:
        self.assertEqual(
            _decode(b"\x1b[<0;12;1M\x1b[<0;12;1m\x1b[<64;5;9M\x1b[<65;5;9M", count=4),
            ["MOUSE_LEFT_DOWN:12:1", "MOUSE_LEFT_UP:12:1", "MOUSE_WHEEL_UP:5:9", "MOUSE_WHEEL_DOWN:5:9"],
        )

    def test_timeout_without_input_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            key = input_mod.read_key(read_fd, timeout_ms=10)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")


class NormalizeEnterTests(unittest.TestCase):
    def test_crlf_produces_single_enter(self) -> None:
        key, skip = input_mod.normalize_enter("ENTER_CR", False)
        self.assertEqual((key, skip), ("ENTER", True))

        key, skip = input_mod.normalize_enter("ENTER_LF", skip)
        self.assertEqual((key, skip), (None, False))

    def test_bare_lf_is_enter(self) -> None:
        self.assertEqual(input_mod.normalize_enter("ENTER_LF", False), ("ENTER", False))

    def test_other_keys_reset_skip_flag(self) -> None:
        self.assertEqual(input_mod.normalize_enter("a", True), ("a", False))
        self.assertEqual(input_mod.normalize_enter("", True), (None, True))
