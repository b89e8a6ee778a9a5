"""Raw-mode lifecycle of the dashboard terminal session."""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from multiflexi_tui.runtime.terminal import ENTER_TUI, LEAVE_TUI, TerminalController

MODULE = "multiflexi_tui.runtime.terminal"


class TerminalSessionTests(unittest.TestCase):
    def test_session_switches_screen_and_restores_saved_attributes(self) -> None:
        saved = [4, 5, 6]
        with mock.patch(f"{MODULE}.termios.tcgetattr", return_value=saved), mock.patch(
            f"{MODULE}.tty.setraw"
        ) as setraw, mock.patch(f"{MODULE}.os.write") as write, mock.patch(
            f"{MODULE}.termios.tcsetattr"
        ) as tcsetattr:
            terminal = TerminalController(stdin_fd=0, stdout_fd=1)
            with terminal.raw_mode():
                setraw.assert_called_once_with(0, termios.TCSAFLUSH)
                tcsetattr.assert_not_called()

        self.assertEqual([call.args for call in write.call_args_list], [(1, ENTER_TUI), (1, LEAVE_TUI)])
        tcsetattr.assert_called_once_with(0, termios.TCSAFLUSH, saved)

    def test_mouse_reporting_uses_sgr_encoding(self) -> None:
        self.assertIn(b"\x1b[?1006h", ENTER_TUI)
        self.assertIn(b"\x1b[?1006l", LEAVE_TUI)

    def test_raw_mode_restores_after_exception(self) -> None:
        with mock.patch(f"{MODULE}.termios.tcgetattr", return_value=[0]):
            terminal = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(terminal, "enable_tui_mode") as enable, mock.patch.object(
            terminal, "disable_tui_mode"
        ) as disable:
            with self.assertRaises(RuntimeError):
                with terminal.raw_mode():
                    raise RuntimeError("boom")

        enable.assert_called_once()
        disable.assert_called_once()


if __name__ == "__main__":
    unittest.main()
