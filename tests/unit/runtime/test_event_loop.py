"""Event loop wiring tests with scripted keys and a recording renderer."""

from __future__ import annotations

import os
import unittest
from unittest import mock

from multiflexi_tui.runtime.loop import RuntimeLoopIO, apply_effects, run_main_loop
from multiflexi_tui.runtime.messages import Quit, Resize, RunCommand
from multiflexi_tui.state import AppState


class ScriptedKeys:
    def __init__(self, keys: list[str]) -> None:
        self.keys = list(keys)

    def __call__(self, fd: int, timeout_ms: int | None = None) -> str:
        if not self.keys:
            return "CTRL_C"
        return self.keys.pop(0)


class RecordingController:
    """Echoes events into a list and quits on CTRL_C."""

    def __init__(self) -> None:
        self.events: list[object] = []
        self.renders = 0

    def update(self, state, event):
        self.events.append(event)
        if event == "CTRL_C":
            return state, (Quit(),)
        if isinstance(event, Resize):
            return AppState(width=event.width, height=event.height), ()
        return state, ()

    def after_render(self, state):
        self.renders += 1
        return state


class FakeRunner:
    def __init__(self, results: list[object] | None = None) -> None:
        self.submitted = []
        self.results = list(results or [])

    def submit(self, command) -> None:
        self.submitted.append(command)

    def drain_results(self) -> list[object]:
        out, self.results = self.results, []
        return out


def _io(keys: list[str], size=(80, 24)) -> RuntimeLoopIO:
    return RuntimeLoopIO(
        read_key=ScriptedKeys(keys),
        render=mock.Mock(),
        terminal_size=lambda: os.terminal_size(size),
    )


class RunMainLoopTests(unittest.TestCase):
    def test_crlf_is_delivered_as_one_enter(self) -> None:
        controller = RecordingController()

        run_main_loop(controller, AppState(), (), stdin_fd=0, runner=FakeRunner(), io=_io(["ENTER_CR", "ENTER_LF", "x"]))

        self.assertEqual(controller.events, ["ENTER", "x", "CTRL_C"])

    def test_terminal_size_change_becomes_resize_event(self) -> None:
        controller = RecordingController()

        run_main_loop(controller, AppState(), (), stdin_fd=0, runner=FakeRunner(), io=_io([], size=(100, 40)))

        self.assertEqual(controller.events[0], Resize(width=100, height=40))

    def test_background_results_are_fed_to_controller(self) -> None:
        controller = RecordingController()
        message = object()

        run_main_loop(controller, AppState(), (), stdin_fd=0, runner=FakeRunner([message]), io=_io([]))

        self.assertIs(controller.events[0], message)

    def test_initial_quit_effect_returns_without_rendering(self) -> None:
        controller = RecordingController()
        io = _io([])

        run_main_loop(controller, AppState(), (Quit(),), stdin_fd=0, runner=FakeRunner(), io=io)

        io.render.assert_not_called()

    def test_render_only_after_events(self) -> None:
        controller = RecordingController()
        io = _io(["", "", "a"])

        run_main_loop(controller, AppState(), (), stdin_fd=0, runner=FakeRunner(), io=io)

        self.assertEqual(io.render.call_count, 2)
        self.assertEqual(len(io.render.call_args.args[0]), 24)

    def test_apply_effects_submits_commands(self) -> None:
        runner = FakeRunner()
        def command():
            return None


        self.assertFalse(apply_effects([RunCommand(command)], runner))
        self.assertTrue(apply_effects([Quit()], runner))
        self.assertEqual(runner.submitted, [command])
