"""Background command runner tests."""

from __future__ import annotations

import time
import unittest

from multiflexi_tui.runtime.commands import CommandRunner
from multiflexi_tui.runtime.messages import CommandFailed


def _wait_for_results(runner: CommandRunner, count: int, timeout: float = 2.0) -> list[object]:
    deadline = time.monotonic() + timeout
    results: list[object] = []
    while time.monotonic() < deadline:
        results.extend(runner.drain_results())
        if len(results) >= count:
            return results
        time.sleep(0.01)
    return results


class CommandRunnerTests(unittest.TestCase):
    def test_each_command_produces_one_message(self) -> None:
        runner = CommandRunner()

        runner.submit(lambda: "first")
        runner.submit(lambda: "second")

        self.assertCountEqual(_wait_for_results(runner, 2), ["first", "second"])

    def test_raising_command_becomes_command_failed(self) -> None:
        runner = CommandRunner()

        def explode():
            raise RuntimeError("boom")

        runner.submit(explode)
        (message,) = _wait_for_results(runner, 1)

        self.assertIsInstance(message, CommandFailed)
        self.assertEqual(str(message.error), "boom")
