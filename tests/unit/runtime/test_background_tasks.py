"""Background task builders: every outcome resolves to one message."""

from __future__ import annotations

import unittest
from unittest import mock

from multiflexi_tui.data.errors import ActionError, RemoteExecutionError
from multiflexi_tui.data.records import Job, StatusInfo
from multiflexi_tui.runtime import tasks
from multiflexi_tui.runtime.messages import (
    ActionFinished,
    CommandsFailed,
    HelpFailed,
    HelpLoaded,
    SaveFailed,
    StatusLoaded,
)


class TaskTests(unittest.TestCase):
    def test_status_failure_yields_placeholder(self) -> None:
        source = mock.Mock()
        source.status.side_effect = RemoteExecutionError("multiflexi-cli status: timed out after 10s", reason="timeout")

        message = tasks.load_status(source)()

        self.assertIsInstance(message, StatusLoaded)
        self.assertEqual(message.status.version, "Error")
        self.assertEqual(message.status.user, "multiflexi-cli statu")

    def test_status_success(self) -> None:
        source = mock.Mock()
        source.status.return_value = StatusInfo(version="2.0")

        self.assertEqual(tasks.load_status(source)(), StatusLoaded(status=StatusInfo(version="2.0")))

    def test_commands_failure(self) -> None:
        source = mock.Mock()
        source.commands.side_effect = RemoteExecutionError("boom", reason="exit_status")

        self.assertIsInstance(tasks.load_commands(source)(), CommandsFailed)

    def test_help_messages_carry_command_name(self) -> None:
        source = mock.Mock()
        source.command_help.return_value = "Usage"
        self.assertEqual(tasks.load_help(source, "job")(), HelpLoaded(command="job", text="Usage"))

        source.command_help.side_effect = RemoteExecutionError("boom", reason="exit_status")
        failed = tasks.load_help(source, "job")()
        self.assertIsInstance(failed, HelpFailed)
        self.assertEqual(failed.command, "job")

    def test_save_failure_message(self) -> None:
        actions = mock.Mock()
        error = ActionError("update failed")
        actions.update_record.side_effect = error

        message = tasks.save_record(actions, Job(id=1))()

        self.assertEqual(message, SaveFailed(item=Job(id=1), error=error))

    def test_run_action_dispatches_by_kind(self) -> None:
        actions = mock.Mock()
        actions.prune.return_value = "pruned"

        message = tasks.run_action(actions, "prune", {"logs": True, "jobs": False, "keep": 5})()

        actions.prune.assert_called_once_with(True, False, 5)
        self.assertEqual(message, ActionFinished(kind="prune", output="pruned"))

    def test_unknown_action_fails_as_unsupported(self) -> None:
        message = tasks.run_action(mock.Mock(), "reboot", {})()

        self.assertEqual(message.kind, "reboot")
        self.assertIn("unsupported item kind for action: reboot", str(message.error))
