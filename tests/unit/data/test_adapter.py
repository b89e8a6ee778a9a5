"""Data Source Adapter tests.

Covers argument construction, process failure mapping, and decoding of the
status and command catalogue payloads.
"""

from __future__ import annotations

import json
import subprocess
import time
import unittest
from unittest import mock

from multiflexi_tui.data.adapter import CliDataSource, FetchRequest
from multiflexi_tui.data.errors import DecodeError, RemoteExecutionError
from multiflexi_tui.data.records import Job


def _completed(stdout: str = "", returncode: int = 0, stderr: str = ""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class FetchRequestTests(unittest.TestCase):
    def test_args_include_offset_only_when_positive(self) -> None:
        first = FetchRequest(command="job", limit=10)
        second = FetchRequest(command="job", limit=10, offset=20)

        self.assertEqual(first.args(), ["job", "list", "--format=json", "--order=D", "--limit=10"])
        self.assertEqual(second.args()[-1], "--offset=20")

    def test_signature_distinguishes_offsets(self) -> None:
        first = FetchRequest(command="job", limit=10)
        second = FetchRequest(command="job", limit=10, offset=10)

        self.assertNotEqual(first.signature(), second.signature())
        self.assertEqual(first.signature(), FetchRequest(command="job", limit=10).signature())


class CliDataSourceTests(unittest.TestCase):
    def test_run_text_prefixes_executable_and_passes_timeout(self) -> None:
        run = mock.Mock(return_value=_completed("ok\n"))
        source = CliDataSource("/opt/mf/multiflexi-cli", default_timeout=7.0, run=run)

        self.assertEqual(source.run_text(["status"]), "ok\n")
        argv = run.call_args.args[0]
        self.assertEqual(argv, ["/opt/mf/multiflexi-cli", "status"])
        self.assertEqual(run.call_args.kwargs["timeout"], 7.0)

    def test_nonzero_exit_maps_to_exit_status_error_with_stderr(self) -> None:
        run = mock.Mock(return_value=_completed(returncode=3, stderr="boom\n"))
        source = CliDataSource(run=run)

        with self.assertRaises(RemoteExecutionError) as ctx:
            source.run_text(["job", "list"])

        self.assertEqual(ctx.exception.reason, "exit_status")
        self.assertEqual(ctx.exception.returncode, 3)
        self.assertEqual(ctx.exception.stderr, "boom")
        self.assertIn("exit status 3", str(ctx.exception))

    def test_missing_executable_maps_to_not_found(self) -> None:
        run = mock.Mock(side_effect=FileNotFoundError(2, "No such file or directory"))
        source = CliDataSource("missing-cli", run=run)

        with self.assertRaises(RemoteExecutionError) as ctx:
            source.run_text(["status"])

        self.assertEqual(ctx.exception.reason, "not_found")
        self.assertFalse(ctx.exception.timed_out)

    def test_timeout_expired_maps_to_timeout_error(self) -> None:
        run = mock.Mock(side_effect=subprocess.TimeoutExpired(cmd="multiflexi-cli", timeout=0.5))
        source = CliDataSource(run=run)

        with self.assertRaises(RemoteExecutionError) as ctx:
            source.run_text(["job", "list"], timeout=0.5)

        self.assertTrue(ctx.exception.timed_out)

    def test_slow_process_is_abandoned_at_deadline(self) -> None:
        source = CliDataSource("sleep")

        started = time.monotonic()
        with self.assertRaises(RemoteExecutionError) as ctx:
            source.run_text(["5"], timeout=0.2)
        elapsed = time.monotonic() - started

        self.assertTrue(ctx.exception.timed_out)
        self.assertLess(elapsed, 3.0)

    def test_fetch_decodes_list_of_records(self) -> None:
        payload = [
            {"id": 7, "app": 3, "command": "sync", "exitcode": 0, "pid": 0},
            {"id": 8, "app": 3, "command": "sync", "exitcode": -1, "pid": None},
        ]
        run = mock.Mock(return_value=_completed(json.dumps(payload)))
        source = CliDataSource(run=run)

        jobs = source.fetch(FetchRequest(command="job", limit=2), (Job,))

        self.assertEqual([job.id for job in jobs], [7, 8])
        self.assertEqual(jobs[0].app_id, 3)
        self.assertEqual(jobs[1].status, "Scheduled")

    def test_fetch_rejects_invalid_json(self) -> None:
        run = mock.Mock(return_value=_completed("not json"))
        source = CliDataSource(run=run)

        with self.assertRaises(DecodeError):
            source.fetch(FetchRequest(command="job"), (Job,))

    def test_status_truncates_long_database_string(self) -> None:
        payload = {"version-cli": "1.2.3", "user": "admin", "runtemplates": "4", "database": "x" * 80}
        run = mock.Mock(return_value=_completed(json.dumps(payload)))
        source = CliDataSource(run=run)

        status = source.status()

        self.assertEqual(run.call_args.args[0][1:], ["status", "--format=json"])
        self.assertEqual(status.version, "1.2.3")
        self.assertEqual(status.templates, 4)
        self.assertEqual(status.database, "x" * 50 + "...")

    def test_commands_are_sorted_and_skip_private_entries(self) -> None:
        payload = {
            "job": {"description": "Manage jobs"},
            "_meta": {"description": "hidden"},
            "application": {"description": "Manage apps"},
        }
        run = mock.Mock(return_value=_completed(json.dumps(payload)))
        source = CliDataSource(run=run)

        commands = source.commands()

        self.assertEqual([command.name for command in commands], ["application", "job"])
        self.assertEqual(commands[1].description, "Manage jobs")

    def test_command_help_strips_output(self) -> None:
        run = mock.Mock(return_value=_completed("\nUsage: job list\n\n"))
        source = CliDataSource(run=run)

        self.assertEqual(source.command_help("job"), "Usage: job list")
        self.assertEqual(run.call_args.args[0][1:], ["job", "--help"])
