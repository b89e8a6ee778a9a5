"""CLI entrypoint tests: flag parsing, config merge, and one-shot reports."""

from __future__ import annotations

import io
import json
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from multiflexi_tui import cli


def _completed(stdout: str, returncode: int = 0, stderr: str = ""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        root = Path(self._tmp.name)
        self.log_path = root / "test.log"
        patcher = mock.patch("multiflexi_tui.config.CONFIG_PATH", root / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_flags_are_passed_to_dashboard(self) -> None:
        with mock.patch("multiflexi_tui.cli.run_dashboard") as run_dashboard:
            cli.main(
                [
                    "--cli",
                    "/opt/mf-cli",
                    "--timeout",
                    "4",
                    "--theme",
                    "ocean",
                    "--no-color",
                    "--log-file",
                    str(self.log_path),
                ]
            )

        run_dashboard.assert_called_once()
        services = run_dashboard.call_args.args[0]
        self.assertEqual(services.source.executable, "/opt/mf-cli")
        self.assertEqual(services.source.default_timeout, 4.0)
        self.assertEqual(run_dashboard.call_args.kwargs, {"theme_name": "ocean", "no_color": True})

    def test_config_timeout_reaches_listings(self) -> None:
        Path(self._tmp.name, "config.json").write_text(json.dumps({"timeout_seconds": 2}), encoding="utf-8")
        with mock.patch("multiflexi_tui.cli.run_dashboard") as run_dashboard:
            cli.main(["--log-file", str(self.log_path)])

        services = run_dashboard.call_args.args[0]
        self.assertEqual(services.source.default_timeout, 2.0)
        self.assertEqual(services.listings.timeout_for(services.listings.spec("job")), 2.0)

    def test_without_timeout_setting_entities_keep_their_own(self) -> None:
        with mock.patch("multiflexi_tui.cli.run_dashboard") as run_dashboard:
            cli.main(["--log-file", str(self.log_path)])

        listings = run_dashboard.call_args.args[0].listings
        self.assertEqual(listings.timeout_for(listings.spec("job")), 15.0)
        self.assertIsNone(listings.timeout_for(listings.spec("company")))

    def test_known_theme_flag_is_remembered(self) -> None:
        with mock.patch("multiflexi_tui.cli.run_dashboard"):
            cli.main(["--theme", "Ocean", "--log-file", str(self.log_path)])
            cli.main(["--theme", "no-such-theme", "--log-file", str(self.log_path)])

        saved = json.loads(Path(self._tmp.name, "config.json").read_text(encoding="utf-8"))
        self.assertEqual(saved, {"theme": "ocean"})

    def test_invalid_timeout_is_rejected(self) -> None:
        with mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.main(["--timeout", "0"])

    def test_status_prints_report_without_starting_dashboard(self) -> None:
        payload = {"version-cli": "2.1.0", "user": "admin", "database": "mysql://db"}
        stdout = io.StringIO()
        with (
            mock.patch("subprocess.run", return_value=_completed(json.dumps(payload))) as run,
            mock.patch("sys.stdout", stdout),
            mock.patch("multiflexi_tui.cli.run_dashboard") as run_dashboard,
        ):
            cli.main(["--status", "--log-file", str(self.log_path)])

        run_dashboard.assert_not_called()
        self.assertEqual(run.call_args.args[0], ["multiflexi-cli", "status", "--format=json"])
        output = stdout.getvalue()
        self.assertIn("CLI Version", output)
        self.assertIn("2.1.0", output)
        self.assertIn("mysql://db", output)

    def test_list_prints_table(self) -> None:
        payload = [{"id": 1, "name": "Acme", "enabled": 1}]
        stdout = io.StringIO()
        with (
            mock.patch("subprocess.run", return_value=_completed(json.dumps(payload))) as run,
            mock.patch("sys.stdout", stdout),
        ):
            cli.main(["--list", "company", "--limit", "3", "--log-file", str(self.log_path)])

        self.assertIn("--limit=3", run.call_args.args[0])
        lines = stdout.getvalue().splitlines()
        self.assertTrue(lines[0].startswith("ID"))
        self.assertIn("Acme", lines[1])

    def test_cli_failure_exits_with_message(self) -> None:
        with (
            mock.patch("subprocess.run", return_value=_completed("", returncode=2, stderr="no db")),
            mock.patch("sys.stdout", io.StringIO()),
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["--status", "--log-file", str(self.log_path)])

        self.assertIn("no db", str(ctx.exception.code))
