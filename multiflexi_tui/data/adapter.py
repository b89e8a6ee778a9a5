"""Data Source Adapter: invoke ``multiflexi-cli`` and decode its output.

Owns argument construction, process invocation with a deadline, and the
mapping of every failure mode onto the ``errors`` taxonomy.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from ..log import get_logger
from .decode import decode_record, decode_target, parse_json
from .errors import DecodeError, RemoteExecutionError
from .records import CommandInfo, StatusInfo

DEFAULT_EXECUTABLE = "multiflexi-cli"
DEFAULT_FORMAT = "json"
DEFAULT_ORDER = "D"
DEFAULT_LIMIT = 10
DEFAULT_TIMEOUT_SECONDS = 10.0
STDERR_EXCERPT_CHARS = 200
DATABASE_DISPLAY_CHARS = 50

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchRequest:
    """Shape of one paginated listing request."""

    command: str
    sub_command: str = "list"
    format: str = DEFAULT_FORMAT
    order: str = DEFAULT_ORDER
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    def signature(self) -> str:
        """Canonical cache key for this request shape."""
        return (
            f"{self.command}:{self.sub_command}:fmt={self.format}:ord={self.order}"
            f":lim={self.limit}:off={self.offset}"
        )

    def args(self) -> list[str]:
        args = [self.command, self.sub_command]
        if self.format:
            args.append(f"--format={self.format}")
        if self.order:
            args.append(f"--order={self.order}")
        if self.limit > 0:
            args.append(f"--limit={self.limit}")
        if self.offset > 0:
            args.append(f"--offset={self.offset}")
        return args


class CliDataSource:
    """Run the external CLI and turn its output into typed values."""

    def __init__(
        self,
        executable: str = DEFAULT_EXECUTABLE,
        *,
        default_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        run: Callable[..., subprocess.CompletedProcess[str]] | None = None,
    ) -> None:
        self.executable = executable
        self.default_timeout = default_timeout
        self._run = run if run is not None else subprocess.run

    def run_text(self, args: Sequence[str], timeout: float | None = None) -> str:
        """Run ``executable *args`` and return stdout.

        Raises ``RemoteExecutionError`` if the process cannot start, exits
        non-zero, or does not finish before ``timeout`` seconds.
        """
        deadline = self.default_timeout if timeout is None else timeout
        argv = [self.executable, *args]
        display = " ".join(argv)
        logger.debug("running %s (timeout %.1fs)", display, deadline)
        try:
            proc = self._run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=deadline,
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning("%s timed out after %.1fs", display, deadline)
            raise RemoteExecutionError(f"{display}: timed out after {deadline:g}s", reason="timeout") from exc
        except OSError as exc:
            logger.warning("%s could not start: %s", display, exc)
            raise RemoteExecutionError(f"{display}: {exc.strerror or exc}", reason="not_found") from exc

        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()[:STDERR_EXCERPT_CHARS]
            logger.warning("%s exited with status %d: %s", display, proc.returncode, stderr)
            detail = f": {stderr}" if stderr else ""
            raise RemoteExecutionError(
                f"{display}: exit status {proc.returncode}{detail}",
                reason="exit_status",
                returncode=proc.returncode,
                stderr=stderr,
            )
        return proc.stdout or ""

    def run_json(
        self,
        noun: str,
        sub: str = "",
        params: Mapping[str, object] | None = None,
        timeout: float | None = None,
    ) -> object:
        """Run ``noun [sub] --key=value...`` and parse stdout as JSON."""
        args = [noun]
        if sub:
            args.append(sub)
        for key, value in (params or {}).items():
            args.append(f"--{key}={value}")
        return parse_json(self.run_text(args, timeout), " ".join(filter(None, (noun, sub))))

    def fetch(self, request: FetchRequest, target: type | tuple[type], timeout: float | None = None):
        """Run a listing request and decode it into ``target``."""
        output = self.run_text(request.args(), timeout)
        payload = parse_json(output, f"{request.command} {request.sub_command}")
        return decode_target(payload, target)

    def status(self, timeout: float | None = None) -> StatusInfo:
        status = decode_record(self.run_json("status", params={"format": "json"}, timeout=timeout), StatusInfo)
        if len(status.database) > DATABASE_DISPLAY_CHARS:
            status.database = status.database[:DATABASE_DISPLAY_CHARS] + "..."
        return status

    def commands(self, timeout: float | None = None) -> list[CommandInfo]:
        """Return the public command catalogue sorted by name."""
        payload = self.run_json("describe", timeout=timeout)
        if not isinstance(payload, dict):
            raise DecodeError(f"describe: expected JSON object, got {type(payload).__name__}")
        out: list[CommandInfo] = []
        for name, info in payload.items():
            if name.startswith("_"):
                continue
            description = info.get("description", "") if isinstance(info, dict) else ""
            out.append(CommandInfo(name=name, description=str(description or "")))
        out.sort(key=lambda item: item.name)
        return out

    def command_help(self, command: str, timeout: float | None = None) -> str:
        return self.run_text([command, "--help"], timeout).strip()
