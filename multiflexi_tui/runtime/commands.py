"""Background execution of controller commands.

Every command runs on its own daemon thread. Its single result message is
queued and handed back to the event loop through ``drain_results``.
"""

from __future__ import annotations

import threading
from queue import Empty, Queue

from ..log import get_logger
from .messages import Command, CommandFailed

logger = get_logger(__name__)


class CommandRunner:
    """Run commands off the UI thread and collect their messages."""

    def __init__(self) -> None:
        self._results: Queue[object] = Queue()
        self._lock = threading.Lock()
        self._next_id = 1

    def _worker(self, command: Command) -> None:
        try:
            message = command()
        except Exception as exc:
            logger.exception("background command failed")
            message = CommandFailed(error=exc)
        if message is not None:
            self._results.put(message)

    def submit(self, command: Command) -> None:
        with self._lock:
            command_id = self._next_id
            self._next_id += 1
        worker = threading.Thread(
            target=self._worker,
            args=(command,),
            name=f"multiflexi-command-{command_id}",
            daemon=True,
        )
        worker.start()

    def drain_results(self) -> list[object]:
        """Drain all messages produced since the last call."""
        out: list[object] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = ["CommandRunner"]
