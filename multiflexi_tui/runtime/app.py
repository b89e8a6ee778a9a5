"""Dashboard composition root.

Builds the data layer, the controller, and the terminal session, then hands
control to the event loop until the user quits.
"""

from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Mapping

from ..data.actions import Actions
from ..data.adapter import DEFAULT_EXECUTABLE, DEFAULT_TIMEOUT_SECONDS, CliDataSource
from ..data.cache import FetchCache
from ..listing.controller import ListingController
from ..log import get_logger
from ..render.highlight import DEFAULT_STYLE
from ..ui_theme import resolve_theme
from .commands import CommandRunner
from .controller import AppController, Services
from .loop import run_main_loop
from .terminal import TerminalController

logger = get_logger(__name__)


def build_services(
    cli_path: str = DEFAULT_EXECUTABLE,
    timeout: float | None = None,
    page_sizes: Mapping[str, int] | None = None,
    syntax_style: str = DEFAULT_STYLE,
) -> Services:
    """Wire adapter, cache, listing controller, and actions together.

    A configured ``timeout`` applies to every call, including entities that
    carry their own; without one each entity keeps its registry timeout.
    """
    source = CliDataSource(cli_path, default_timeout=DEFAULT_TIMEOUT_SECONDS if timeout is None else timeout)
    cache = FetchCache(source)
    return Services(
        source=source,
        cache=cache,
        listings=ListingController(cache, page_sizes=page_sizes, timeout=timeout),
        actions=Actions(source, cache),
        syntax_style=syntax_style,
    )


def run_dashboard(
    services: Services,
    *,
    theme_name: str | None = None,
    no_color: bool = False,
) -> None:
    """Run the interactive dashboard on the controlling terminal."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        raise SystemExit("multiflexi-tui needs an interactive terminal; try --status or --list.")

    theme = resolve_theme(theme_name, no_color=no_color)
    controller = AppController(services)
    runner = CommandRunner()
    term = shutil.get_terminal_size((80, 24))
    state, effects = controller.init(term.columns, term.lines)

    terminal = TerminalController(stdin_fd, stdout_fd)
    logger.info("starting dashboard against %s", services.source.executable)
    with terminal.raw_mode():
        final = run_main_loop(controller, state, effects, stdin_fd=stdin_fd, runner=runner, theme=theme)
    logger.info("dashboard closed on %s", final.view.name)
