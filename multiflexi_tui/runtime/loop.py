"""Main interactive event loop for the dashboard.

Coordinates resize detection, background results, rendering, and key
dispatch. All behavior lives in the controller; this loop only moves events
in and carries effects out.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..input import normalize_enter, read_key
from ..log import get_logger
from ..render import compose_frame, render_frame
from ..state import AppState
from ..ui_theme import DEFAULT_THEME, UITheme
from .commands import CommandRunner
from .controller import AppController
from .messages import Quit, Resize, RunCommand

logger = get_logger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 120


@dataclass(frozen=True)
class RuntimeLoopIO:
    """Terminal operations used by ``run_main_loop``; swapped out in tests."""

    read_key: Callable[[int, int | None], str] = read_key
    render: Callable[[list[str]], None] = render_frame
    terminal_size: Callable[[], os.terminal_size] = lambda: shutil.get_terminal_size((80, 24))


def apply_effects(effects: Iterable[object], runner: CommandRunner) -> bool:
    """Start every ``RunCommand``; return ``True`` when a ``Quit`` was seen."""
    should_quit = False
    for effect in effects:
        if isinstance(effect, RunCommand):
            runner.submit(effect.command)
        elif isinstance(effect, Quit):
            should_quit = True
        else:
            logger.warning("ignoring unknown effect %r", effect)
    return should_quit


def run_main_loop(
    controller: AppController,
    state: AppState,
    effects: Iterable[object],
    *,
    stdin_fd: int,
    runner: CommandRunner,
    theme: UITheme = DEFAULT_THEME,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    io: RuntimeLoopIO = RuntimeLoopIO(),
) -> AppState:
    """Run until the controller asks to quit; return the final state."""
    if apply_effects(effects, runner):
        return state

    dirty = True
    skip_next_lf = False
    while True:
        term = io.terminal_size()
        if (term.columns, term.lines) != (state.width, state.height):
            state, effects = controller.update(state, Resize(width=term.columns, height=term.lines))
            dirty = True
            if apply_effects(effects, runner):
                return state

        for message in runner.drain_results():
            state, effects = controller.update(state, message)
            dirty = True
            if apply_effects(effects, runner):
                return state

        if dirty:
            io.render(compose_frame(state, theme))
            state = controller.after_render(state)
            dirty = False

        try:
            raw_key = io.read_key(stdin_fd, timing.key_timeout_ms)
        except KeyboardInterrupt:
            continue
        key, skip_next_lf = normalize_enter(raw_key, skip_next_lf)
        if key is None:
            continue

        state, effects = controller.update(state, key)
        dirty = True
        if apply_effects(effects, runner):
            return state
