"""Runtime orchestration: controller, background commands, and event loop.

Submodules import lazily from here to keep ``multiflexi_tui.listing`` and
``multiflexi_tui.runtime.messages`` free of import cycles.
"""

from __future__ import annotations


def run_dashboard(*args, **kwargs):
    """Lazily import the dashboard entrypoint to avoid bootstrap cost on import."""
    from .app import run_dashboard as _run_dashboard

    return _run_dashboard(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = ["run_dashboard", "run_main_loop"]
