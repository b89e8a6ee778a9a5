"""Command-line front door for multiflexi-tui.

Parses CLI options, merges them with the persisted config, and sets up
logging. Then either prints a one-shot report (``--status``/``--list``) or
launches the interactive dashboard.
"""

from __future__ import annotations

import argparse
import shutil
import sys
from collections.abc import Sequence
from pathlib import Path

from . import config
from .data.adapter import DEFAULT_TIMEOUT_SECONDS, CliDataSource, FetchRequest
from .data.errors import DashboardError
from .listing.registry import ENTITIES, EntitySpec
from .log import get_logger, setup_logging
from .render.highlight import DEFAULT_STYLE
from .render.table import render_table
from .runtime import run_dashboard
from .runtime.app import build_services
from .ui_theme import PLAIN_THEME, available_theme_names
from .views.home import status_rows

logger = get_logger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    """argparse type for positive second counts."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def _default_render_width() -> int:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multiflexi-tui",
        description="Terminal dashboard for the MultiFlexi automation platform.",
    )
    parser.add_argument("--cli", default=None, help="Path to multiflexi-cli (default: from config or PATH).")
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Seconds to wait for each multiflexi-cli call.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style for the raw record view.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument("--status", action="store_true", help="Print the system status and exit.")
    parser.add_argument(
        "--list",
        metavar="ENTITY",
        choices=sorted(ENTITIES),
        default=None,
        help="Print the first page of ENTITY as a table and exit.",
    )
    parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Rows to print with --list (default: the entity page size).",
    )
    return parser


def render_status_report(source: CliDataSource) -> str:
    status = source.status()
    rows = status_rows(status)
    rows.append(("Database", status.database))
    width = max(len(label) for label, _ in rows)
    return "".join(f"{label:<{width}}  {value}\n" for label, value in rows)


def render_listing_report(source: CliDataSource, spec: EntitySpec, limit: int, max_cols: int) -> str:
    items = source.fetch(FetchRequest(command=spec.noun, limit=limit), (spec.record_type,))
    lines = render_table(spec.columns, items, -1, max_cols, len(items) + 1, PLAIN_THEME)
    return "".join(line.rstrip() + "\n" for line in lines)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and run the requested mode."""
    args = build_parser().parse_args(argv)

    log_path = setup_logging(args.log_level or config.load_log_level(), args.log_file)
    logger.debug("logging to %s", log_path)

    cli_path = args.cli or config.load_cli_path()
    timeout = args.timeout if args.timeout is not None else config.load_timeout_seconds()
    page_sizes = config.load_page_sizes()

    if args.status or args.list is not None:
        source = CliDataSource(cli_path, default_timeout=DEFAULT_TIMEOUT_SECONDS if timeout is None else timeout)
        try:
            if args.status:
                sys.stdout.write(render_status_report(source))
            else:
                spec = ENTITIES[args.list]
                limit = args.limit or page_sizes.get(spec.tag, spec.page_size)
                sys.stdout.write(render_listing_report(source, spec, limit, _default_render_width()))
        except DashboardError as exc:
            raise SystemExit(f"multiflexi-tui: {exc}") from exc
        return

    theme_name = args.theme or config.load_theme_name()
    if args.theme and args.theme.strip().lower() in available_theme_names():
        config.save_theme_name(args.theme.strip().lower())

    services = build_services(cli_path, timeout, page_sizes, syntax_style=args.style)
    run_dashboard(services, theme_name=theme_name, no_color=args.no_color)


if __name__ == "__main__":
    main()
