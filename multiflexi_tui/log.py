"""Centralized logger configuration.

Usage:
    from multiflexi_tui.log import get_logger
    logger = get_logger(__name__)

The terminal belongs to the UI while it runs, so records go to a log file.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "multiflexi-tui"
LOG_LEVEL_ENV = "MULTIFLEXI_TUI_LOG_LEVEL"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER_NAME = "multiflexi_tui"


def resolve_level(level: str | None) -> int:
    """Map a level name (or ``None``) to a ``logging`` level constant."""
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | None = None, path: Path | None = None) -> Path:
    """Attach a rotating file handler to the package logger.

    Calling this more than once replaces the previous handler.
    Returns the log file path in use.
    """
    log_path = path or DEFAULT_LOG_PATH
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=2, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False
    return log_path


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
