"""File-based logging for the browser.

The terminal belongs to the TUI, so log records go to a file under the
platform log directory instead of stderr.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "ccexp.log"
DEBUG_ENV_VAR = "CCEXP_DEBUG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def debug_enabled(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get(DEBUG_ENV_VAR, "").strip().lower() in {"1", "true", "yes", "on"}


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(log_path: Path | None = None, *, debug: bool | None = None) -> Path | None:
    """Route ``ccexp`` loggers to ``log_path``.

    Returns the log file in use, or ``None`` when the directory cannot be
    created; logging is then left unconfigured rather than failing startup.
    """
    path = log_path or default_log_path()
    if debug is None:
        debug = debug_enabled()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger(APP_NAME)
    for existing in list(package_logger.handlers):
        if isinstance(existing, logging.FileHandler):
            package_logger.removeHandler(existing)
            existing.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.propagate = False
    return path
