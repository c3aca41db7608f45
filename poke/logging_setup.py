"""Opt-in debug log file.

The terminal belongs to the TUI while it runs, so records only ever go to a
file. Without ``--debug`` nothing is configured.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import DEFAULT_LOG_FILENAME, LOG_FORMAT, QUIET_LOGGERS


def log_file_path(log_path: Path | None = None) -> Path:
    if log_path is None:
        return Path.cwd() / DEFAULT_LOG_FILENAME
    return Path(log_path).expanduser().resolve()


def find_file_handler(logger: logging.Logger, path: Path) -> logging.FileHandler | None:
    """The handler of ``logger`` already writing to ``path``, if any."""
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == path:
            return handler
    return None


def configure_logging(debug_enabled: bool, log_path: Path | None = None) -> Path | None:
    """Attach a DEBUG file handler to the root logger and return its path.

    Returns ``None`` when logging is off or the file cannot be opened.
    Calling it again for the same file keeps the existing handler.
    """
    if not debug_enabled:
        return None

    path = log_file_path(log_path)
    root = logging.getLogger()
    if find_file_handler(root, path) is None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(path, encoding="utf-8")
        except OSError:
            return None
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    root.setLevel(logging.DEBUG)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO)

    logging.getLogger(__name__).debug("Debug logging enabled. Writing to %s", path)
    return path
