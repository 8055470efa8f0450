"""Logging setup for the blockmenu CLI and API server.

configure_logging() sets the root level and format and optionally adds a
rotating file handler. LOG_LEVEL and LOG_FILE from the environment apply when
no explicit value is passed.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_DEFAULT_LEVEL = "WARNING"
_MAX_BYTES = 2 * 1024 * 1024  # 2 MB
_BACKUP_COUNT = 3


def _level_from(name: str | None) -> int:
    raw = (name or os.environ.get("LOG_LEVEL", _DEFAULT_LEVEL)).strip().upper()
    return getattr(logging, raw, logging.WARNING)


def configure_logging(*, level: str | None = None, log_file: str | None = None) -> None:
    """Configure process-wide logging. Call once at startup."""
    numeric = _level_from(level)
    if log_file is None:
        log_file = os.environ.get("LOG_FILE", "").strip() or None

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    root = logging.getLogger()
    root.setLevel(numeric)
    for h in root.handlers[:]:
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
            )
            file_handler.setLevel(numeric)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            root.warning("Could not open log file %s: %s; logging to stderr only", log_file, e)

    for name in ("uvicorn.access",):
        logging.getLogger(name).setLevel(logging.WARNING)
