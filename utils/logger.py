"""Centralised logging configuration for the k-NN pipeline.

Provides a dual-handler logger that writes:
- **INFO+** to the console
- **DEBUG+** to a rotating file ``logs/pipeline.log``

Usage::

    from utils.logger import get_logger
    log = get_logger(__name__)
    log.info("Loaded %d rows", n_rows)
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_LOG_FILE_NAME = "pipeline.log"
_MAX_BYTES = 2 * 1024 * 1024  # 2 MB
_BACKUP_COUNT = 3
_ROOT_NAME = "prostate_knn"
_INITIALISED: bool = False


def configure_logging(log_dir: Path | None = None, level: int = logging.INFO) -> None:
    """Attach console and file handlers to the package logger (idempotent).

    Args:
        log_dir: Directory for the rotating log file.  Defaults to ``logs/``
            under the project root.
        level: Console log level.
    """
    global _INITIALISED  # noqa: PLW0603
    if _INITIALISED:
        return

    log_dir = log_dir or _LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(logging.DEBUG)
    root.propagate = False

    # ── Console handler ─────────────────────────────────────────
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(
        logging.Formatter("%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
                          datefmt="%H:%M:%S")
    )
    root.addHandler(console)

    # ── File handler (DEBUG, rotating) ──────────────────────────
    file_handler = RotatingFileHandler(
        log_dir / _LOG_FILE_NAME,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(funcName)s:%(lineno)d │ %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)
    _INITIALISED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger.

    Handlers are not attached here; call :func:`configure_logging` from an
    entry point.  Library use therefore stays silent unless the caller
    configures logging.

    Args:
        name: Typically ``__name__`` of the calling module.

    Returns:
        A ``logging.Logger`` instance.
    """
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
