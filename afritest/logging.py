"""Logging setup shared by the CLI, the service and the generators."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

_ROOT = "afritest"
LEVEL_ENV_KEY = "AFRITEST_LOG_LEVEL"

_CONSOLE_FORMAT = "[afritest] %(levelname)s %(message)s"
# Generation workers run in a thread pool; the thread name ties a line to its work item.
_VERBOSE_FORMAT = "[afritest] %(levelname)s [%(threadName)s] %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return `afritest.<name>`, or the package logger itself."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def _resolve_level(verbose: bool, environ: Mapping[str, str]) -> int:
    override = environ.get(LEVEL_ENV_KEY, "").strip().upper()
    if override:
        level = logging.getLevelName(override)
        if isinstance(level, int):
            return level
    return logging.DEBUG if verbose else logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the afritest logger.

    `AFRITEST_LOG_LEVEL` wins over `verbose` when it names a known level.
    Calling this again replaces the handlers instead of stacking them.
    """
    level = _resolve_level(verbose, os.environ if environ is None else environ)
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["LEVEL_ENV_KEY", "configure_logging", "get_logger"]
