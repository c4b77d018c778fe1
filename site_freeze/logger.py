# File: site_freeze/logger.py
"""Logging for SiteFreeze builds.

All modules log through the single ``SiteFreeze`` logger exported here.
Records go to stderr, and optionally to a rotating file, so the CLI can keep
stdout for the config dump and report paths::

    from site_freeze.logger import logger
    logger.info("Generating %d pages", total)

The CLI calls :func:`init_logging` once its ``--log-*`` options are parsed.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOGGER_NAME: Final[str] = "SiteFreeze"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# 5 MiB per file, three rotated copies kept
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 3

Level = Union[int, str]


def _formatted(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _build_handlers(log_file: str | Path | None, fmt: str) -> list[logging.Handler]:
    handlers = [_formatted(logging.StreamHandler(sys.stderr), fmt)]
    if log_file is not None:
        rotating = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=_MAX_LOG_BYTES,
            backupCount=_LOG_BACKUPS,
            encoding="utf-8",
        )
        handlers.append(_formatted(rotating, fmt))
    return handlers


def configure(
    *,
    level: Level = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Set the level and handlers of the build logger and return it.

    With *replace_handlers* false the new handlers are added next to the
    existing ones.
    """
    build_logger = logging.getLogger(LOGGER_NAME)
    build_logger.setLevel(level)
    if replace_handlers:
        build_logger.handlers.clear()
    for handler in _build_handlers(log_file, log_format):
        build_logger.addHandler(handler)
    build_logger.propagate = False
    return build_logger


def init_logging(
    level: Level = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Start logging from scratch with the given options."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
