"""Logging setup for **SiteMapper**.

All modules log through ``logging.getLogger(__name__)``; their loggers are
children of the ``site_mapper`` logger, which :func:`init_logging` wires to
stdout and, optionally, to a size-rotated log file. Nothing is configured on
import, so the package stays quiet when used as a library.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
PROJECT_LOGGER: Final[str] = "site_mapper"

#: rotation settings for ``--log-file``
LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Attach fresh handlers to the project logger and return it.

    Previous handlers are dropped, so calling this twice (e.g. from tests)
    does not duplicate output. Records do not propagate to the root logger.
    """
    formatter = logging.Formatter(log_format)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )

    project = logging.getLogger(PROJECT_LOGGER)
    for old in project.handlers[:]:
        project.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        project.addHandler(handler)
    project.setLevel(level)
    project.propagate = False
    return project


__all__ = ["init_logging", "DEFAULT_FORMAT", "PROJECT_LOGGER"]
