"""
Logging setup.

Library modules only call logging.getLogger(__name__); nothing here runs
on import. Applications call setup_logging() once at startup.
"""

from __future__ import annotations

import logging
import sys

from .runtime import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure root logging: stderr, plus `log_file` if given."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def setup_logging_from_config(config: LoggingConfig) -> None:
    """setup_logging() driven by a LoggingConfig."""
    setup_logging(config.level, config.log_file)
