"""Logging setup shared by the generator, validator and CLI.

Milestones (layout, tile totals, dictionary loads) go out at INFO. Per-row
verdicts and per-placement details go out at DEBUG, since validation runs
after every completed row.
"""

from __future__ import annotations

import logging
from typing import Optional, TextIO, Union

PACKAGE_LOGGER = "wordtravel"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


def resolve_level(level: Union[int, str]) -> int:
    """Map ``"debug"``/``"INFO"``/``10`` style values to a logging level, INFO if unknown."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Install a single stream handler on the root logger."""

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``wordtravel`` namespace, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or PACKAGE_LOGGER)
