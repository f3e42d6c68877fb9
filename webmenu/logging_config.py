"""Logging setup for the menu renderer entry points."""

from __future__ import annotations

import logging
import sys
from typing import Optional


_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(name: str | int | None, default: int = logging.INFO) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value."""

    if isinstance(name, int):
        return name
    if not name:
        return default
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(level: int = logging.INFO, handler: Optional[logging.Handler] = None) -> None:
    """Install a single formatted handler on the root logger.

    Parameters
    ----------
    level:
        The logging level to apply across the root logger.
    handler:
        Optional handler to install. When omitted a handler writing to ``sys.stderr``
        is used so rendered markup on stdout stays clean.
    """

    root_logger = logging.getLogger()
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)

    root_logger.setLevel(level)
    root_logger.addHandler(handler)


__all__ = ["configure_logging", "resolve_level"]
