"""Structured logging helpers.

Loggers returned by :func:`get_logger` accept an optional ``data`` mapping on
every call; it is rendered after the message so log lines stay greppable::

    logger = get_logger(__name__)
    logger.warning("Rule list truncated", data={"skill": "foo", "count": 75})
"""

from __future__ import annotations

import json
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "skills_hub"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class Logger:
    """Thin wrapper over :class:`logging.Logger` with a ``data=`` keyword."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._logger = logging.getLogger(name)

    def debug(self, message: str, *, data: Any = None, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, data, **kwargs)

    def info(self, message: str, *, data: Any = None, **kwargs: Any) -> None:
        self._log(logging.INFO, message, data, **kwargs)

    def warning(self, message: str, *, data: Any = None, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, data, **kwargs)

    def error(self, message: str, *, data: Any = None, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, data, **kwargs)

    def _log(self, level: int, message: str, data: Any, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if data is not None:
            message = f"{message} {_format_data(data)}"
        self._logger.log(level, message, **kwargs)


def get_logger(name: str) -> Logger:
    return Logger(name)


def configure_logging(level: str = "warning", *, console: Console | None = None) -> None:
    """Route skills-hub log records to stderr through rich."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(_LEVELS.get(level.lower(), logging.WARNING))
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=False,
        markup=False,
    )
    root.addHandler(handler)
    root.propagate = False


def _format_data(data: Any) -> str:
    try:
        return json.dumps(data, ensure_ascii=True, default=str, sort_keys=True)
    except (TypeError, ValueError):
        return str(data)
