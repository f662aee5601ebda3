"""Package-wide logging setup."""

from __future__ import annotations

import logging
from typing import Literal

LogLevel = Literal["silent", "error", "warn", "info", "debug"]

PACKAGE_LOGGER_NAME = "bodycapture"

_LEVELS: dict[str, int] = {
    "silent": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

_current_level: LogLevel = "info"
_handler: logging.Handler | None = None


def configure_logger(log_level: LogLevel = "info", prefix: str = "BodyCapture") -> None:
    """Attach a single stream handler to the package logger.

    Calling this again replaces the handler, so the prefix can be changed.
    """
    global _handler

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(f"[{prefix}] %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(_handler)
    package_logger.propagate = False
    set_log_level(log_level)


def set_log_level(log_level: LogLevel) -> None:
    global _current_level

    if log_level not in _LEVELS:
        raise ValueError(f"Unknown log level {log_level!r}, expected one of {sorted(_LEVELS)}")
    _current_level = log_level
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(_LEVELS[log_level])


def get_log_level() -> LogLevel:
    return _current_level
