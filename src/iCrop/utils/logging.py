"""Logger helpers shared by the iCrop modules and the command line."""

from __future__ import annotations

import logging

_ROOT_LOGGER_NAME = "iCrop"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child logger when *name* is given."""

    if not name:
        return logging.getLogger(_ROOT_LOGGER_NAME)
    if name == _ROOT_LOGGER_NAME or name.startswith(f"{_ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a stream handler to the package logger once and set *level*."""

    logger = get_logger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)
    if not any(getattr(handler, "_icrop_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._icrop_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
