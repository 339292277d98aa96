"""Logging setup shared by the respfmt CLI and HTTP service."""

from __future__ import annotations

import logging
from typing import List, Optional

from .config import LoggingConfig

_LOGGER_NAME = "respfmt"
_CONSOLE_FORMAT = "[respfmt] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# uvicorn writes through these when `respfmt serve` is running.
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``respfmt`` hierarchy."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    settings: Optional[LoggingConfig] = None, *, verbose: bool = False
) -> logging.Logger:
    """Install console and optional file handlers from ``settings``.

    ``verbose`` forces DEBUG regardless of the configured level. Calling this
    again closes the handlers installed by the previous call.
    """
    settings = settings or LoggingConfig()
    level = logging.DEBUG if verbose or settings.verbose else logging.INFO

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    handlers[0].setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    logger = logging.getLogger(_LOGGER_NAME)
    _install(logger, handlers, level)
    return logger


def attach_server_loggers(logger: logging.Logger) -> None:
    """Route uvicorn's loggers through the handlers installed on ``logger``."""
    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = list(logger.handlers)
        server_logger.setLevel(logger.level)
        server_logger.propagate = False


def _install(logger: logging.Logger, handlers: List[logging.Handler], level: int) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


__all__ = ["attach_server_loggers", "configure_logging", "get_logger"]
