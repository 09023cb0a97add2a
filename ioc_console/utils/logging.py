"""Structured logging for IoC Console, driven by ``IoCConsoleConfig``.

Events go through the standard library so the stdout and rotating-file
handlers receive the same rendered line. Every event carries the service
name and version, the logger name (``repository.memory``, ``auth.session``
and so on) and whatever ``RequestIDMiddleware`` bound for the current request.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

import structlog

from .. import __version__

if TYPE_CHECKING:
    from ..config import IoCConsoleConfig

# Third-party loggers that drown out service events at DEBUG
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def _service_fields(service: str):
    def add_service_fields(logger, method_name, event_dict):
        event_dict.setdefault("service", service)
        event_dict.setdefault("version", __version__)
        return event_dict

    return add_service_fields


def _renderer(config: IoCConsoleConfig):
    use_console = config.log_format == "console" or (
        config.log_format == "auto" and config.debug
    )
    if use_console:
        return [structlog.dev.ConsoleRenderer()]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def _file_handler(config: IoCConsoleConfig) -> logging.Handler | None:
    try:
        os.makedirs(config.log_dir, exist_ok=True)
        return RotatingFileHandler(
            os.path.join(config.log_dir, config.log_file),
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
            encoding="utf-8",
        )
    except OSError:
        # Read-only working directory: stdout only
        return None


def setup_logging(config: IoCConsoleConfig) -> None:
    """Configure structlog and the root handlers from ``config``.

    Safe to call more than once; previously installed root handlers are
    replaced.
    """
    log_level = logging.DEBUG if config.debug else logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            _service_fields(config.app_name),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            *_renderer(config),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    file_handler = _file_handler(config)
    if file_handler is not None:
        handlers.append(file_handler)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Named logger; the name is emitted as the ``logger`` field."""
    return structlog.get_logger(name)
