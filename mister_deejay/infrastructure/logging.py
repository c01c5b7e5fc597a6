"""structlog configuration for the service.

All output, including uvicorn's and SQLAlchemy's stdlib loggers, goes
through one ``ProcessorFormatter`` so every line has the same shape.
"""
from __future__ import annotations

import logging
import os
import sys

import structlog

SQL_LOGGER = "sqlalchemy.engine"
ACCESS_LOGGER = "uvicorn.access"

_TRUTHY = ("1", "true", "yes")


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(
    log_level: str | None = None,
    log_format: str | None = None,
    sql_echo: bool | None = None,
) -> None:
    """Configure structlog and the root logger.

    Arguments override ``LOG_LEVEL``, ``LOG_FORMAT`` and ``SQL_ECHO``. The
    format defaults to console on a TTY and JSON otherwise. With SQL echo on,
    statements are logged at INFO by SQLAlchemy's own logger; otherwise they
    only show in DEBUG mode.
    """
    level = (log_level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    default_fmt = "console" if sys.stderr.isatty() else "json"
    fmt = (log_format or os.environ.get("LOG_FORMAT", default_fmt)).lower()
    if sql_echo is None:
        sql_echo = os.environ.get("SQL_ECHO", "").lower() in _TRUTHY

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer(fmt)],
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    debug = level == "DEBUG"
    logging.getLogger(ACCESS_LOGGER).setLevel(logging.NOTSET if debug else logging.WARNING)
    if sql_echo:
        logging.getLogger(SQL_LOGGER).setLevel(logging.INFO)
    else:
        logging.getLogger(SQL_LOGGER).setLevel(logging.NOTSET if debug else logging.WARNING)
