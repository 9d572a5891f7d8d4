"""
Structured logging configuration.

Provides two formats:
  - **json**  (default in production): machine-readable structured logs.
  - **console** (default in development): human-friendly output.

Usage:
    from jsontransform.core.logging import setup_logging, get_logger, bind_logger

    setup_logging()                   # call once at startup
    logger = get_logger(__name__)     # per-module logger
    log = bind_logger(logger, run_id=run_id)
    log.info("Transform complete", extra={"group_count": 2})
"""

import logging
import sys
from collections.abc import MutableMapping
from contextvars import ContextVar
from typing import Any, Literal

from pythonjsonlogger import json as json_logger


LOG_FORMAT_CONSOLE = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(request_id)s | %(message)s"
)

LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Set by RequestContextMiddleware for the duration of one request.
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def setup_logging(
    level: str = "INFO",
    log_format: Literal["json", "console"] = "json",
) -> None:
    """
    Configure the root logger for the entire application.

    Args:
        level:      Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: 'json' for structured JSON lines, 'console' for human-readable.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    # Remove any pre-existing handlers to avoid duplicate log lines
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level.upper())

    if log_format == "json":
        formatter = _build_json_formatter()
    else:
        formatter = logging.Formatter(
            LOG_FORMAT_CONSOLE, datefmt=LOG_DATE_FORMAT)

    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())
    root_logger.addHandler(handler)

    # Silence noisy third-party loggers
    for noisy in ("uvicorn.access", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    root_logger.info(
        "Logging initialised",
        extra={"log_level": level.upper(), "log_format": log_format},
    )


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger.

    Convention: call with ``get_logger(__name__)`` in each module.
    """
    return logging.getLogger(name)


def bind_logger(logger: logging.Logger, **context: Any) -> "ContextLogger":
    """
    Wrap ``logger`` so every record carries ``context`` in its extra fields.

    Per-call ``extra`` values win over bound ones:

        log = bind_logger(logger, run_id="ab12", map_groups=2)
        log.warning("Field resolution failed", extra={"group": "person"})
    """
    return ContextLogger(logger, context)


class ContextLogger(logging.LoggerAdapter):
    """LoggerAdapter that merges bound context into each record's extra."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


class RequestIdFilter(logging.Filter):
    """Stamp the current request_id (if any) on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()  # type: ignore[attr-defined]
        return True


# ─── Internal ─────────────────────────────────────────────────────────


def _build_json_formatter() -> json_logger.JsonFormatter:
    """Build a JSON log formatter with standard fields."""
    return json_logger.JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(request_id)s %(message)s",
        datefmt=LOG_DATE_FORMAT,
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger",
        },
    )
