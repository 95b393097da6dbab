"""
Structured logging setup.

Stores never build loggers themselves: they receive a LoggerFunc that maps
the request context to a bound structlog logger. default_logger is what
they fall back to when the caller injects nothing.
"""

import logging
from typing import Callable

import structlog

from paystore.config import config
from paystore.context import Context

LoggerFunc = Callable[[Context], structlog.stdlib.BoundLogger]


def configure_logging(level: str = None, json: bool = None) -> None:
    """Configure structlog once at process startup."""
    level = level or config.log_level
    json = config.log_json if json is None else json

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
        cache_logger_on_first_use=True,
    )


def default_logger(ctx: Context):
    return structlog.get_logger("paystore").bind(
        request_id=ctx.request_id, **ctx.fields
    )
