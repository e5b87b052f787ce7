"""Structured logging configuration using structlog.

Library code only ever calls ``get_logger``; the CLI (or the embedding
application) picks level and format through ``setup_logging``. Two formats
exist: ``json`` (one object per line, for log collectors) and ``console``
(key=value lines for a terminal).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

LOG_FORMATS = ("json", "console")


def _format_processors(fmt: str) -> list[structlog.typing.Processor]:
    if fmt == "console":
        # ConsoleRenderer prints exc_info itself.
        return [structlog.dev.ConsoleRenderer(colors=False)]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def setup_logging(level: str = "info", fmt: str = "json") -> None:
    """Send kubewait logs to stderr at *level* in format *fmt*."""
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Invalid log format: {fmt}. Must be one of {LOG_FORMATS}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            *_format_processors(fmt),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(component=component)  # type: ignore[return-value]


@contextmanager
def bound_wait_context(**fields: object) -> Iterator[None]:
    """Bind *fields* to every log line emitted inside the block.

    Context variables are per-task, so concurrent waits never see each
    other's fields.
    """
    with structlog.contextvars.bound_contextvars(**fields):
        yield
