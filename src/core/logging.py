"""
structlog setup shared by the API, the CLI and the tests.

Two renderers: a console renderer for local runs and JSON lines for
production. Both go through the stdlib root logger, so third-party
libraries (uvicorn, httpx, openai) end up in the same stream.

    from core.logging import configure_logging, get_logger

    configure_logging(json_logs=True)                          # API in production
    configure_logging(log_level="WARNING", stream=sys.stderr)  # CLI

    logger = get_logger(__name__)
    logger.info("Selected candidates", role="top", pool=12, stage="gender_only")

The CLI sends logs to stderr because stdout carries the recommendations.
"""

import logging
import sys
from typing import Any, List, Optional, TextIO

import structlog
from structlog.types import Processor


# Libraries that log every HTTP call at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "uvicorn.access")


def _processors(json_logs: bool, include_timestamp: bool, stream: TextIO) -> List[Processor]:
    chain: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if include_timestamp:
        chain.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        isatty = getattr(stream, "isatty", None)
        chain.append(structlog.dev.ConsoleRenderer(
            colors=bool(isatty and isatty()),
            exception_formatter=structlog.dev.plain_traceback,
        ))
    return chain


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    include_timestamp: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    """
    (Re)configure structlog and the stdlib root logger.

    Safe to call more than once; the last call wins. Loggers are not cached,
    so module-level ``logger = get_logger(__name__)`` objects pick up a new
    configuration immediately.

    Args:
        json_logs: JSON lines instead of the console renderer
        log_level: Minimum level name (DEBUG, INFO, WARNING, ...)
        include_timestamp: Prefix each event with an ISO timestamp
        stream: Where log lines go; stdout when omitted
    """
    stream = stream or sys.stdout

    structlog.configure(
        processors=_processors(json_logs, include_timestamp, stream),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, log_level.upper()),
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Named structlog logger (pass ``__name__``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """
    Attach key/values to every log line in the current context.

        bind_context(request_id="abc")
        logger.info("Intent resolved")   # carries request_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with ``bind_context`` (end of request)."""
    structlog.contextvars.clear_contextvars()


class LoggerMixin:
    """Gives a class a ``self.logger`` named after the class."""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        return get_logger(self.__class__.__name__)
