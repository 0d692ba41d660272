"""structlog setup for tool invocations"""

import logging
import sys
from contextlib import contextmanager
from typing import IO, Any, Iterator, List, Optional

import structlog
from structlog.types import Processor

from toolshim.core.config import settings
from toolshim.infrastructure.logging_processors import (
    MetricsProcessor,
    add_service_context,
    format_exception_info,
    set_log_severity,
    shorten_command,
)


def _processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_service_context,
        structlog.processors.add_log_level,
        set_log_severity,
        shorten_command,
        format_exception_info,
        structlog.processors.TimeStamper(fmt="iso"),
        MetricsProcessor(),
    ]


def setup_logging(level: Optional[str] = None, stream: Optional[IO[str]] = None) -> None:
    """
    Route structlog and stdlib logging through one handler

    Args:
        level: Level name overriding settings.log_level
        stream: Destination; stderr by default since stdout carries tool output
    """
    stream = stream or sys.stderr
    shared_processors = _processors()

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level or settings.log_level))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Attach key/value pairs to every log event emitted inside the block"""
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
