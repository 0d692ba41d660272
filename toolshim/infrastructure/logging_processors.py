"""Custom structlog processors"""

import socket
import sys
import traceback
from functools import lru_cache

from structlog.types import EventDict, WrappedLogger

# find and ls command lines can be very long; logs keep the head
MAX_COMMAND_LENGTH = 500

SEVERITIES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@lru_cache(maxsize=1)
def _hostname() -> str:
    try:
        return socket.gethostname()
    except OSError:
        return "unknown"


def add_service_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag events with the service and the configured shell family"""
    from toolshim.core.config import settings

    event_dict.setdefault("service", settings.app_name)
    event_dict.setdefault("environment", settings.environment)
    event_dict.setdefault("shell", settings.shell)
    event_dict.setdefault("hostname", _hostname())
    return event_dict


def shorten_command(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Truncate oversized command lines"""
    command = event_dict.get("command")
    if isinstance(command, str) and len(command) > MAX_COMMAND_LENGTH:
        event_dict["command"] = command[:MAX_COMMAND_LENGTH] + "..."
        event_dict["command_length"] = len(command)
    return event_dict


def format_exception_info(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace exc_info with a structured exception record"""
    exc_info = event_dict.pop("exc_info", None)
    if not exc_info:
        return event_dict

    if isinstance(exc_info, BaseException):
        error = exc_info
    elif isinstance(exc_info, tuple):
        error = exc_info[1]
    else:
        error = sys.exc_info()[1]

    if error is not None:
        event_dict["exception"] = {
            "type": type(error).__name__,
            "message": str(error),
            "traceback": traceback.format_exception(type(error), error, error.__traceback__),
        }
    return event_dict


def set_log_severity(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Upper-case severity field for log aggregation"""
    level = event_dict.get("level")
    if level is not None:
        severity = str(level).upper()
        event_dict["severity"] = severity if severity in SEVERITIES else "INFO"
    return event_dict


class MetricsProcessor:
    """Counts log events per level and logger"""

    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        # metrics imports config, which must not import logging back
        from toolshim.infrastructure.metrics import log_messages_total

        if "level" in event_dict:
            log_messages_total.labels(
                level=event_dict["level"],
                logger=getattr(logger, "name", "unknown"),
            ).inc()
        return event_dict
