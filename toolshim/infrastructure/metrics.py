"""Prometheus metrics for tool invocations and filesystem operations"""

import time
from functools import wraps
from typing import Any, Callable

from prometheus_client import Counter, Histogram, Info, REGISTRY

from toolshim.core.config import settings


metrics_registry = REGISTRY

# ====================
# Service Information
# ====================

service_info = Info(
    "toolshim_service",
    "toolshim service information",
    registry=metrics_registry
)

service_info.info({
    "version": settings.app_version,
    "environment": settings.environment,
    "shell": settings.shell,
})

# ====================
# Tool Metrics
# ====================

tool_invocations_total = Counter(
    "toolshim_tool_invocations_total",
    "External tool invocations by outcome",
    ["kind"],
    registry=metrics_registry
)

tool_invocation_duration_seconds = Histogram(
    "toolshim_tool_invocation_duration_seconds",
    "Wall time of external tool invocations",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 60.0),
    registry=metrics_registry
)

# ====================
# Operation Metrics
# ====================

operations_total = Counter(
    "toolshim_operations_total",
    "Filesystem operations by result",
    ["operation", "status"],
    registry=metrics_registry
)

# ====================
# Logging Metrics
# ====================

log_messages_total = Counter(
    "toolshim_log_messages_total",
    "Log messages by level",
    ["level", "logger"],
    registry=metrics_registry
)


def completed(result: Any) -> bool:
    """Outcome of operations that never report failure"""
    return True


def track_operation(operation: str, outcome: Callable[[Any], bool] = bool) -> Callable:
    """Count calls of a filesystem operation by the outcome of its result"""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            result = func(*args, **kwargs)
            status = "success" if outcome(result) else "failure"
            operations_total.labels(operation=operation, status=status).inc()
            return result
        return wrapper
    return decorator


class InvocationTimer:
    """Context manager timing one tool invocation"""

    def __enter__(self) -> "InvocationTimer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration = time.perf_counter() - self.start_time
        tool_invocation_duration_seconds.observe(self.duration)
