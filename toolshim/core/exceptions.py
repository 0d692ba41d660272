"""Base exception classes for toolshim"""

from typing import Any, Dict, Optional


class ToolshimError(Exception):
    """Base exception for all toolshim errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidArgumentError(ToolshimError, ValueError):
    """Raised when a caller breaks an operation's argument contract"""

    def __init__(self, argument: str, reason: str):
        self.argument = argument
        self.reason = reason
        super().__init__(
            f"Invalid argument '{argument}': {reason}",
            {
                "argument": argument,
                "reason": reason
            }
        )


class ConfigurationError(ToolshimError):
    """Raised when configuration is invalid"""
    pass


def require_string(name: str, value: Any) -> str:
    """Assert that a required argument is a string"""
    if not isinstance(value, str):
        raise InvalidArgumentError(name, f"expected a string, got {type(value).__name__}")
    return value


def require_optional_string(name: str, value: Any) -> Optional[str]:
    """Assert that an optional argument is a string or None"""
    if value is not None and not isinstance(value, str):
        raise InvalidArgumentError(name, f"expected a string or None, got {type(value).__name__}")
    return value
