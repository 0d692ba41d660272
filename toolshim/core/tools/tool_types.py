"""Tool execution type definitions"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union


# A command is either a shell command line or an argv list run without a shell
Command = Union[str, List[str]]


class ExitKind(str, Enum):
    """How a tool invocation ended"""
    OK = "ok"
    NON_ZERO_EXIT = "non_zero_exit"
    NOT_FOUND = "not_found"
    SPAWN_ERROR = "spawn_error"


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of running one command"""
    kind: ExitKind
    exit_code: Optional[int]
    command: str

    @property
    def ok(self) -> bool:
        return self.kind == ExitKind.OK

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a filesystem operation: success, or failure with a message"""
    ok: bool
    message: Optional[str] = None

    @classmethod
    def success(cls) -> "ExecutionResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str) -> "ExecutionResult":
        return cls(ok=False, message=message)

    def __bool__(self) -> bool:
        return self.ok
