"""External tool invocation core module"""
from .command_builder import ToolCommandBuilder
from .command_executor import ProcessExecutor
from .probe import ToolCandidate, ToolProber
from .tool_types import (
    Command,
    ExitKind,
    ExecutionOutcome,
    ExecutionResult
)

__all__ = [
    'ToolCommandBuilder',
    'ProcessExecutor',
    'ToolCandidate',
    'ToolProber',
    'Command',
    'ExitKind',
    'ExecutionOutcome',
    'ExecutionResult'
]
