"""CLI context management."""

from dataclasses import dataclass

import typer
from rich.console import Console

from toolshim.cli.utils.output import OutputFormatter
from toolshim.core.fs.operations import ToolFileSystem


@dataclass
class CLIContext:
    """Context object passed through CLI commands."""

    fs: ToolFileSystem
    formatter: OutputFormatter
    console: Console

    def fail(self, message: str, code: int = 1):
        """
        Print an error and stop the command.

        Args:
            message: Error message
            code: Process exit status
        """
        self.formatter.print_error(message)
        raise typer.Exit(code)

    def report(self, ok: bool, success: str, failure: str):
        """Print the outcome of a boolean operation and set the exit status."""
        if not ok:
            self.fail(failure)
        self.formatter.print_success(success)
