"""Synchronous external tool execution only"""
import subprocess
from typing import List, Optional

from toolshim.core.tools.tool_types import Command, ExecutionOutcome, ExitKind
from toolshim.infrastructure.logging import get_logger
from toolshim.infrastructure.metrics import InvocationTimer, tool_invocations_total

logger = get_logger(__name__)


class ProcessExecutor:
    """Handles tool process execution only

    Strings run through the host shell (cmd.exe or /bin/sh); argv lists are
    executed directly. Calls block until the process exits; there is no
    timeout.
    """

    # Exit statuses the shells report for an unknown command
    NOT_FOUND_STATUSES = {127, 9009}

    def run(self, command: Command) -> ExecutionOutcome:
        """
        Execute a command and classify how it ended

        Args:
            command: Shell command line or argv list

        Returns:
            ExecutionOutcome
        """
        display = self._display(command)
        logger.debug("tool_command_started", command=display)

        exit_code: Optional[int] = None
        with InvocationTimer() as timer:
            try:
                completed = subprocess.run(
                    command,
                    shell=isinstance(command, str),
                    stdin=subprocess.DEVNULL,
                )
                exit_code = completed.returncode
                kind = self._classify(exit_code)
            except FileNotFoundError:
                kind = ExitKind.NOT_FOUND
            except OSError as e:
                logger.warning("tool_command_spawn_failed", command=display, error=str(e))
                kind = ExitKind.SPAWN_ERROR

        tool_invocations_total.labels(kind=kind.value).inc()
        logger.info(
            "tool_command_finished",
            command=display,
            kind=kind.value,
            exit_code=exit_code,
            duration=timer.duration,
        )

        return ExecutionOutcome(kind=kind, exit_code=exit_code, command=display)

    def run_for_status(self, command: Command) -> bool:
        """
        Execute a command for its exit status

        Args:
            command: Shell command line or argv list

        Returns:
            True iff the process exited with status 0
        """
        return self.run(command).ok

    def run_for_lines(self, command: Command) -> List[str]:
        """
        Execute a command and collect its standard output

        Args:
            command: Shell command line or argv list

        Returns:
            One element per output line, newline stripped; empty on spawn failure
        """
        display = self._display(command)
        logger.debug("tool_command_started", command=display)

        lines: List[str] = []
        with InvocationTimer() as timer:
            try:
                process = subprocess.Popen(
                    command,
                    shell=isinstance(command, str),
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.DEVNULL,
                    text=True,
                    errors="replace",
                )
            except OSError as e:
                tool_invocations_total.labels(kind=ExitKind.SPAWN_ERROR.value).inc()
                logger.warning("tool_command_spawn_failed", command=display, error=str(e))
                return []

            with process:
                for line in process.stdout:
                    lines.append(line.rstrip("\r\n"))

        kind = self._classify(process.returncode)
        tool_invocations_total.labels(kind=kind.value).inc()
        logger.info(
            "tool_command_finished",
            command=display,
            kind=kind.value,
            exit_code=process.returncode,
            lines=len(lines),
            duration=timer.duration,
        )

        return lines

    def _classify(self, exit_code: int) -> ExitKind:
        if exit_code == 0:
            return ExitKind.OK
        if exit_code in self.NOT_FOUND_STATUSES:
            return ExitKind.NOT_FOUND
        return ExitKind.NON_ZERO_EXIT

    @staticmethod
    def _display(command: Command) -> str:
        if isinstance(command, str):
            return command
        return subprocess.list2cmdline(command)
