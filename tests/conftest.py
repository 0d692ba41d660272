"""Pytest configuration and fixtures"""

import os
import shutil
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from toolshim.core.config import Settings
from toolshim.core.fs.operations import ToolFileSystem
from toolshim.core.shell.dialect import PosixShell, WindowsCmdShell
from toolshim.core.tools.command_executor import ProcessExecutor
from toolshim.core.tools.tool_types import Command, ExecutionOutcome, ExitKind


class RecordingExecutor(ProcessExecutor):
    """Executor that records commands instead of spawning processes"""

    def __init__(
        self,
        responder: Optional[Callable[[str], bool]] = None,
        lines: Optional[Dict[str, List[str]]] = None,
    ):
        self.responder = responder or (lambda command: True)
        self.lines = lines or {}
        self.commands: List[str] = []

    def run(self, command: Command) -> ExecutionOutcome:
        display = self._display(command)
        self.commands.append(display)
        ok = self.responder(display)
        return ExecutionOutcome(
            kind=ExitKind.OK if ok else ExitKind.NON_ZERO_EXIT,
            exit_code=0 if ok else 1,
            command=display,
        )

    def run_for_lines(self, command: Command) -> List[str]:
        display = self._display(command)
        self.commands.append(display)
        for marker, output in self.lines.items():
            if marker in display:
                return list(output)
        return []

    @property
    def calls(self) -> int:
        return len(self.commands)


@pytest.fixture
def settings() -> Settings:
    """Settings with fixed values, independent of the environment"""
    return Settings(
        _env_file=None,
        user_agent="toolshim-tests/1.0",
        shell="posix",
    )


@pytest.fixture
def recorder() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def cmd_fs(settings: Settings, recorder: RecordingExecutor) -> ToolFileSystem:
    """Windows cmd.exe flavored filesystem that never spawns processes"""
    return ToolFileSystem(
        dialect=WindowsCmdShell(),
        executor=recorder,
        settings=settings,
        current_dir=lambda: "C:\\work\\build",
    )


@pytest.fixture
def posix_fs(settings: Settings, recorder: RecordingExecutor) -> ToolFileSystem:
    """POSIX flavored filesystem that never spawns processes"""
    return ToolFileSystem(
        dialect=PosixShell(),
        executor=recorder,
        settings=settings,
        current_dir=lambda: "/work/build",
    )


@pytest.fixture
def real_fs(settings: Settings, tmp_path: Path) -> ToolFileSystem:
    """POSIX filesystem running real tools, scoped to a temporary directory"""
    return ToolFileSystem(
        dialect=PosixShell(),
        executor=ProcessExecutor(),
        settings=settings,
        current_dir=lambda: str(tmp_path),
    )


def requires_tools(*tools: str):
    """Skip a test when one of the external tools is not installed"""
    if os.name == "nt":
        return pytest.mark.skip(reason="needs a POSIX shell")
    missing = [tool for tool in tools if shutil.which(tool) is None]
    return pytest.mark.skipif(bool(missing), reason=f"missing tools: {', '.join(missing)}")
