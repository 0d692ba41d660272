"""Filesystem operations implemented with external command-line tools"""
import os
import re
from typing import Callable, List, Optional

from toolshim.core.archive.resolver import ArchiveFormatResolver
from toolshim.core.config import Settings, get_settings
from toolshim.core.exceptions import (
    InvalidArgumentError,
    require_optional_string,
    require_string,
)
from toolshim.core.shell.dialect import ShellDialect, get_dialect
from toolshim.core.tools.command_builder import ToolCommandBuilder
from toolshim.core.tools.command_executor import ProcessExecutor
from toolshim.core.tools.probe import ToolProber
from toolshim.core.tools.tool_types import ExecutionResult
from toolshim.infrastructure.logging import get_logger, log_context
from toolshim.infrastructure.metrics import completed, track_operation

logger = get_logger(__name__)


class ToolFileSystem:
    """Uniform filesystem operations backed by shell tools

    Every command runs scoped to the directory returned by ``current_dir``;
    the process working directory is never changed.
    """

    # Optional drive, then a separator
    ABSOLUTE_PATH = re.compile(r'^(?:[A-Za-z]:)?[\\/]')

    def __init__(
        self,
        dialect: Optional[ShellDialect] = None,
        executor: Optional[ProcessExecutor] = None,
        settings: Optional[Settings] = None,
        current_dir: Optional[Callable[[], str]] = None,
    ):
        self.settings = settings or get_settings()
        self.dialect = dialect or get_dialect(self.settings.shell)
        self.executor = executor or ProcessExecutor()
        self.current_dir = current_dir or os.getcwd
        self.builder = ToolCommandBuilder(self.settings)
        self.prober = ToolProber(self._execute_quiet, cache=self.settings.probe_cache)
        self.archives = ArchiveFormatResolver(self.builder, self.prober, self._execute_argv)

    # ------------------------------------------------------------------
    # Command execution
    # ------------------------------------------------------------------

    def command_at(self, directory: str, command: str) -> str:
        return self.dialect.scope_to_directory(directory, command)

    def execute_string(self, command: str) -> bool:
        """
        Run a command in the current directory

        Args:
            command: Command line; no quoting or escaping is applied

        Returns:
            True if the command exits with status 0
        """
        require_string("command", command)
        directory = self.current_dir()
        with log_context(cwd=directory, dialect=self.dialect.name):
            return self.executor.run_for_status(self.command_at(directory, command))

    def execute(self, program: str, *args: str) -> bool:
        """
        Run a program in the current directory, quoting every argument

        Args:
            program: Tool to run
            *args: Arguments, each passed as exactly one token

        Returns:
            True if the command exits with status 0
        """
        require_string("program", program)
        for index, arg in enumerate(args):
            require_string(f"args[{index}]", arg)
        return self._execute_argv([program, *args])

    def _execute_argv(self, argv: List[str]) -> bool:
        return self.execute_string(self.dialect.join(argv))

    def _execute_quiet(self, argv: List[str]) -> bool:
        return self.execute_string(self.dialect.silence(self.dialect.join(argv)))

    def _lines_in(self, at: Optional[str], command: str) -> List[str]:
        """Output lines of command run in at, a path relative to the current directory"""
        directory = self.current_dir()
        if at is not None:
            command = self.command_at(at, command)
        with log_context(cwd=directory, dialect=self.dialect.name):
            return self.executor.run_for_lines(self.command_at(directory, command))

    def tool_responds(self, program: str, flag: str = "-h") -> bool:
        """True if program runs and exits 0 when called with flag alone"""
        require_string("program", program)
        return self._execute_quiet(self.builder.probe(program, flag))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @track_operation("exists")
    def exists(self, path: str) -> bool:
        """
        Test for existence of a file or directory

        Args:
            path: Pathname to test

        Returns:
            True if the path is present
        """
        require_string("path", path)
        return self.execute_string(self.dialect.exists_test(path))

    @track_operation("is_dir")
    def is_dir(self, path: str) -> bool:
        """True if changing into path succeeds"""
        require_string("path", path)
        return self.execute_string(self.dialect.directory_test(path))

    @track_operation("list_dir", outcome=completed)
    def list_dir(self, at: Optional[str] = None) -> List[str]:
        """
        List the contents of a directory

        Args:
            at: Directory to list; the current directory when None

        Returns:
            Entry names in the listing tool's order; empty if at is not a directory
        """
        require_optional_string("at", at)
        if not self.is_dir(self.current_dir() if at is None else at):
            return []

        return self._lines_in(at, self.dialect.join(self.builder.ls()))

    @track_operation("find", outcome=completed)
    def find(self, at: Optional[str] = None) -> List[str]:
        """
        Recursively scan the contents of a directory

        Args:
            at: Directory to scan; the current directory when None

        Returns:
            Relative paths with forward slashes, in the tool's order;
            empty if at is not a directory
        """
        require_optional_string("at", at)
        if not self.is_dir(self.current_dir() if at is None else at):
            return []

        command = self.dialect.silence(self.dialect.join(self.builder.find()), stdout=False)

        result = []
        for entry in self._lines_in(at, command):
            if entry[:2] in (".\\", "./"):
                entry = entry[2:]
            if entry != ".":
                result.append(entry.replace("\\", "/"))

        return result

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @track_operation("make_dir")
    def make_dir(self, directory: str) -> bool:
        """
        Create a directory and any missing parent directories

        The tool's status is not checked: an existing directory and a
        failed creation both report success.

        Args:
            directory: Pathname of directory to create

        Returns:
            True
        """
        require_string("directory", directory)

        if self.dialect.builtin_mkdir_creates_parents:
            argv = self.builder.mkdir_native(directory)
        else:
            argv = self.builder.mkdir(directory)

        if not self._execute_quiet(argv):
            logger.debug("make_dir_ignored_failure", directory=directory)
        return True

    @track_operation("remove_dir_if_empty", outcome=completed)
    def remove_dir_if_empty(self, directory: str) -> None:
        """
        Remove a directory if it is empty

        Errors (directory not empty, already gone) are not reported.

        Args:
            directory: Pathname of directory to remove
        """
        require_string("directory", directory)
        if not self._execute_quiet(self.builder.rmdir(directory)):
            logger.debug("remove_dir_ignored_failure", directory=directory)

    @track_operation("copy")
    def copy(self, src: str, dest: str) -> ExecutionResult:
        """
        Copy a file

        Args:
            src: Pathname of source
            dest: Pathname of destination; one trailing separator is dropped

        Returns:
            ExecutionResult
        """
        require_string("src", src)
        require_string("dest", dest)

        dest = self.dialect.strip_trailing_separator(dest)

        if self._execute_argv(self.builder.cp(src, dest)):
            return ExecutionResult.success()

        logger.info("copy_failed", src=src, dest=dest)
        return ExecutionResult.failure(f"Failed copying {src} to {dest}")

    @track_operation("copy_contents")
    def copy_contents(self, src: str, dest: str) -> ExecutionResult:
        """
        Recursively copy the contents of a directory

        On posix the source is expanded by the shell glob `src/*`, which
        skips dotfiles; an empty source makes the glob literal and the
        copy fails.

        Args:
            src: Pathname of source directory
            dest: Pathname of destination directory

        Returns:
            ExecutionResult
        """
        require_string("src", src)
        require_string("dest", dest)

        command = ' '.join([
            self.dialect.join(self.builder.cp_archive()),
            self.dialect.contents_glob(src),
            self.dialect.quote(dest),
        ])

        if self.execute_string(self.dialect.silence(command)):
            return ExecutionResult.success()

        logger.info("copy_contents_failed", src=src, dest=dest)
        return ExecutionResult.failure(f"Failed copying {src} to {dest}")

    @track_operation("delete")
    def delete(self, path: str) -> bool:
        """
        Delete a file or a directory and all its contents

        For safety, only absolute paths are accepted.

        Args:
            path: Pathname to delete

        Returns:
            True if the removal succeeded

        Raises:
            InvalidArgumentError: If path is not absolute
        """
        require_string("path", path)
        if not self.ABSOLUTE_PATH.match(path):
            raise InvalidArgumentError("path", f"refusing to delete relative path {path!r}")

        # Permission reset is best effort
        self._execute_quiet(self.builder.chmod_writable(path))
        return self._execute_quiet(self.builder.rm_rf(path))

    @track_operation("download")
    def download(self, url: str, filename: Optional[str] = None) -> bool:
        """
        Download a remote file

        Args:
            url: URL to be fetched
            filename: Local filename; when None the tool names the file
                after the URL's basename, which may be wrong after a redirect

        Returns:
            True on success
        """
        require_string("url", url)
        require_optional_string("filename", filename)

        return self._execute_argv(
            self.builder.wget(url, self.settings.user_agent, filename)
        )

    @track_operation("unpack_archive")
    def unpack_archive(self, archive: str) -> ExecutionResult:
        """
        Extract an archive, detecting its format by filename extension

        Args:
            archive: Filename of archive

        Returns:
            ExecutionResult
        """
        require_string("archive", archive)
        return self.archives.unpack(archive)
