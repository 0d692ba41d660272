"""Shell-family quoting and command-line assembly"""
import os
import re
from typing import Dict, List, Optional, Sequence

from toolshim.core.exceptions import ConfigurationError, require_string


class ShellDialect:
    """Quoting, sequencing and redirection rules of one shell family"""

    name: str = ""
    separator: str = ""
    null_device: str = ""
    path_separators: str = "/"
    builtin_mkdir_creates_parents: bool = False

    # Builtins such as cmd.exe's mkdir stop working once quoted
    PLAIN_PROGRAM = re.compile(r'^[\w.\-]+$')

    def quote(self, path: str) -> str:
        """
        Quote a path so it reaches the tool as exactly one argument

        Args:
            path: Filesystem path (or any single argument)

        Returns:
            Quoted token safe to embed in a command line

        Raises:
            InvalidArgumentError: If path is not a string
        """
        raise NotImplementedError

    def drive_of(self, directory: str) -> Optional[str]:
        """Return the drive identifier a directory starts with, if any"""
        return None

    def change_directory(self, directory: str) -> str:
        return f"cd {self.quote(directory)}"

    def scope_to_directory(self, directory: str, raw_command: str) -> str:
        """
        Build a command line that runs raw_command inside directory

        Args:
            directory: Directory the command must run in
            raw_command: Command line to run, used verbatim

        Returns:
            Directory-scoped command line
        """
        require_string("directory", directory)
        require_string("raw_command", raw_command)

        command = f"{self.change_directory(directory)} {self.separator} {raw_command}"

        drive = self.drive_of(directory)
        if drive:
            command = f"{drive} {self.separator} {command}"

        return command

    def quote_program(self, program: str) -> str:
        """Quote a program name unless it is a plain word"""
        require_string("program", program)
        if self.PLAIN_PROGRAM.match(program):
            return program
        return self.quote(program)

    def join(self, argv: Sequence[str]) -> str:
        """Quote every element of an argument list into one command line"""
        if not argv:
            return ""
        program, *args = argv
        return ' '.join([self.quote_program(program)] + [self.quote(arg) for arg in args])

    def silence(self, command: str, stdout: bool = True, stderr: bool = True) -> str:
        """Redirect tool chatter to the null device"""
        if stdout:
            command = f"{command} 1>{self.null_device}"
        if stderr:
            command = f"{command} 2>{self.null_device}"
        return command

    def contents_glob(self, directory: str) -> str:
        """Quoted token matching every entry of directory"""
        raise NotImplementedError

    def exists_test(self, path: str) -> str:
        """Command line that succeeds iff path is present"""
        raise NotImplementedError

    def directory_test(self, path: str) -> str:
        """Command line that succeeds iff changing into path succeeds"""
        raise NotImplementedError

    def strip_trailing_separator(self, path: str) -> str:
        if path and path[-1] in self.path_separators:
            return path[:-1]
        return path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class PosixShell(ShellDialect):
    """/bin/sh with GNU or BSD tools"""

    name = "posix"
    separator = "&&"
    null_device = "/dev/null"

    def quote(self, path: str) -> str:
        require_string("path", path)
        # Single quotes disable every expansion; only ' itself needs care
        return "'" + path.replace("'", "'\"'\"'") + "'"

    def contents_glob(self, directory: str) -> str:
        return f"{self.quote(directory)}/*"

    def exists_test(self, path: str) -> str:
        return self.silence(f"test -e {self.quote(path)}")

    def directory_test(self, path: str) -> str:
        return self.silence(f"cd {self.quote(path)}")


class WindowsCmdShell(ShellDialect):
    """cmd.exe with GNU tool ports"""

    name = "cmd"
    separator = "&"
    null_device = "NUL"
    path_separators = "/\\"
    builtin_mkdir_creates_parents = True

    DRIVE_PATTERN = re.compile(r'^([A-Za-z]:)')
    ABSOLUTE_PATTERN = re.compile(r'^(?:[A-Za-z]:|\.)?[\\/]')

    def quote(self, path: str) -> str:
        require_string("path", path)

        if self.ABSOLUTE_PATTERN.match(path):
            path = path.replace('/', '\\')

        # Backslashes are literal unless they precede a quote
        escaped = re.sub(r'(\\*)"', lambda m: m.group(1) * 2 + '\\"', path)
        escaped = re.sub(r'(\\+)$', lambda m: m.group(1) * 2, escaped)
        # %VAR% expands even inside quotes; step outside and caret-escape
        escaped = escaped.replace('%', '"^%"')

        return f'"{escaped}"'

    def drive_of(self, directory: str) -> Optional[str]:
        match = self.DRIVE_PATTERN.match(directory)
        return match.group(1) if match else None

    def contents_glob(self, directory: str) -> str:
        return self.quote(directory.rstrip('/\\') + '\\*.*')

    def exists_test(self, path: str) -> str:
        # The probe only runs, and fails, when the path is missing
        return (
            f"if not exist {self.quote(path)} invalidcommandname "
            f"2>{self.null_device} 1>{self.null_device}"
        )

    def directory_test(self, path: str) -> str:
        return f"chdir /D {self.quote(path)} 2>{self.null_device} 1>{self.null_device}"


DIALECTS: Dict[str, ShellDialect] = {
    PosixShell.name: PosixShell(),
    WindowsCmdShell.name: WindowsCmdShell(),
}


def get_dialect(name: str = "auto") -> ShellDialect:
    """
    Look up a shell dialect by name

    Args:
        name: "posix", "cmd", or "auto" for the host's shell family

    Returns:
        ShellDialect instance

    Raises:
        ConfigurationError: If the name is unknown
    """
    if name == "auto":
        name = "cmd" if os.name == "nt" else "posix"

    try:
        return DIALECTS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown shell family: {name}",
            {"shell": name, "available": sorted(DIALECTS)}
        )


def available_dialects() -> List[str]:
    return sorted(DIALECTS)
