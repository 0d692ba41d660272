"""External tool command construction only"""
from typing import List, Optional

from toolshim.core.config import Settings


class ToolCommandBuilder:
    """Handles tool argument-list construction only"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def mkdir(self, directory: str) -> List[str]:
        """
        Build command to create a directory and its missing parents

        Args:
            directory: Directory path

        Returns:
            Command arguments
        """
        return [self.settings.mkdir_command, '-p', directory]

    def mkdir_native(self, directory: str) -> List[str]:
        """
        Build cmd.exe mkdir command (creates parents by itself)

        Args:
            directory: Directory path

        Returns:
            Command arguments
        """
        return ['mkdir', directory]

    def rmdir(self, directory: str) -> List[str]:
        return [self.settings.rmdir_command, directory]

    def cp(self, src: str, dest: str) -> List[str]:
        """
        Build copy command

        Args:
            src: Source path
            dest: Destination path

        Returns:
            Command arguments
        """
        return [self.settings.cp_command, src, dest]

    def cp_archive(self) -> List[str]:
        """
        Build recursive attribute-preserving copy prefix

        Sources and destination are appended by the caller, since the
        source is a shell wildcard.

        Returns:
            Command arguments
        """
        return [self.settings.cp_command, '-a']

    def chmod_writable(self, path: str) -> List[str]:
        return [self.settings.chmod_command, 'a+rw', '-R', path]

    def rm_rf(self, path: str) -> List[str]:
        return [self.settings.rm_command, '-rf', path]

    def ls(self) -> List[str]:
        return [self.settings.ls_command]

    def find(self) -> List[str]:
        return [self.settings.find_command]

    def wget(self, url: str, user_agent: str, filename: Optional[str] = None) -> List[str]:
        """
        Build download command

        Args:
            url: URL to fetch
            user_agent: User-Agent header value
            filename: Explicit output file; derived from the URL if None

        Returns:
            Command arguments
        """
        cmd = [
            self.settings.wget_command,
            f'--user-agent={user_agent}',
            '--quiet',
            '--continue',
        ]

        if filename:
            cmd.extend(['--output-document', filename])

        cmd.append(url)

        return cmd

    def probe(self, program: str, flag: str = '-h') -> List[str]:
        """
        Build capability probe (help or version output only)

        Args:
            program: Tool to probe
            flag: Flag that makes the tool print and exit 0

        Returns:
            Command arguments
        """
        return [program, flag]

    def gunzip(self, archive: str) -> List[str]:
        return [self.settings.gunzip_command, archive]

    def gzip_decompress(self, archive: str) -> List[str]:
        return [self.settings.gzip_command, '-d', archive]

    def bunzip2(self, archive: str) -> List[str]:
        return [self.settings.bunzip2_command, archive]

    def tar_extract(self, tarball: str) -> List[str]:
        """
        Build tar extraction command

        Args:
            tarball: Uncompressed tar file

        Returns:
            Command arguments
        """
        return [self.settings.tar_command, '-xf', tarball]

    def unzip(self, archive: str) -> List[str]:
        return [self.settings.unzip_command, archive]
