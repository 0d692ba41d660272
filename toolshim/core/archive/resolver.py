"""Archive format detection and extraction pipelines"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from toolshim.core.exceptions import require_string
from toolshim.core.tools.command_builder import ToolCommandBuilder
from toolshim.core.tools.probe import ToolCandidate, ToolProber
from toolshim.core.tools.tool_types import ExecutionResult
from toolshim.infrastructure.logging import get_logger, log_context

logger = get_logger(__name__)


class ArchiveFormat(str, Enum):
    """Recognized archive formats"""
    TAR_GZ = ".tar.gz"
    TGZ = ".tgz"
    TAR_BZ2 = ".tar.bz2"
    ZIP = ".zip"
    LUA = ".lua"
    C = ".c"


# Matched in order; longer suffixes first
SUFFIX_ORDER = [
    ArchiveFormat.TAR_GZ,
    ArchiveFormat.TGZ,
    ArchiveFormat.TAR_BZ2,
    ArchiveFormat.ZIP,
    ArchiveFormat.LUA,
    ArchiveFormat.C,
]

_LAST_EXTENSION = re.compile(r'\.[^./\\]+$')


def strip_extension(filename: str) -> str:
    """Remove the last extension of a filename (foo.tar.gz -> foo.tar)"""
    return _LAST_EXTENSION.sub('', filename)


def extension_of(filename: str) -> str:
    """Everything from the last dot of the base name, or '' without one"""
    base = re.split(r'[/\\]', filename)[-1]
    index = base.rfind('.')
    return base[index:] if index >= 0 else ''


# A stage's argv is computed when the stage runs; None means no usable tool
StageArgv = Callable[[], Optional[List[str]]]


@dataclass(frozen=True)
class ArchiveStage:
    """One step of an extraction pipeline"""
    name: str
    argv: StageArgv


@dataclass(frozen=True)
class ArchiveDescriptor:
    """Extraction pipeline resolved from a filename"""
    archive: str
    format: ArchiveFormat
    stages: Tuple[ArchiveStage, ...] = field(default_factory=tuple)

    @property
    def needs_extraction(self) -> bool:
        return bool(self.stages)


class ArchiveFormatResolver:
    """Maps archive filenames to extraction pipelines and runs them"""

    GZIP_PURPOSE = "gzip-decompress"

    def __init__(
        self,
        builder: ToolCommandBuilder,
        prober: ToolProber,
        execute: Callable[[List[str]], bool],
    ):
        """
        Args:
            builder: Tool command builder
            prober: Prober used to choose the gzip decompressor
            execute: Runs one argv (directory-scoped by the caller)
        """
        self.builder = builder
        self.prober = prober
        self.execute = execute

    def gzip_candidates(self) -> List[ToolCandidate]:
        settings = self.builder.settings
        return [
            ToolCandidate(
                name=settings.gunzip_command,
                probe_argv=self.builder.probe(settings.gunzip_command),
                command_argv=self.builder.gunzip,
            ),
            ToolCandidate(
                name=f"{settings.gzip_command} -d",
                probe_argv=self.builder.probe(settings.gzip_command),
                command_argv=self.builder.gzip_decompress,
            ),
        ]

    def _gunzip_stage(self, archive: str) -> ArchiveStage:
        def argv() -> Optional[List[str]]:
            candidate = self.prober.select(self.GZIP_PURPOSE, self.gzip_candidates())
            return candidate.command_argv(archive) if candidate else None
        return ArchiveStage("decompress", argv)

    def _fixed_stage(self, name: str, argv: List[str]) -> ArchiveStage:
        return ArchiveStage(name, lambda: argv)

    def resolve(self, archive: str) -> Optional[ArchiveDescriptor]:
        """
        Resolve the extraction pipeline for a filename

        Args:
            archive: Archive filename

        Returns:
            ArchiveDescriptor, or None when the extension is not recognized
        """
        require_string("archive", archive)

        fmt = next((f for f in SUFFIX_ORDER if archive.endswith(f.value)), None)
        if fmt is None:
            return None

        if fmt == ArchiveFormat.TAR_GZ:
            stages = (
                self._gunzip_stage(archive),
                self._fixed_stage("unpack", self.builder.tar_extract(strip_extension(archive))),
            )
        elif fmt == ArchiveFormat.TGZ:
            # gunzip turns foo.tgz into foo.tar
            stages = (
                self._gunzip_stage(archive),
                self._fixed_stage("unpack", self.builder.tar_extract(strip_extension(archive) + ".tar")),
            )
        elif fmt == ArchiveFormat.TAR_BZ2:
            stages = (
                self._fixed_stage("decompress", self.builder.bunzip2(archive)),
                self._fixed_stage("unpack", self.builder.tar_extract(strip_extension(archive))),
            )
        elif fmt == ArchiveFormat.ZIP:
            stages = (self._fixed_stage("unpack", self.builder.unzip(archive)),)
        else:
            # Plain source files need no extraction
            stages = ()

        return ArchiveDescriptor(archive=archive, format=fmt, stages=stages)

    def unpack(self, archive: str) -> ExecutionResult:
        """
        Extract an archive, detecting its format by filename extension

        Args:
            archive: Archive filename

        Returns:
            ExecutionResult; the failure message names the archive, not the stage
        """
        descriptor = self.resolve(archive)
        if descriptor is None:
            extension = extension_of(archive)
            logger.info("archive_unrecognized", archive=archive, extension=extension)
            return ExecutionResult.failure(f"Unrecognized filename extension {extension}")

        with log_context(archive=archive):
            for stage in descriptor.stages:
                argv = stage.argv()
                if argv is None or not self.execute(argv):
                    logger.info(
                        "archive_stage_failed",
                        format=descriptor.format.value,
                        stage=stage.name,
                    )
                    return ExecutionResult.failure(f"Failed extracting {archive}")

        logger.debug("archive_unpacked", archive=archive, format=descriptor.format.value)
        return ExecutionResult.success()
