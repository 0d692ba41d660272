"""Tests for archive format resolution and extraction pipelines"""

import io
import tarfile
import zipfile
from pathlib import Path

import pytest

from toolshim.core.archive.resolver import (
    ArchiveFormat,
    extension_of,
    strip_extension,
)
from toolshim.core.config import Settings
from toolshim.core.exceptions import InvalidArgumentError
from toolshim.core.fs.operations import ToolFileSystem
from toolshim.core.shell.dialect import PosixShell

from conftest import RecordingExecutor, requires_tools


class TestExtensionHelpers:
    """Test filename helpers"""

    @pytest.mark.parametrize("name,expected", [
        ("foo.tar.gz", "foo.tar"),
        ("foo.tgz", "foo"),
        ("dir/pkg-1.0.zip", "dir/pkg-1.0"),
        ("dir.d/noext", "dir.d/noext"),
        ("plain", "plain"),
    ])
    def test_strip_extension(self, name: str, expected: str):
        assert strip_extension(name) == expected

    @pytest.mark.parametrize("name,expected", [
        ("foo.xyz", ".xyz"),
        ("foo.tar.xz", ".xz"),
        ("README", ""),
        ("dir.d/README", ""),
        ("C:\\src.d\\file.rar", ".rar"),
    ])
    def test_extension_of(self, name: str, expected: str):
        assert extension_of(name) == expected


class TestResolve:
    """Test extension to pipeline mapping"""

    @pytest.mark.parametrize("name,fmt,stages", [
        ("pkg.tar.gz", ArchiveFormat.TAR_GZ, ["decompress", "unpack"]),
        ("pkg.tgz", ArchiveFormat.TGZ, ["decompress", "unpack"]),
        ("pkg.tar.bz2", ArchiveFormat.TAR_BZ2, ["decompress", "unpack"]),
        ("pkg.zip", ArchiveFormat.ZIP, ["unpack"]),
        ("module.lua", ArchiveFormat.LUA, []),
        ("ext.c", ArchiveFormat.C, []),
    ])
    def test_known_formats(self, posix_fs: ToolFileSystem, name, fmt, stages):
        descriptor = posix_fs.archives.resolve(name)

        assert descriptor.format == fmt
        assert [stage.name for stage in descriptor.stages] == stages
        assert descriptor.needs_extraction == bool(stages)

    def test_unknown_format(self, posix_fs: ToolFileSystem):
        assert posix_fs.archives.resolve("pkg.rar") is None

    def test_resolving_runs_nothing(self, posix_fs: ToolFileSystem, recorder: RecordingExecutor):
        posix_fs.archives.resolve("pkg.tar.gz")
        assert recorder.calls == 0

    def test_rejects_non_string(self, posix_fs: ToolFileSystem):
        with pytest.raises(InvalidArgumentError):
            posix_fs.archives.resolve(None)


class TestUnpack:
    """Test extraction pipelines against a recording executor"""

    def test_tar_gz_pipeline(self, posix_fs: ToolFileSystem, recorder: RecordingExecutor):
        result = posix_fs.unpack_archive("pkg-1.0.tar.gz")

        assert result.ok
        assert recorder.commands == [
            "cd '/work/build' && gunzip '-h' 1>/dev/null 2>/dev/null",
            "cd '/work/build' && gunzip 'pkg-1.0.tar.gz'",
            "cd '/work/build' && tar '-xf' 'pkg-1.0.tar'",
        ]

    def test_tgz_appends_tar_extension(self, posix_fs: ToolFileSystem, recorder: RecordingExecutor):
        assert posix_fs.unpack_archive("pkg.tgz").ok
        assert recorder.commands[-1] == "cd '/work/build' && tar '-xf' 'pkg.tar'"

    def test_tar_bz2_pipeline(self, posix_fs: ToolFileSystem, recorder: RecordingExecutor):
        assert posix_fs.unpack_archive("pkg.tar.bz2").ok
        assert recorder.commands == [
            "cd '/work/build' && bunzip2 'pkg.tar.bz2'",
            "cd '/work/build' && tar '-xf' 'pkg.tar'",
        ]

    def test_zip_single_stage(self, posix_fs: ToolFileSystem, recorder: RecordingExecutor):
        assert posix_fs.unpack_archive("pkg.zip").ok
        assert recorder.commands == ["cd '/work/build' && unzip 'pkg.zip'"]

    @pytest.mark.parametrize("name", ["bar.lua", "ext.c"])
    def test_sources_spawn_no_process(self, posix_fs: ToolFileSystem, recorder: RecordingExecutor, name):
        result = posix_fs.unpack_archive(name)

        assert result.ok
        assert result.message is None
        assert recorder.calls == 0

    def test_unrecognized_extension(self, posix_fs: ToolFileSystem, recorder: RecordingExecutor):
        result = posix_fs.unpack_archive("foo.xyz")

        assert not result.ok
        assert ".xyz" in result.message
        assert result.message == "Unrecognized filename extension .xyz"
        assert recorder.calls == 0

    def test_no_extension(self, posix_fs: ToolFileSystem):
        result = posix_fs.unpack_archive("Makefile")
        assert result.message == "Unrecognized filename extension "

    def test_decompress_failure_short_circuits(self, settings: Settings):
        recorder = RecordingExecutor(responder=lambda command: "gunzip 'foo.tgz'" not in command)
        fs = ToolFileSystem(PosixShell(), recorder, settings, lambda: "/work")

        result = fs.unpack_archive("foo.tgz")

        assert not result.ok
        assert result.message == "Failed extracting foo.tgz"
        assert not any("tar" in command for command in recorder.commands)

    def test_unpack_failure_names_archive(self, settings: Settings):
        recorder = RecordingExecutor(responder=lambda command: " tar " not in command)
        fs = ToolFileSystem(PosixShell(), recorder, settings, lambda: "/work")

        result = fs.unpack_archive("pkg.tar.bz2")

        assert result.message == "Failed extracting pkg.tar.bz2"

    def test_falls_back_to_gzip_when_gunzip_missing(self, settings: Settings):
        recorder = RecordingExecutor(responder=lambda command: "gunzip" not in command)
        fs = ToolFileSystem(PosixShell(), recorder, settings, lambda: "/work")

        assert fs.unpack_archive("pkg.tar.gz").ok
        assert "cd '/work' && gzip '-d' 'pkg.tar.gz'" in recorder.commands

    def test_no_decompressor_fails(self, settings: Settings):
        recorder = RecordingExecutor(responder=lambda command: "-h" not in command)
        fs = ToolFileSystem(PosixShell(), recorder, settings, lambda: "/work")

        result = fs.unpack_archive("pkg.tar.gz")

        assert result.message == "Failed extracting pkg.tar.gz"
        # Only the two probes ran
        assert recorder.calls == 2

    def test_probe_result_is_cached(self, posix_fs: ToolFileSystem, recorder: RecordingExecutor):
        posix_fs.unpack_archive("a.tar.gz")
        posix_fs.unpack_archive("b.tar.gz")

        probes = [command for command in recorder.commands if "'-h'" in command]
        assert len(probes) == 1

    def test_probe_repeats_without_cache(self, settings: Settings):
        recorder = RecordingExecutor()
        uncached = settings.model_copy(update={"probe_cache": False})
        fs = ToolFileSystem(PosixShell(), recorder, uncached, lambda: "/work")

        fs.unpack_archive("a.tar.gz")
        fs.unpack_archive("b.tar.gz")

        probes = [command for command in recorder.commands if "'-h'" in command]
        assert len(probes) == 2

    def test_cmd_pipeline_is_drive_scoped(self, cmd_fs: ToolFileSystem, recorder: RecordingExecutor):
        assert cmd_fs.unpack_archive("pkg.zip").ok
        assert recorder.commands == ['C: & cd "C:\\work\\build" & unzip "pkg.zip"']


def _write_tarball(path: Path, mode: str):
    payload = b"print('hello')\n"
    with tarfile.open(path, mode) as tar:
        info = tarfile.TarInfo("pkg-1.0/src/main.lua")
        info.size = len(payload)
        tar.addfile(info, io.BytesIO(payload))


class TestUnpackWithRealTools:
    """Extract real archives in a temporary directory"""

    @requires_tools("sh", "gzip", "tar")
    def test_tar_gz(self, real_fs: ToolFileSystem, tmp_path: Path):
        _write_tarball(tmp_path / "pkg-1.0.tar.gz", "w:gz")

        result = real_fs.unpack_archive("pkg-1.0.tar.gz")

        assert result.ok, result.message
        assert (tmp_path / "pkg-1.0" / "src" / "main.lua").read_text() == "print('hello')\n"

    @requires_tools("sh", "gzip", "tar")
    def test_tgz(self, real_fs: ToolFileSystem, tmp_path: Path):
        _write_tarball(tmp_path / "pkg.tgz", "w:gz")

        assert real_fs.unpack_archive("pkg.tgz").ok
        assert (tmp_path / "pkg-1.0" / "src" / "main.lua").exists()

    @requires_tools("sh", "bunzip2", "tar")
    def test_tar_bz2(self, real_fs: ToolFileSystem, tmp_path: Path):
        _write_tarball(tmp_path / "pkg.tar.bz2", "w:bz2")

        assert real_fs.unpack_archive("pkg.tar.bz2").ok
        assert (tmp_path / "pkg-1.0" / "src" / "main.lua").exists()

    @requires_tools("sh", "unzip")
    def test_zip(self, real_fs: ToolFileSystem, tmp_path: Path):
        with zipfile.ZipFile(tmp_path / "pkg.zip", "w") as archive:
            archive.writestr("pkg/readme.txt", "hi")

        assert real_fs.unpack_archive("pkg.zip").ok
        assert (tmp_path / "pkg" / "readme.txt").read_text() == "hi"

    @requires_tools("sh", "gzip")
    def test_missing_archive_fails(self, real_fs: ToolFileSystem, tmp_path: Path):
        result = real_fs.unpack_archive("foo.tgz")

        assert not result.ok
        assert result.message == "Failed extracting foo.tgz"
        assert list(tmp_path.iterdir()) == []
