"""Tests for ArtifactStager — discovery, renaming, permissions, checksums."""

from __future__ import annotations

import hashlib
import os
import stat
from pathlib import Path

import pytest

from relaypub.core.errors import NoArtifactsFound, ReleaseIOError
from relaypub.core.hasher import sha256_file, sha256_hex
from relaypub.core.stager import ArtifactStager


@pytest.fixture
def source(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    return src


class TestDiscovery:
    def test_matches_extension_case_insensitively(self, source: Path):
        for name in ("b.zip", "A.ZIP", "notes.txt", "c.Zip"):
            (source / name).write_bytes(b"x")
        found = [p.name for p in ArtifactStager().discover(source)]
        assert found == ["A.ZIP", "b.zip", "c.Zip"]

    def test_skips_directories_and_nested_files(self, source: Path):
        (source / "dir.zip").mkdir()
        (source / "sub").mkdir()
        (source / "sub" / "deep.zip").write_bytes(b"x")
        (source / "top.zip").write_bytes(b"x")
        assert [p.name for p in ArtifactStager().discover(source)] == ["top.zip"]

    def test_missing_source_dir(self, tmp_path: Path):
        with pytest.raises(ReleaseIOError):
            ArtifactStager().discover(tmp_path / "absent")

    def test_custom_extension_without_dot(self, source: Path):
        (source / "app.tar").write_bytes(b"x")
        (source / "app.zip").write_bytes(b"x")
        stager = ArtifactStager("TAR")
        assert stager.extension == ".tar"
        assert [p.name for p in stager.discover(source)] == ["app.tar"]


class TestStage:
    def test_renames_with_version(self, source: Path, tmp_path: Path):
        (source / "client.zip").write_bytes(b"client")
        (source / "server.ZIP").write_bytes(b"server")
        dest = tmp_path / "downloads" / "1.2.3"
        names = ArtifactStager().stage(source, dest, "1.2.3")
        assert names == ["client-1.2.3.zip", "server-1.2.3.zip"]
        assert (dest / "client-1.2.3.zip").read_bytes() == b"client"
        assert (dest / "server-1.2.3.zip").read_bytes() == b"server"

    def test_content_checksum_preserved(self, source: Path, tmp_path: Path):
        payload = os.urandom(3 * 1024 * 1024 + 17)
        (source / "big.zip").write_bytes(payload)
        dest = tmp_path / "out"
        (name,) = ArtifactStager().stage(source, dest, "0.0.1")
        assert ArtifactStager.checksum(dest / name) == hashlib.sha256(payload).hexdigest()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_preserves_permission_bits(self, source: Path, tmp_path: Path):
        artifact = source / "tool.zip"
        artifact.write_bytes(b"x")
        artifact.chmod(0o750)
        dest = tmp_path / "out"
        (name,) = ArtifactStager().stage(source, dest, "0.0.1")
        assert stat.S_IMODE((dest / name).stat().st_mode) == 0o750

    def test_no_artifacts_raises_but_creates_version_dir(self, source: Path, tmp_path: Path):
        (source / "readme.md").write_text("hi")
        dest = tmp_path / "downloads" / "0.0.1"
        with pytest.raises(NoArtifactsFound):
            ArtifactStager().stage(source, dest, "0.0.1")
        assert dest.is_dir()
        assert list(dest.iterdir()) == []

    def test_restage_overwrites(self, source: Path, tmp_path: Path):
        (source / "client.zip").write_bytes(b"v1")
        dest = tmp_path / "out"
        ArtifactStager().stage(source, dest, "0.0.1")
        (source / "client.zip").write_bytes(b"v2")
        ArtifactStager().stage(source, dest, "0.0.1")
        assert (dest / "client-0.0.1.zip").read_bytes() == b"v2"
        assert [p.name for p in dest.iterdir()] == ["client-0.0.1.zip"]

    def test_failed_copy_leaves_no_file(self, source: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (source / "client.zip").write_bytes(b"data")
        dest = tmp_path / "out"

        def _boom(src, dst, *args, **kwargs):
            Path(dst).write_bytes(b"partial")
            raise OSError("disk full")

        monkeypatch.setattr("relaypub.core.stager.shutil.copyfile", _boom)
        with pytest.raises(ReleaseIOError, match="disk full"):
            ArtifactStager().stage(source, dest, "0.0.1")
        assert list(dest.iterdir()) == []


class TestHasher:
    def test_sha256_file_matches_bytes(self, tmp_path: Path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"hello relaypub")
        digest = sha256_file(path)
        assert digest == sha256_hex(b"hello relaypub")
        assert len(digest) == 64 and digest == digest.lower()

    def test_unreadable_file_raises(self, tmp_path: Path):
        with pytest.raises(ReleaseIOError):
            sha256_file(tmp_path / "missing.bin")

    def test_release_io_error_is_os_error(self, tmp_path: Path):
        with pytest.raises(OSError):
            sha256_file(tmp_path / "missing.bin")
