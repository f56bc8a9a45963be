from pathlib import Path

import pytest

from runtimebuilder.exceptions import PathDecodeError, PathNotFoundError, PathNotADirectoryError
from runtimebuilder.io import DiskFileSystem, probe


class TestMemoryFileSystem:

    def test_write_creates_parents(self, memory_fs, memory_root):
        target = memory_root / "a" / "b" / "file.txt"
        memory_fs.write_text(target, "hello")

        assert memory_fs.read_text(target) == "hello"
        assert memory_fs.is_file(target)
        assert memory_fs.is_dir(memory_root / "a" / "b")
        assert memory_fs.exists(memory_root / "a")

    def test_missing_file(self, memory_fs, memory_root):
        with pytest.raises(PathNotFoundError):
            memory_fs.read_text(memory_root / "missing.txt")

    def test_listdir(self, memory_fs, memory_root):
        memory_fs.write_text(memory_root / "b.txt", "")
        memory_fs.write_text(memory_root / "a.txt", "")
        assert [p.name for p in memory_fs.listdir(memory_root)] == ["a.txt", "b.txt"]

    def test_listdir_errors(self, memory_fs, memory_root):
        memory_fs.write_text(memory_root / "file.txt", "")
        with pytest.raises(PathNotFoundError):
            memory_fs.listdir(memory_root / "nowhere")
        with pytest.raises(PathNotADirectoryError):
            memory_fs.listdir(memory_root / "file.txt")

    def test_move_replaces_destination(self, memory_fs, memory_root):
        memory_fs.write_text(memory_root / "Dockerfile.new", "FROM new\n")
        memory_fs.write_text(memory_root / "Dockerfile", "FROM old\n")
        memory_fs.move(memory_root / "Dockerfile.new", memory_root / "Dockerfile")

        assert memory_fs.read_text(memory_root / "Dockerfile") == "FROM new\n"
        assert not memory_fs.exists(memory_root / "Dockerfile.new")

    def test_remove(self, memory_fs, memory_root):
        memory_fs.write_text(memory_root / "stale.txt", "")
        memory_fs.remove(memory_root / "stale.txt")
        assert not memory_fs.exists(memory_root / "stale.txt")


class TestDiskFileSystem:

    def test_round_trip(self, tmp_path):
        fs = DiskFileSystem()
        fs.write_text(tmp_path / "nested" / "Dockerfile", "FROM scratch\n")
        assert (tmp_path / "nested" / "Dockerfile").read_text() == "FROM scratch\n"
        assert fs.listdir(tmp_path) == [tmp_path / "nested"]

    def test_undecodable_text(self, tmp_path):
        (tmp_path / ".dockerignore").write_bytes(b"\xff\xfe")
        with pytest.raises(PathDecodeError, match="UTF-8"):
            DiskFileSystem().read_text(tmp_path / ".dockerignore")

    def test_move_replaces_destination(self, tmp_path):
        (tmp_path / "Dockerfile.tmp").write_text("FROM new\n")
        (tmp_path / "Dockerfile").write_text("FROM old\n")
        DiskFileSystem().move(tmp_path / "Dockerfile.tmp", tmp_path / "Dockerfile")
        assert [p.name for p in tmp_path.iterdir()] == ["Dockerfile"]
        assert (tmp_path / "Dockerfile").read_text() == "FROM new\n"


class TestProbe:
    """Marker-file checks against an in-memory workspace."""

    def test_build_descriptors(self, memory_fs, memory_root):
        assert not probe.has_maven_project(memory_fs, memory_root)
        assert not probe.has_gradle_project(memory_fs, memory_root)

        memory_fs.write_text(memory_root / "build.gradle.kts", "")
        assert probe.has_gradle_project(memory_fs, memory_root)

        memory_fs.write_text(memory_root / "pom.xml", "")
        assert probe.has_maven_project(memory_fs, memory_root)

    def test_find_wrapper(self, memory_fs, memory_root):
        assert probe.find_wrapper(memory_fs, memory_root, "mvnw") is None
        memory_fs.write_text(memory_root / "mvnw", "#!/bin/sh\n")
        assert probe.find_wrapper(memory_fs, memory_root, "mvnw") == "./mvnw"

    def test_prebuilt_artifacts(self, memory_fs, memory_root):
        for name in ("zeta.war", "alpha.JAR", "notes.txt", "lib/nested.jar"):
            memory_fs.write_text(memory_root / name, "")
        found = probe.find_prebuilt_artifacts(memory_fs, memory_root)
        assert [p.as_posix() for p in found] == ["alpha.JAR", "zeta.war"]

    def test_relative_to_workspace(self):
        workspace = Path("/ws")
        assert probe.relative_to_workspace(Path("/ws/src/main/appengine/app.yaml"), workspace) == "src/main/appengine/app.yaml"
        assert probe.relative_to_workspace(Path("/ws/../elsewhere/app.yaml"), workspace) is None
        assert probe.relative_to_workspace(Path("/other/app.yaml"), workspace) is None
