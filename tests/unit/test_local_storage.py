"""Tests for local filesystem storage and atomic writes."""

from __future__ import annotations

import os
import stat

import pytest

from rulesync.core.errors import ProbeError, ProbeFailure, StorageError, atomic_write
from rulesync.storage import LocalStorage


@pytest.fixture
def storage():
    return LocalStorage()


class TestProbe:
    def test_existing_file(self, storage, tmp_path):
        path = tmp_path / "AGENTS.md"
        path.write_text("hi")
        storage.probe(path)  # no error

    def test_existing_directory(self, storage, tmp_path):
        storage.probe(tmp_path)

    def test_absent(self, storage, tmp_path):
        with pytest.raises(ProbeError) as exc_info:
            storage.probe(tmp_path / "missing.md")
        assert exc_info.value.failure is ProbeFailure.ABSENT

    def test_parent_is_a_file(self, storage, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(ProbeError) as exc_info:
            storage.probe(blocker / "AGENTS.md")
        assert exc_info.value.failure is ProbeFailure.INACCESSIBLE
        assert exc_info.value.path == blocker / "AGENTS.md"


class TestReadWrite:
    def test_round_trip_utf8(self, storage, tmp_path):
        path = tmp_path / "RULES.md"
        storage.write_text(path, "HandleRequest → ValidateUser\n")
        assert storage.read_text(path) == "HandleRequest → ValidateUser\n"

    def test_write_creates_parent_directories(self, storage, tmp_path):
        path = tmp_path / ".gitnexus" / "RULES.md"
        storage.write_text(path, "rules")
        assert path.read_text() == "rules"

    def test_write_replaces_content(self, storage, tmp_path):
        path = tmp_path / "AGENTS.md"
        path.write_text("a much longer original body")
        storage.write_text(path, "short")
        assert path.read_text() == "short"

    def test_write_leaves_no_temp_files(self, storage, tmp_path):
        storage.write_text(tmp_path / ".cursorrules", "x")
        assert sorted(p.name for p in tmp_path.iterdir()) == [".cursorrules"]

    def test_read_missing_raises(self, storage, tmp_path):
        with pytest.raises(StorageError, match="Cannot read"):
            storage.read_text(tmp_path / "missing.md")

    def test_read_directory_raises(self, storage, tmp_path):
        with pytest.raises(StorageError):
            storage.read_text(tmp_path)

    def test_write_under_file_raises(self, storage, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(StorageError, match="Cannot write"):
            storage.write_text(blocker / "RULES.md", "rules")


class TestLinksAndModes:
    @pytest.fixture
    def umask_022(self):
        old = os.umask(0o022)
        yield
        os.umask(old)

    def test_write_through_symlink_keeps_link(self, storage, tmp_path):
        (tmp_path / "CLAUDE.md").write_text("shared rules")
        link = tmp_path / "AGENTS.md"
        link.symlink_to("CLAUDE.md")

        storage.write_text(link, "updated")

        assert link.is_symlink()
        assert (tmp_path / "CLAUDE.md").read_text() == "updated"

    def test_write_to_dangling_symlink_creates_target(self, storage, tmp_path):
        link = tmp_path / "AGENTS.md"
        link.symlink_to(tmp_path / "shared" / "CLAUDE.md")

        storage.write_text(link, "new")

        assert link.is_symlink()
        assert (tmp_path / "shared" / "CLAUDE.md").read_text() == "new"

    def test_new_file_honours_umask(self, storage, tmp_path, umask_022):
        path = tmp_path / "AGENTS.md"
        storage.write_text(path, "x")
        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_replace_keeps_existing_mode(self, storage, tmp_path, umask_022):
        path = tmp_path / ".cursorrules"
        path.write_text("user rules")
        path.chmod(0o664)

        storage.write_text(path, "user rules\n\npointer")

        assert stat.S_IMODE(path.stat().st_mode) == 0o664


class TestAtomicWrite:
    def test_failed_replace_keeps_original(self, tmp_path, monkeypatch):
        path = tmp_path / "AGENTS.md"
        path.write_text("original")

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", fail_replace)

        with pytest.raises(OSError, match="disk full"):
            atomic_write(path, "new content")

        assert path.read_text() == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["AGENTS.md"]

    def test_storage_wraps_os_error(self, tmp_path, monkeypatch):
        path = tmp_path / "AGENTS.md"
        path.write_text("original")

        def fail_replace(src, dst):
            raise OSError("nope")

        monkeypatch.setattr(os, "replace", fail_replace)

        with pytest.raises(StorageError) as exc_info:
            LocalStorage().write_text(path, "new")

        assert isinstance(exc_info.value.__cause__, OSError)
        assert exc_info.value.operation == "write"
        assert path.read_text() == "original"
