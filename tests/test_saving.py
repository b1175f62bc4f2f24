"""Test reading and atomically writing document files."""

import errno
import os
import tempfile

import pytest

from emed.storage import describe_save_error, read_file, write_file_atomic


def test_write_file_atomic_writes_utf8():
    """Content is written as UTF-8 and the byte count is returned."""
    with tempfile.TemporaryDirectory() as tmpdir:
        filename = os.path.join(tmpdir, "out.txt")
        written = write_file_atomic(filename, "héllo 世界\n")
        assert written == len("héllo 世界\n".encode('utf-8'))
        with open(filename, 'rb') as f:
            assert f.read() == "héllo 世界\n".encode('utf-8')
        # No temporary files are left behind
        assert os.listdir(tmpdir) == ["out.txt"]


def test_write_file_atomic_replaces_existing_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        filename = os.path.join(tmpdir, "out.rs")
        with open(filename, 'w', encoding='utf-8') as f:
            f.write("old content that is longer than the new one")
        write_file_atomic(filename, "new")
        assert read_file(filename) == "new"
        assert os.listdir(tmpdir) == ["out.rs"]


def test_write_file_atomic_missing_directory_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        filename = os.path.join(tmpdir, "missing", "out.txt")
        with pytest.raises(OSError):
            write_file_atomic(filename, "data")
        assert os.listdir(tmpdir) == []


def test_write_failure_keeps_original_and_cleans_up(monkeypatch):
    """A failing rename leaves the old file intact and removes the temp file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        filename = os.path.join(tmpdir, "keep.txt")
        with open(filename, 'w', encoding='utf-8') as f:
            f.write("original")

        def failing_replace(src, dst):
            raise OSError(errno.ENOSPC, "No space left on device")

        monkeypatch.setattr("emed.storage.os.replace", failing_replace)
        with pytest.raises(OSError):
            write_file_atomic(filename, "replacement")
        assert read_file(filename) == "original"
        assert os.listdir(tmpdir) == ["keep.txt"]


def test_read_file_preserves_line_endings():
    with tempfile.TemporaryDirectory() as tmpdir:
        filename = os.path.join(tmpdir, "crlf.txt")
        with open(filename, 'wb') as f:
            f.write(b"one\r\ntwo\n")
        assert read_file(filename) == "one\r\ntwo\n"


def test_read_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        read_file("/nonexistent/emed/file.txt")


def test_describe_save_error():
    assert describe_save_error("a.txt", PermissionError(errno.EACCES, "denied")) == \
        "Error: Permission denied saving a.txt"
    assert describe_save_error("a.txt", OSError(errno.ENOSPC, "full")) == \
        "Error: No space left on device"
    assert describe_save_error("a.txt", OSError(errno.EROFS, "read-only")) == \
        "Error: Cannot save to a.txt"
