"""Tests for Context execution wrapper."""

import os
import time

import pytest

from diskio.core.context import Context


class TestContext:
    """Tests for execution context."""

    def test_read_file_returns_content(self, tmp_path):
        """read_file() returns file content."""
        test_file = tmp_path / "test.txt"
        test_file.write_text("test content")
        ctx = Context()
        content = ctx.read_file(str(test_file))
        assert content == "test content"

    def test_read_file_raises_on_missing(self):
        """read_file() raises FileNotFoundError for missing files."""
        ctx = Context()
        with pytest.raises(FileNotFoundError):
            ctx.read_file("/nonexistent_file_xyz")

    def test_regular_file_is_not_block_device(self, tmp_path):
        test_file = tmp_path / "sda"
        test_file.write_text("")
        ctx = Context()
        assert ctx.is_block_device(str(test_file)) is False

    def test_missing_path_is_not_block_device(self):
        assert Context().is_block_device("/dev/nonexistent_xyz") is False

    def test_write_file_creates_parents(self, tmp_path):
        target = tmp_path / "a" / "b" / "state"
        Context().write_file(str(target), "1:2:3:4:5\n")
        assert target.read_text() == "1:2:3:4:5\n"

    def test_write_file_replaces_content(self, tmp_path):
        state_dir = tmp_path / "state"
        state_dir.mkdir()
        target = state_dir / "sda"
        target.write_text("old content that is longer\n")
        Context().write_file(str(target), "new\n")
        assert target.read_text() == "new\n"
        assert os.listdir(state_dir) == ["sda"]

    def test_lock_creates_lock_file(self, tmp_path):
        lock_path = tmp_path / "locks" / "sda.lock"
        with Context().lock(str(lock_path)):
            assert lock_path.exists()

    def test_now_is_epoch_seconds(self):
        before = int(time.time())
        now = Context().now()
        assert isinstance(now, int)
        assert before <= now <= int(time.time())

