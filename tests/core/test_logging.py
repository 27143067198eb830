"""Tests for logging module."""

import json
from datetime import date

import pytest

from diskio.core.logging import CheckLogger, LogError, get_log_path


class TestGetLogPath:
    """Tests for get_log_path function."""

    def test_returns_path_with_date_and_check(self, tmp_path):
        """Returns path in format {base}/{date}/{check}.jsonl."""
        path = get_log_path(tmp_path / "logs")

        today = date.today().isoformat()
        assert path == tmp_path / "logs" / today / "check_disk_io.jsonl"


class TestCheckLogger:
    """Tests for CheckLogger class."""

    def test_logs_to_file(self, tmp_path):
        """Writes log entries to JSONL file."""
        logger = CheckLogger("sda", log_dir=tmp_path)

        logger.info("Check completed", status="OK")
        logger.close()

        entry = json.loads(logger.log_path.read_text().strip())
        assert entry["level"] == "info"
        assert entry["message"] == "Check completed"
        assert entry["check"] == "check_disk_io"
        assert entry["device"] == "sda"
        assert entry["status"] == "OK"

    def test_logs_multiple_levels(self, tmp_path):
        """Logs debug, info, warning, error levels."""
        with CheckLogger("sda", log_dir=tmp_path) as logger:
            logger.debug("Debug msg")
            logger.info("Info msg")
            logger.warning("Warning msg")
            logger.error("Error msg")

        lines = logger.log_path.read_text().strip().split("\n")
        assert [json.loads(line)["level"] for line in lines] == ["debug", "info", "warning", "error"]

    def test_appends_across_runs(self, tmp_path):
        with CheckLogger("sda", log_dir=tmp_path) as logger:
            logger.info("first")
        with CheckLogger("sda", log_dir=tmp_path) as logger:
            logger.info("second")

        assert len(logger.log_path.read_text().strip().split("\n")) == 2

    def test_disabled_without_log_dir(self, tmp_path):
        """No log directory means nothing is written."""
        logger = CheckLogger("sda")

        logger.error("not written")
        logger.close()

        assert logger.enabled is False
        assert logger.log_path is None

    def test_unwritable_log_dir_raises_log_error(self, tmp_path):
        """A log dir that is a regular file fails with LogError."""
        not_a_dir = tmp_path / "logfile"
        not_a_dir.write_text("")

        with CheckLogger("sda", log_dir=not_a_dir) as logger:
            with pytest.raises(LogError, match="Cannot write log file"):
                logger.info("lost")

    def test_debug_entries(self, tmp_path):
        with CheckLogger("sda", log_dir=tmp_path) as logger:
            logger.debug("Loaded previous sample", sample=[1000, 100, 512000, 0, 500])

        entry = json.loads(logger.log_path.read_text())
        assert entry["level"] == "debug"
        assert entry["sample"] == [1000, 100, 512000, 0, 500]
