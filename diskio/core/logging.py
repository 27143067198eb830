"""JSONL logging of check runs."""

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

CHECK_NAME = "check_disk_io"


class LogError(Exception):
    """Log file could not be opened or written."""

    pass


def get_log_path(base_path: Path, check_name: str = CHECK_NAME) -> Path:
    """
    Get the log file path for today.

    Args:
        base_path: Base directory for logs
        check_name: Name used for the file

    Returns:
        Path to the log file: {base}/{date}/{check}.jsonl
    """
    today = date.today().isoformat()
    return base_path / today / f"{check_name}.jsonl"


class CheckLogger:
    """
    JSONL logger for check runs.

    Writes one structured entry per event. Without a log directory every
    call is a no-op, so by default the check writes nothing but its state
    file.
    """

    def __init__(self, device: str | None = None, log_dir: Path | None = None):
        """
        Initialize logger.

        Args:
            device: Device being checked, added to every entry
            log_dir: Base directory for logs (None disables logging)
        """
        self.device = device
        self.log_path = get_log_path(log_dir) if log_dir is not None else None
        self._file = None

    @property
    def enabled(self) -> bool:
        return self.log_path is not None

    def _ensure_file(self) -> None:
        """Ensure log file is open."""
        if self._file is None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.log_path, "a")

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        if not self.enabled:
            return
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "check": CHECK_NAME,
            "device": self.device,
            "message": message,
            **extra,
        }
        try:
            self._ensure_file()
            self._file.write(json.dumps(entry, default=str) + "\n")
            self._file.flush()
        except OSError as e:
            raise LogError(f"Cannot write log file {self.log_path}: {e}") from e

    def debug(self, message: str, **extra: Any) -> None:
        """Log debug message."""
        self._log("debug", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        """Log info message."""
        self._log("info", message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Log warning message."""
        self._log("warning", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message."""
        self._log("error", message, **extra)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "CheckLogger":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
