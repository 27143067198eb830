"""Shared test fixtures."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pytest

# Add project root to path for package imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class MockContext:
    """Mock Context for testing the check without real system access."""

    def __init__(
        self,
        file_contents: dict[str, str] | None = None,
        block_devices: list[str] | None = None,
        now: int | list[int] = 1000,
        write_error: Exception | None = None,
    ):
        self.file_contents = file_contents or {}
        self.block_devices = set(block_devices or [])
        self.times = list(now) if isinstance(now, list) else [now]
        self.write_error = write_error
        self.files_written: list[str] = []
        self.locks_taken: list[str] = []
        self.files_read: list[str] = []

    def read_file(self, path: str) -> str:
        """Return mocked file content."""
        self.files_read.append(path)
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")
        content = self.file_contents[path]
        if isinstance(content, Exception):
            raise content
        return content

    def is_block_device(self, path: str) -> bool:
        """Check if path is a mocked block device."""
        return path in self.block_devices

    def write_file(self, path: str, content: str) -> None:
        """Store content in the mocked files."""
        if self.write_error is not None:
            raise self.write_error
        self.files_written.append(path)
        self.file_contents[path] = content

    @contextmanager
    def lock(self, path: str) -> Iterator[None]:
        """Record the lock path."""
        self.locks_taken.append(path)
        yield

    def now(self) -> int:
        """Return mocked clock values in order, repeating the last one."""
        if len(self.times) > 1:
            return self.times.pop(0)
        return self.times[0]


def stat_line(
    reads: int = 0,
    sectors_read: int = 0,
    writes: int = 0,
    sectors_written: int = 0,
    time_in_queue: int = 0,
) -> str:
    """Build a /sys/block/<dev>/stat line with the fields the check reads."""
    fields = [reads, 0, sectors_read, 0, writes, 0, sectors_written, 0, 0, 0, time_in_queue]
    return " ".join(f"{f:>8}" for f in fields) + "\n"


def device_files(device: str = "sda", stat: str | None = None, sector_size: int = 512) -> dict[str, str]:
    """Mocked sysfs files for one device."""
    return {
        f"/sys/block/{device}/stat": stat if stat is not None else stat_line(),
        f"/sys/block/{device}/queue/hw_sector_size": f"{sector_size}\n",
    }


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config files and the config env var out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("CHECK_DISK_IO_CONFIG", raising=False)
    monkeypatch.setattr("diskio.core.config.SYSTEM_CONFIG", tmp_path / "etc" / "check_disk_io.yaml")
    return home


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


def load_fixture(category: str, name: str) -> str:
    """Load a fixture file by category and name."""
    fixture_path = FIXTURES_DIR / category / name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text()
