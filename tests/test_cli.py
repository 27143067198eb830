"""Tests for CLI."""

import subprocess
import sys
from pathlib import Path

from diskio.cli import main

PROJECT_ROOT = Path(__file__).parent.parent


def run_cli(*args: str) -> subprocess.CompletedProcess:
    """Run check_disk_io CLI with arguments."""
    return subprocess.run(
        [sys.executable, "-m", "diskio"] + list(args),
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
    )


class TestCLI:
    """Tests for check_disk_io CLI."""

    def test_help_displays(self):
        """-h shows usage and exits UNKNOWN like other plugins."""
        result = run_cli("-h")

        assert result.returncode == 3
        assert "check_disk_io" in result.stdout
        assert "--device" in result.stdout
        assert "--critical" in result.stdout

    def test_version_displays(self):
        """--version shows version."""
        result = run_cli("--version")

        assert result.returncode == 0
        assert "0.1.0" in result.stdout

    def test_no_arguments_is_usage_error(self):
        result = run_cli()

        assert result.returncode == 3
        assert result.stdout.startswith("UNKNOWN - ERROR: Device incorrectly specified")

    def test_bad_option_does_not_exit_2(self):
        """argparse errors must not be mistaken for CRITICAL."""
        result = run_cli("--nope")

        assert result.returncode == 3
        assert "unrecognized arguments" in result.stdout

    def test_nonexistent_device(self):
        result = run_cli("-d", "nonexistent_disk_xyz", "-w", "1,2,3", "-c", "4,5,6")

        assert result.returncode == 3
        assert "Device incorrectly specified" in result.stdout


class TestMain:
    """Tests for main() called in-process."""

    def test_returns_exit_code(self, capsys):
        assert main(["--version"]) == 0
        assert "check_disk_io" in capsys.readouterr().out

    def test_returns_plain_int(self, capsys):
        code = main(["-h"])

        assert code == 3
        assert type(code) is int
