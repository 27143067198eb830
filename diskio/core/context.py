"""Execution context for testability."""

import fcntl
import os
import stat
import tempfile
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


class Context:
    """
    Wraps external calls for testability.

    In production: touches the real filesystem and clock
    In tests: can be replaced with MockContext
    """

    def read_file(self, path: str) -> str:
        """Read file contents."""
        return Path(path).read_text()

    def is_block_device(self, path: str) -> bool:
        """Check if path is a block special file."""
        try:
            return stat.S_ISBLK(os.stat(path).st_mode)
        except OSError:
            return False

    def write_file(self, path: str, content: str) -> None:
        """
        Replace a file's contents atomically.

        The content is written to a temporary file in the same directory
        and renamed over the target, so readers see either the old or the
        new content, never a partial write.

        Args:
            path: Destination path
            content: Text to write
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(content)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @contextmanager
    def lock(self, path: str) -> Iterator[None]:
        """Hold an exclusive advisory lock on path for the duration."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "a") as f:
            fcntl.flock(f, fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(f, fcntl.LOCK_UN)

    def now(self) -> int:
        """Current time in whole seconds since the epoch (UTC)."""
        return int(time.time())
