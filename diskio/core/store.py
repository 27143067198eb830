"""Persisted per-device samples, the only memory between check runs."""

from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from diskio.core.models import Sample

if TYPE_CHECKING:
    from diskio.core.context import Context


DEFAULT_STATE_DIR = "/tmp"
DEFAULT_STATE_PREFIX = "nagios_check_disk_extended2.stat"
FIELD_SEPARATOR = ":"


class StoreError(Exception):
    """Error reading or writing a state file."""

    pass


def format_sample(sample: Sample) -> str:
    """Serialize a sample as a state file line."""
    return FIELD_SEPARATOR.join(str(v) for v in sample.fields()) + "\n"


def parse_sample(line: str) -> Sample:
    """
    Parse a state file line.

    Args:
        line: timestamp:transactions:read_bytes:written_bytes:weighted_io_time

    Returns:
        Parsed Sample

    Raises:
        StoreError: If the line does not hold five integers
    """
    parts = line.strip().split(FIELD_SEPARATOR)
    if len(parts) != 5:
        raise StoreError(f"Expected 5 fields in state record, got {len(parts)}")
    try:
        values = [int(p) for p in parts]
    except ValueError:
        raise StoreError(f"Non-numeric field in state record: {line.strip()!r}")
    return Sample(*values)


class SampleStore:
    """
    Key-value store of the last sample per device.

    Each device has one file, <state_dir>/<prefix>.<device>, holding a
    single colon-separated line. The file is replaced atomically on every
    store() and never deleted.
    """

    def __init__(
        self,
        state_dir: str = DEFAULT_STATE_DIR,
        prefix: str = DEFAULT_STATE_PREFIX,
        context: "Context | None" = None,
        use_lock: bool = True,
    ):
        if context is None:
            from diskio.core.context import Context
            context = Context()

        self.state_dir = state_dir
        self.prefix = prefix
        self.context = context
        self.use_lock = use_lock

    def path_for(self, device: str) -> str:
        """State file path for a device."""
        return str(Path(self.state_dir) / f"{self.prefix}.{device}")

    def load(self, device: str) -> Sample | None:
        """
        Load the previous sample for a device.

        Returns:
            Stored Sample, or None if there is no file or it is empty

        Raises:
            StoreError: If the file cannot be read or is malformed
        """
        path = self.path_for(device)
        try:
            content = self.context.read_file(path)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreError(f"Cannot read state file {path}: {e}")

        if not content.strip():
            return None

        return parse_sample(content)

    def store(self, device: str, sample: Sample) -> None:
        """
        Overwrite the stored sample for a device.

        Raises:
            StoreError: If the file cannot be written
        """
        path = self.path_for(device)
        try:
            self.context.write_file(path, format_sample(sample))
        except OSError as e:
            raise StoreError(f"Cannot write state file {path}: {e}")

    @contextmanager
    def locked(self, device: str) -> Iterator[None]:
        """Serialize load-then-store for a device across processes."""
        with ExitStack() as stack:
            if self.use_lock:
                lock_path = self.path_for(device) + ".lock"
                try:
                    stack.enter_context(self.context.lock(lock_path))
                except OSError as e:
                    raise StoreError(f"Cannot lock state file {lock_path}: {e}")
            yield
