"""Data types shared by the check components."""

from dataclasses import dataclass, field
from enum import IntEnum


class Status(IntEnum):
    """Plugin status, valued as the exit code the supervisor expects."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


@dataclass(frozen=True)
class Sample:
    """Point-in-time snapshot of one device's cumulative counters."""

    timestamp: int
    transactions: int
    read_bytes: int
    written_bytes: int
    weighted_io_time: int

    def fields(self) -> tuple[int, int, int, int, int]:
        """Fields in state file order."""
        return (
            self.timestamp,
            self.transactions,
            self.read_bytes,
            self.written_bytes,
            self.weighted_io_time,
        )


@dataclass(frozen=True)
class Thresholds:
    """Levels for tps, KB read/s and KB written/s."""

    tps: int
    kb_read: int
    kb_written: int

    def __iter__(self):
        return iter((self.tps, self.kb_read, self.kb_written))

    def __str__(self) -> str:
        return f"{self.tps},{self.kb_read},{self.kb_written}"


@dataclass
class Metrics:
    """
    Rates derived from two samples.

    Values are decimal strings produced by fixed-point division, so the
    integer part compared against thresholds is exact.
    """

    tps: str
    kb_read: str
    kb_written: str
    util_pct: str
    deltatime: int
    delta_transactions: int
    delta_read_bytes: int
    delta_written_bytes: int
    delta_weighted_io_time: int
    clamped: list[str] = field(default_factory=list)

    def values(self) -> dict[str, str]:
        """Metric values keyed by name."""
        return {
            "tps": self.tps,
            "kb_read": self.kb_read,
            "kb_written": self.kb_written,
            "util_pct": self.util_pct,
        }

    def deltas(self) -> dict[str, int]:
        """Raw counter deltas keyed by name."""
        return {
            "deltatime": self.deltatime,
            "transactions": self.delta_transactions,
            "read_bytes": self.delta_read_bytes,
            "written_bytes": self.delta_written_bytes,
            "weighted_io_time": self.delta_weighted_io_time,
        }


class FirstRun:
    """Marker for a run with no previous sample."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "FIRST_RUN"


FIRST_RUN = FirstRun()
