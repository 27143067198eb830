"""Cumulative I/O counters of a block device."""

from typing import TYPE_CHECKING, NamedTuple

from diskio.core.models import Sample
from diskio.lib.sysfs import SysfsError, read_fields, read_int

if TYPE_CHECKING:
    from diskio.core.context import Context


# Field positions in /sys/block/<dev>/stat, a fixed kernel ABI
# (Documentation/block/stat.rst). Kernels since 4.18 append discard and
# flush fields after these eleven.
STAT_READ_IOS = 0
STAT_READ_SECTORS = 2
STAT_WRITE_IOS = 4
STAT_WRITE_SECTORS = 6
STAT_TIME_IN_QUEUE = 10
STAT_MIN_FIELDS = 11


class CounterError(Exception):
    """Error reading device counters."""

    pass


class Counters(NamedTuple):
    """Raw counters read from sysfs."""

    reads: int
    writes: int
    sectors_read: int
    sectors_written: int
    weighted_io_time: int
    sector_size: int


def device_path(device: str) -> str:
    return f"/dev/{device}"


def stat_path(device: str) -> str:
    return f"/sys/block/{device}/stat"


def sector_size_path(device: str) -> str:
    return f"/sys/block/{device}/queue/hw_sector_size"


def device_exists(device: str, context: "Context") -> bool:
    """True if /dev/<device> is a block special file."""
    if not device or "/" in device:
        return False
    return context.is_block_device(device_path(device))


def read_counters(device: str, context: "Context") -> Counters:
    """
    Read the current counters of a block device.

    The sector size is read from the same device as the stat counters.

    Args:
        device: Device name without /dev/, e.g. "sda"
        context: Execution context

    Returns:
        Counters for the device

    Raises:
        CounterError: If sysfs attributes are missing or malformed
    """
    try:
        fields = read_fields(stat_path(device), context=context, min_fields=STAT_MIN_FIELDS)
        sector_size = read_int(sector_size_path(device), context=context)
    except SysfsError as e:
        raise CounterError(f"Unable to read counters for {device}: {e}")

    if sector_size <= 0:
        raise CounterError(f"Invalid sector size for {device}: {sector_size}")

    return Counters(
        reads=fields[STAT_READ_IOS],
        writes=fields[STAT_WRITE_IOS],
        sectors_read=fields[STAT_READ_SECTORS],
        sectors_written=fields[STAT_WRITE_SECTORS],
        weighted_io_time=fields[STAT_TIME_IN_QUEUE],
        sector_size=sector_size,
    )


def to_sample(counters: Counters, timestamp: int) -> Sample:
    """Convert raw counters into a Sample with byte totals."""
    return Sample(
        timestamp=timestamp,
        transactions=counters.reads + counters.writes,
        read_bytes=counters.sectors_read * counters.sector_size,
        written_bytes=counters.sectors_written * counters.sector_size,
        weighted_io_time=counters.weighted_io_time,
    )
