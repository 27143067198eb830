"""Helpers for reading kernel block device interfaces."""

from diskio.lib.sysfs import SysfsError, read_int, read_fields

__all__ = [
    "SysfsError",
    "read_fields",
    "read_int",
]
