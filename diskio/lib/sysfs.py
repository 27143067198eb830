"""Sysfs read helpers for block device attributes."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from diskio.core.context import Context


class SysfsError(Exception):
    """Error reading a sysfs attribute."""

    pass


def read_text(
    path: str,
    context: "Context | None" = None,
) -> str:
    """
    Read a sysfs attribute as text.

    Args:
        path: Path to the attribute
        context: Execution context (for testing)

    Returns:
        Attribute contents with surrounding whitespace removed

    Raises:
        SysfsError: If the attribute cannot be read
    """
    if context is None:
        from diskio.core.context import Context
        context = Context()

    try:
        return context.read_file(path).strip()
    except FileNotFoundError:
        raise SysfsError(f"File not found: {path}")
    except OSError as e:
        raise SysfsError(f"Cannot read {path}: {e}")


def read_int(
    path: str,
    context: "Context | None" = None,
) -> int:
    """
    Read a sysfs attribute holding a single integer.

    Args:
        path: Path to the attribute
        context: Execution context (for testing)

    Returns:
        Integer value

    Raises:
        SysfsError: If the attribute is missing or not an integer
    """
    text = read_text(path, context=context)
    try:
        return int(text)
    except ValueError:
        raise SysfsError(f"Expected an integer in {path}, got {text!r}")


def read_fields(
    path: str,
    context: "Context | None" = None,
    min_fields: int = 0,
) -> list[int]:
    """
    Read a sysfs attribute holding whitespace-separated integers.

    Args:
        path: Path to the attribute
        context: Execution context (for testing)
        min_fields: Minimum number of fields expected

    Returns:
        List of integer fields in file order

    Raises:
        SysfsError: If the attribute is missing, short or not numeric
    """
    text = read_text(path, context=context)
    try:
        fields = [int(f) for f in text.split()]
    except ValueError:
        raise SysfsError(f"Non-numeric field in {path}: {text!r}")

    if len(fields) < min_fields:
        raise SysfsError(
            f"Expected at least {min_fields} fields in {path}, got {len(fields)}"
        )

    return fields
