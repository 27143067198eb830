"""Warning/critical levels and status evaluation."""

from diskio.core.fixedpoint import integer_part
from diskio.core.models import Metrics, Status, Thresholds

THRESHOLD_NAMES = ("tps", "kb_read", "kb_written")


class ThresholdError(Exception):
    """Invalid warning or critical levels."""

    pass


def parse_thresholds(text: str | None, label: str = "threshold") -> Thresholds:
    """
    Parse a "<tps>,<kb_read>,<kb_written>" triple.

    Args:
        text: Comma-separated levels
        label: Name used in error messages ("warning" or "critical")

    Returns:
        Parsed Thresholds

    Raises:
        ThresholdError: If a component is missing, negative or not an integer
    """
    if not text:
        raise ThresholdError("You must specify all warning and critical levels")

    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3 or not all(parts):
        raise ThresholdError(
            f"{label} levels must be <tps>,<read>,<wrtn>, got {text!r}"
        )

    values = []
    for name, part in zip(THRESHOLD_NAMES, parts):
        if not (part.isascii() and part.isdigit()):
            raise ThresholdError(
                f"{label} level for {name} must be a non-negative integer, got {part!r}"
            )
        values.append(int(part))

    return Thresholds(*values)


def validate(warning: Thresholds, critical: Thresholds) -> None:
    """
    Check that every critical level is above its warning level.

    Raises:
        ThresholdError: If any warning level is >= the critical level
    """
    for name, warn, crit in zip(THRESHOLD_NAMES, warning, critical):
        if warn >= crit:
            raise ThresholdError(
                f"critical levels must be higher than warning levels "
                f"({name}: warning {warn} >= critical {crit})"
            )


def evaluate(metrics: Metrics, warning: Thresholds, critical: Thresholds) -> Status:
    """
    Classify metrics against the levels.

    CRITICAL if any of tps, KB read/s or KB written/s reaches its critical
    level, else WARNING if any reaches its warning level, else OK.
    Utilisation is not evaluated. Only the integer part of each rate is
    compared.
    """
    observed = [
        integer_part(metrics.tps),
        integer_part(metrics.kb_read),
        integer_part(metrics.kb_written),
    ]

    if any(value >= level for value, level in zip(observed, critical)):
        return Status.CRITICAL
    if any(value >= level for value, level in zip(observed, warning)):
        return Status.WARNING
    return Status.OK
