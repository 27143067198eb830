"""Rate computation between two samples of the same device."""

from diskio.core.fixedpoint import DEFAULT_PRECISION, divide, is_negative
from diskio.core.models import FIRST_RUN, FirstRun, Metrics, Sample

BYTES_PER_KB = 1024
MS_PER_SECOND = 1000


class IntervalTooShort(Exception):
    """Samples are less than one second apart."""

    def __init__(self, deltatime: int):
        super().__init__(f"interval too short: {deltatime}s since previous check")
        self.deltatime = deltatime


def compute(
    prev: Sample | None,
    cur: Sample,
    now: int | None = None,
    precision: int = DEFAULT_PRECISION,
) -> Metrics | FirstRun:
    """
    Derive per-second rates from the previous and current samples.

    Args:
        prev: Stored sample, or None when the device has no history
        cur: Sample just read from the device
        now: Time of the current sample (default: cur.timestamp)
        precision: Fractional digits kept by the divider

    Returns:
        Metrics, or FIRST_RUN when prev is None

    Raises:
        IntervalTooShort: If no whole second passed since prev
    """
    if prev is None:
        return FIRST_RUN

    if now is None:
        now = cur.timestamp

    deltatime = now - prev.timestamp
    if deltatime <= 0:
        raise IntervalTooShort(deltatime)

    delta_transactions = cur.transactions - prev.transactions
    delta_read = cur.read_bytes - prev.read_bytes
    delta_written = cur.written_bytes - prev.written_bytes
    delta_wio = cur.weighted_io_time - prev.weighted_io_time

    values = {
        "tps": divide(delta_transactions, deltatime, precision),
        "kb_read": divide(delta_read, deltatime * BYTES_PER_KB, precision),
        "kb_written": divide(delta_written, deltatime * BYTES_PER_KB, precision),
        "util_pct": divide(delta_wio * 100, deltatime * MS_PER_SECOND, precision),
    }

    # A counter going backwards means reboot or wrap, not negative I/O.
    clamped = [name for name, value in values.items() if is_negative(value)]
    for name in clamped:
        values[name] = "0"

    return Metrics(
        **values,
        deltatime=deltatime,
        delta_transactions=delta_transactions,
        delta_read_bytes=delta_read,
        delta_written_bytes=delta_written,
        delta_weighted_io_time=delta_wio,
        clamped=clamped,
    )
