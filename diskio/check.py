"""
Report block device I/O throughput and utilisation to Nagios/Opsview/OMD.

Works like iostat over a flexible timeframe: the counters of the device are
compared with the ones stored by the previous run, so the check needs a
state file per device. It prints transactions per second (tps), kilobytes
per second read (KB_read/s) and written (KB_written/s), and the I/O
utilisation percentage.

Exit codes:
    0: OK
    1: WARNING (a rate reached its warning level)
    2: CRITICAL (a rate reached its critical level)
    3: UNKNOWN (usage or configuration error, interval too short,
       counters or state file unreadable)
"""

import argparse
from pathlib import Path

from diskio import __version__
from diskio.core.config import ConfigError, load_config
from diskio.core.context import Context
from diskio.core.counters import CounterError, device_exists, read_counters, to_sample
from diskio.core.fixedpoint import DivisionByZero
from diskio.core.logging import CheckLogger, LogError
from diskio.core.models import FIRST_RUN, Status, Thresholds
from diskio.core.output import Output
from diskio.core.rates import IntervalTooShort, compute
from diskio.core.store import SampleStore, StoreError
from diskio.core.thresholds import ThresholdError, evaluate, parse_thresholds, validate


class UsageError(Exception):
    """Missing or malformed command-line arguments."""

    pass


class PluginArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors instead of exiting with 2."""

    def error(self, message: str):
        raise UsageError(message)


def create_parser() -> PluginArgumentParser:
    """Create the argument parser."""
    parser = PluginArgumentParser(
        prog="check_disk_io",
        add_help=False,
        description=(
            "Show the I/O usage of a disk, calculated like iostat but over the "
            "time since the previous check. Reports transactions per second "
            "(tps), kilobytes per second read from the disk (KB_read/s) and "
            "written to the disk (KB_written/s)."
        ),
    )
    parser.add_argument(
        "-d", "--device",
        help="Device to be checked, without the full path (e.g. sda)",
    )
    parser.add_argument(
        "-w", "--warning",
        metavar="TPS,READ,WRTN",
        help="WARNING levels for tps, KB_read/s and KB_written/s",
    )
    parser.add_argument(
        "-c", "--critical",
        metavar="TPS,READ,WRTN",
        help="CRITICAL levels for tps, KB_read/s and KB_written/s",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show deltas after the status line")
    parser.add_argument(
        "--format", choices=["nagios", "json"], default="nagios", help="Output format (default: nagios)"
    )
    parser.add_argument("--state-dir", help="Directory for per-device state files")
    parser.add_argument("--config", type=Path, help="YAML config file")
    parser.add_argument("--log-dir", help="Write a JSONL run log under this directory")
    parser.add_argument(
        "--no-lock", action="store_true", help="Do not lock the state file while updating it"
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show this help and exit")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    return parser


def usage_error(output: Output, parser: argparse.ArgumentParser, message: str, fmt: str) -> int:
    output.error(f"ERROR: {message}")
    output.render(fmt, usage=parser.format_help())
    return Status.UNKNOWN


def measure(
    device: str,
    store: SampleStore,
    context: Context,
    precision: int,
    output: Output,
    logger: CheckLogger,
    warning: Thresholds,
    critical: Thresholds,
    verbose: bool = False,
) -> None:
    """
    Take a sample, replace the stored one and record the result in output.

    The current counters are stored even when the previous record cannot
    be used, so a corrupt state file is repaired by the next run.
    """
    try:
        with store.locked(device):
            try:
                prev = store.load(device)
                load_error = None
            except StoreError as e:
                prev, load_error = None, e
            counters = read_counters(device, context)
            cur = to_sample(counters, context.now())
            # Stored before validating the interval so the next run
            # always measures against the latest counters.
            store.store(device, cur)

        if load_error is not None:
            logger.warning("Replaced unusable state file", error=str(load_error))
            raise load_error
        if prev is not None:
            logger.debug("Loaded previous sample", sample=prev.fields())

        result = compute(prev, cur, precision=precision)
    except IntervalTooShort as e:
        logger.warning("Check repeated within the same second", deltatime=e.deltatime)
        output.error(f"Interval too short, {device} was checked less than a second ago")
    except (CounterError, StoreError, DivisionByZero) as e:
        logger.error(str(e))
        output.error(str(e))
    else:
        if result is FIRST_RUN:
            logger.info("No previous sample, reporting zero rates", sample=cur.fields())
            output.set_result(Status.OK, first_run=True)
        else:
            if result.clamped:
                logger.warning("Counter decreased since previous check", metrics=result.clamped)
            output.set_result(evaluate(result, warning, critical), result)
            if verbose:
                for name, value in result.deltas().items():
                    output.detail(f"{name}: {value}")
                if result.clamped:
                    output.detail(f"reset detected: {', '.join(result.clamped)}")
                output.detail(f"state file: {store.path_for(device)}")

    logger.info(
        "Check completed",
        status=output.status.name,
        first_run=output.first_run,
        metrics=None if output.metrics is None else output.metrics.values(),
    )


def run(
    args: list[str],
    output: Output,
    context: Context,
    store: SampleStore | None = None,
) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context
        store: Sample store (default: built from the configuration)

    Returns:
        0 = OK, 1 = WARNING, 2 = CRITICAL, 3 = UNKNOWN
    """
    parser = create_parser()
    try:
        opts = parser.parse_args(args)
    except UsageError as e:
        return usage_error(output, parser, str(e), "nagios")

    if opts.help:
        print(parser.format_help())
        return Status.UNKNOWN
    if opts.version:
        print(f"check_disk_io {__version__}")
        return Status.OK

    fmt = opts.format

    # Validate everything before touching counters or state
    if not opts.device or not device_exists(opts.device, context):
        return usage_error(output, parser, "Device incorrectly specified", fmt)

    try:
        warning = parse_thresholds(opts.warning, "warning")
        critical = parse_thresholds(opts.critical, "critical")
        validate(warning, critical)
    except ThresholdError as e:
        return usage_error(output, parser, str(e), fmt)

    try:
        config = load_config(opts.config)
    except ConfigError as e:
        output.error(f"Configuration error: {e}")
        output.render(fmt)
        return output.exit_code

    if store is None:
        store = SampleStore(
            state_dir=opts.state_dir or config.state_dir,
            prefix=config.state_prefix,
            context=context,
            use_lock=config.lock and not opts.no_lock,
        )

    log_dir = opts.log_dir or config.log_dir
    device = opts.device
    output.emit({
        "device": device,
        "warning": str(warning),
        "critical": str(critical),
        "state_file": store.path_for(device),
    })

    try:
        with CheckLogger(device, Path(log_dir) if log_dir else None) as logger:
            measure(
                device, store, context, config.precision, output, logger,
                warning, critical, verbose=opts.verbose,
            )
    except LogError as e:
        output.error(str(e))

    output.render(fmt)
    return output.exit_code
