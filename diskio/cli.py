"""Command-line interface for check_disk_io."""

import sys

from diskio.check import run
from diskio.core.context import Context
from diskio.core.output import Output


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    if argv is None:
        argv = sys.argv[1:]

    return int(run(argv, Output(), Context()))


if __name__ == "__main__":
    sys.exit(main())
