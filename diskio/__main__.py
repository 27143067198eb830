"""Allow running as python -m diskio."""

import sys

from diskio.cli import main

sys.exit(main())
