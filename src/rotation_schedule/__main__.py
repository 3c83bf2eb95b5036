"""Entry point for ``python -m rotation_schedule``."""

import sys

from rotation_schedule.cli import main

if __name__ == "__main__":
    sys.exit(main())
