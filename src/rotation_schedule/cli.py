"""Command line interface.

Usage:
    rotation-schedule schedule ages.txt             # Full schedule
    rotation-schedule due ages.txt                  # Credentials due today
    find-ages | rotation-schedule schedule -        # Read from stdin
    rotation-schedule --help                        # Show help
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from datetime import date

from rotation_schedule import __version__
from rotation_schedule.config import SchedulerConfig
from rotation_schedule.loaders import load_credentials, parse_lines
from rotation_schedule.render import (
    blocks_to_json,
    format_blocks,
    format_ids,
    show_load,
)
from rotation_schedule.scheduler import Scheduler, due_on
from rotation_schedule.types import (
    ConfigurationError,
    CredentialRecord,
    CredentialValidationError,
    InfeasibleError,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 2
EXIT_INFEASIBLE = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rotation-schedule",
        description="Spread password changes evenly across the reset period",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Text ('<age_days> <id>' per line) or .json file; '-' for stdin",
    )
    common.add_argument(
        "--reset-period",
        type=int,
        default=None,
        help="Maximum password age in days (default: $ROTATION_RESET_PERIOD or 365)",
    )
    common.add_argument(
        "--max-per-day",
        type=int,
        default=None,
        help="Maximum changes per day (default: $ROTATION_MAX_CHANGES_PER_DAY or 5)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    schedule_parser = subparsers.add_parser(
        "schedule", parents=[common], help="Print the full rotation schedule"
    )
    schedule_parser.add_argument(
        "--format", choices=["text", "json"], default="text", help="Output format"
    )
    schedule_parser.add_argument(
        "--start-date",
        type=date.fromisoformat,
        default=None,
        help="Date of day 0 (YYYY-MM-DD); adds calendar dates to the output",
    )
    schedule_parser.add_argument(
        "--chart", action="store_true", help="Append an ASCII per-day load chart"
    )

    due_parser = subparsers.add_parser(
        "due", parents=[common], help="Print credentials due on one day"
    )
    due_parser.add_argument(
        "--day", type=int, default=0, help="Day offset to show (default: 0, today)"
    )

    return parser


def _read_input(source: str) -> list[CredentialRecord]:
    if source == "-":
        return parse_lines(sys.stdin, source="<stdin>")
    return load_credentials(source)


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return EXIT_INVALID

    try:
        config = SchedulerConfig.from_env().replace(
            reset_period=args.reset_period,
            max_changes_per_day=args.max_per_day,
        )
        records = _read_input(args.input)
        blocks = Scheduler(config).run(records)
    except (ConfigurationError, CredentialValidationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID
    except (OSError, json.JSONDecodeError) as e:
        print(f"error: cannot read {args.input}: {e}", file=sys.stderr)
        return EXIT_INVALID
    except InfeasibleError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INFEASIBLE

    if args.command == "due":
        ids = due_on(blocks, args.day)
        if ids:
            print(format_ids(ids))
        else:
            logger.info("Nothing due on day %d", args.day)
        return EXIT_OK

    if args.format == "json":
        print(
            blocks_to_json(
                blocks,
                config.reset_period,
                config.max_changes_per_day,
                start=args.start_date,
            )
        )
    else:
        print(format_blocks(blocks, start=args.start_date))

    if args.chart:
        print()
        print(show_load(blocks, config.reset_period, config.max_changes_per_day))
    return EXIT_OK
