#!/usr/bin/env python
"""Visual verification report for rotation-schedule.

Run:  uv run python scripts/verify.py

Produces a formatted report showing:
  1. Target day table  -- age/period in, day out
  2. Schedule scenarios -- input, expected and actual day blocks, load chart
  3. Infeasible configurations -- rejected before scheduling
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
SCENARIOS = ROOT / "data" / "fixtures" / "scenarios"

sys.path.insert(0, str(ROOT / "src"))

from rotation_schedule.buckets import target_day
from rotation_schedule.config import SchedulerConfig
from rotation_schedule.render import show_load
from rotation_schedule.scheduler import Scheduler, schedule
from rotation_schedule.types import InfeasibleError


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


_data = _load(SCENARIOS / "scheduler.json")

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def heading(title: str):
    print()
    print(f"  {title}")
    print(f"  {'-' * (len(title) + 2)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        padded = row + [""] * (len(headers) - len(row))
        print(fmt.format(*padded))


def _fmt_blocks(blocks: list[list]) -> str:
    return "  ".join(f"{day}:{','.join(ids)}" for day, ids in blocks) or "(none)"


# ---------------------------------------------------------------------------
# Section 1: Target days
# ---------------------------------------------------------------------------
def section_target_days() -> int:
    banner("TARGET DAY")
    failures = 0
    rows = []
    for spec in _data["target_day"]:
        actual = target_day(spec["age_days"], spec["reset_period"])
        ok = actual == spec["expected"]
        failures += not ok
        rows.append([
            spec["id"],
            str(spec["age_days"]),
            str(spec["reset_period"]),
            str(spec["expected"]),
            str(actual),
            "PASS" if ok else "FAIL",
            spec["notes"],
        ])
    table(["Case", "Age", "Period", "Expected", "Actual", "", "Notes"], rows)
    return failures


# ---------------------------------------------------------------------------
# Section 2: Schedules
# ---------------------------------------------------------------------------
def section_schedules() -> int:
    banner("SCHEDULES")
    failures = 0
    for spec in _data["schedules"]:
        config = SchedulerConfig(spec["reset_period"], spec["max_changes_per_day"])
        scheduler = Scheduler(config)
        blocks = scheduler.run([(a, c) for a, c in spec["credentials"]])
        actual = [[b.day, list(b.credential_ids)] for b in blocks]
        ok = actual == spec["expected_blocks"]
        failures += not ok

        heading(f"{spec['id']}  [{'PASS' if ok else 'FAIL'}]")
        print(
            f"    reset_period={config.reset_period} "
            f"max_changes_per_day={config.max_changes_per_day} "
            f"carried_late={scheduler.carried_late}"
        )
        table(
            ["", "Blocks"],
            [
                ["input", "  ".join(f"{c}@{a}" for a, c in spec["credentials"]) or "(none)"],
                ["expected", _fmt_blocks(spec["expected_blocks"])],
                ["actual", _fmt_blocks(actual)],
            ],
        )
        if config.reset_period <= 31:
            print()
            chart = show_load(blocks, config.reset_period, config.max_changes_per_day)
            for line in chart.splitlines():
                print(f"    {line}")
    return failures


# ---------------------------------------------------------------------------
# Section 3: Infeasible
# ---------------------------------------------------------------------------
def section_infeasible() -> int:
    banner("INFEASIBLE CONFIGURATIONS")
    failures = 0
    rows = []
    for spec in _data["infeasible"]:
        creds = [(spec["age_days"], f"c{i}") for i in range(spec["credential_count"])]
        try:
            schedule(creds, spec["reset_period"], spec["max_changes_per_day"])
        except InfeasibleError as e:
            ok = e.capacity == spec["expected_capacity"]
            result = f"rejected (capacity {e.capacity})"
        else:
            ok = False
            result = "scheduled"
        failures += not ok
        rows.append([
            spec["id"],
            str(spec["credential_count"]),
            f"{spec['reset_period']} x {spec['max_changes_per_day']}",
            result,
            "PASS" if ok else "FAIL",
        ])
    table(["Case", "Count", "Period x Max", "Result", ""], rows)
    return failures


def main() -> int:
    failures = section_target_days()
    failures += section_schedules()
    failures += section_infeasible()
    banner(f"{'ALL PASS' if failures == 0 else f'{failures} FAILURE(S)'}")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
