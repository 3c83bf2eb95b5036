"""Text renderings of a schedule: the day listing, JSON, and an ASCII load chart."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import date, timedelta

from rotation_schedule.types import DayBlock

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def day_label(day: int, start: date | None = None) -> str:
    """Day offset, plus the calendar date when ``start`` is given.

    >>> day_label(3, date(2025, 1, 6))
    '3  Thu 2025-01-09'
    """
    if start is None:
        return str(day)
    d = start + timedelta(days=day)
    return f"{day}  {DAY_NAMES[d.weekday()]} {d.isoformat()}"


def format_blocks(
    blocks: Sequence[DayBlock],
    start: date | None = None,
    indent: int = 4,
) -> str:
    """Render the schedule listing.

    Each block is the day line followed by one indented line per credential.
    Blocks are separated by a blank line.
    """
    pad = " " * indent
    sections: list[str] = []
    for block in blocks:
        lines = [day_label(block.day, start)]
        lines.extend(f"{pad}{cid}" for cid in block.credential_ids)
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def format_ids(credential_ids: Sequence[str]) -> str:
    """One credential per line, for the "due today" view."""
    return "\n".join(credential_ids)


def blocks_to_json(
    blocks: Sequence[DayBlock],
    reset_period: int,
    max_changes_per_day: int,
    start: date | None = None,
) -> str:
    """Render the schedule as a JSON document."""
    days = []
    for block in blocks:
        entry: dict = {"day": block.day, "ids": list(block.credential_ids)}
        if start is not None:
            entry["date"] = (start + timedelta(days=block.day)).isoformat()
        days.append(entry)
    doc = {
        "reset_period": reset_period,
        "max_changes_per_day": max_changes_per_day,
        "days": days,
    }
    return json.dumps(doc, indent=2)


def show_load(
    blocks: Sequence[DayBlock],
    reset_period: int,
    max_changes_per_day: int,
    days_per_row: int = 7,
) -> str:
    """ASCII load chart for development-time verification.

    Legend: '.' = no changes, '1'-'9' = changes that day, '+' = ten or more,
    '!' = over capacity. Each row covers ``days_per_row`` consecutive days.
    """
    loads = [0] * reset_period
    for block in blocks:
        loads[block.day] = len(block)

    lines: list[str] = []
    header = "".join(str(i % 10) for i in range(days_per_row))
    lines.append(f"{'day':>6s}  {header}")

    for row_start in range(0, reset_period, days_per_row):
        row = []
        for n in loads[row_start:row_start + days_per_row]:
            if n > max_changes_per_day:
                row.append("!")
            elif n == 0:
                row.append(".")
            elif n < 10:
                row.append(str(n))
            else:
                row.append("+")
        lines.append(f"{row_start:>6d}  {''.join(row)}")

    total = sum(loads)
    peak = max(loads, default=0)
    busy = sum(1 for n in loads if n)
    lines.append(
        f"\ntotal={total} peak={peak}/{max_changes_per_day} busy_days={busy}/{reset_period}"
    )
    return "\n".join(lines)
