"""Shared test fixtures and data loading for rotation-schedule.

Scenario data lives in data/fixtures/scenarios/ as JSON files. This module
loads that data and exposes helper functions + pytest fixtures for the tests.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"
AGES_TXT = FIXTURES_DIR / "ages.txt"
CREDENTIALS_JSON = FIXTURES_DIR / "credentials.json"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def as_pairs(credentials: list[list]) -> list[tuple[int, str]]:
    """JSON [[age, id], ...] -> [(age, id), ...]."""
    return [(age, cid) for age, cid in credentials]


def block_pairs(blocks) -> list[list]:
    """Blocks in the fixture format: [[day, [ids...]], ...]."""
    return [[b.day, list(b.credential_ids)] for b in blocks]


def placed_ids(blocks) -> list[str]:
    """All scheduled IDs, flattened in day order."""
    return [cid for b in blocks for cid in b.credential_ids]


def loads(blocks, reset_period: int) -> list[int]:
    """Per-day counts over the whole horizon."""
    counts = [0] * reset_period
    for b in blocks:
        counts[b.day] = len(b.credential_ids)
    return counts


def day_of(blocks) -> dict[str, int]:
    """credential_id -> scheduled day."""
    return {cid: b.day for b in blocks for cid in b.credential_ids}


def uniform_ages(count: int, spread: int) -> list[tuple[int, str]]:
    """``count`` credentials with ages cycling through 0..spread-1."""
    return [(i % spread, f"cred-{i:04d}") for i in range(count)]


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def default_config():
    from rotation_schedule.config import SchedulerConfig

    return SchedulerConfig()


@pytest.fixture
def tight_config():
    """Ten-day horizon, two changes per day."""
    from rotation_schedule.config import SchedulerConfig

    return SchedulerConfig(reset_period=10, max_changes_per_day=2)


@pytest.fixture
def ages_txt() -> Path:
    return AGES_TXT


@pytest.fixture
def credentials_json() -> Path:
    return CREDENTIALS_JSON
