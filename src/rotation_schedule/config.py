"""Scheduler parameters and their environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from rotation_schedule.types import ConfigurationError

DEFAULT_RESET_PERIOD = 365
DEFAULT_MAX_CHANGES_PER_DAY = 5

ENV_RESET_PERIOD = "ROTATION_RESET_PERIOD"
ENV_MAX_CHANGES_PER_DAY = "ROTATION_MAX_CHANGES_PER_DAY"


def _require_positive_int(value: object, name: str) -> None:
    # bool is an int subclass; True is not a period
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"{name} must be an integer, got {type(value).__name__} {value!r}"
        )
    if value < 1:
        raise ConfigurationError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class SchedulerConfig:
    """Immutable scheduling parameters.

    reset_period: maximum allowed password age in days; also the number of
        day offsets in the schedule horizon.
    max_changes_per_day: daily capacity for password changes.
    """

    reset_period: int = DEFAULT_RESET_PERIOD
    max_changes_per_day: int = DEFAULT_MAX_CHANGES_PER_DAY

    def __post_init__(self) -> None:
        _require_positive_int(self.reset_period, "reset_period")
        _require_positive_int(self.max_changes_per_day, "max_changes_per_day")

    @property
    def capacity(self) -> int:
        """Total number of changes the horizon can hold."""
        return self.reset_period * self.max_changes_per_day

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SchedulerConfig:
        """Build a config from ROTATION_* variables, defaulting when unset.

        Raises ConfigurationError if a variable is set but not an integer.
        """
        if environ is None:
            environ = os.environ
        return cls(
            reset_period=_env_int(environ, ENV_RESET_PERIOD, DEFAULT_RESET_PERIOD),
            max_changes_per_day=_env_int(
                environ, ENV_MAX_CHANGES_PER_DAY, DEFAULT_MAX_CHANGES_PER_DAY
            ),
        )

    def replace(
        self,
        reset_period: int | None = None,
        max_changes_per_day: int | None = None,
    ) -> SchedulerConfig:
        """Copy with any non-None argument overriding the current value."""
        return SchedulerConfig(
            reset_period=(
                self.reset_period if reset_period is None else reset_period
            ),
            max_changes_per_day=(
                self.max_changes_per_day
                if max_changes_per_day is None
                else max_changes_per_day
            ),
        )


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(
            f"{key} must be an integer, got {raw!r}"
        ) from None
