"""Shared types: CredentialRecord, DayBlock and the error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CredentialRecord:
    """One credential and how many days ago its password last changed."""

    credential_id: str
    age_days: int


@dataclass(frozen=True)
class DayBlock:
    """Credentials whose passwords should change on one day.

    Invariants:
        - day is in [0, reset_period)
        - credential_ids is non-empty
    """

    day: int
    credential_ids: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.credential_ids)


class RotationScheduleError(Exception):
    """Base class for every error raised by rotation_schedule."""


class ConfigurationError(RotationScheduleError, ValueError):
    """Raised when reset_period or max_changes_per_day is not a positive int."""


class CredentialValidationError(RotationScheduleError, ValueError):
    """Raised when credential input fails validation.

    ``errors`` holds every problem found, not just the first.
    """

    def __init__(self, errors: list[str], source: str | None = None) -> None:
        self.errors = list(errors)
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(
            f"Invalid credential input{where}:\n"
            + "\n".join(f"  - {e}" for e in self.errors)
        )


class InfeasibleError(RotationScheduleError):
    """Raised when the horizon cannot hold every credential."""

    def __init__(
        self,
        credential_count: int,
        reset_period: int,
        max_changes_per_day: int,
    ) -> None:
        self.credential_count = credential_count
        self.reset_period = reset_period
        self.max_changes_per_day = max_changes_per_day
        super().__init__(
            f"Infeasible: {credential_count} credentials cannot fit in "
            f"{reset_period} days at {max_changes_per_day} changes per day "
            f"(capacity {self.capacity})"
        )

    @property
    def capacity(self) -> int:
        """Total number of changes the horizon can hold."""
        return self.reset_period * self.max_changes_per_day


class ScheduleConsistencyError(RotationScheduleError):
    """Raised when a scheduling run would lose credentials.

    Unreachable when the feasibility check passed; signals a bug.
    """

    def __init__(self, stranded: list[str], reason: str) -> None:
        self.stranded = list(stranded)
        self.reason = reason
        super().__init__(
            f"Schedule inconsistent: {len(self.stranded)} credential(s) "
            f"unplaced (reason: {reason})"
        )
