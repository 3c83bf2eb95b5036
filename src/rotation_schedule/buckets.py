"""Day Bucket Map: credentials grouped by the day they fall due.

Target day arithmetic lives here too, since it is the only way credentials
enter the map.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from rotation_schedule.types import CredentialRecord, DayBlock


def target_day(age_days: int, reset_period: int) -> int:
    """Day offset on which a credential reaches ``reset_period`` days old.

    Expired credentials (age >= reset_period) are due today, day 0. A
    credential changed today (age 0) would land on ``reset_period``, one past
    the horizon; it is clamped to the last day, ``reset_period - 1``.
    """
    return min(max(0, reset_period - age_days), reset_period - 1)


@dataclass
class DayBucketMap:
    """Mutable day -> ordered credential IDs, over [0, reset_period).

    Every credential is in exactly one bucket. ``move`` is the only mutation
    after construction, so the total count never changes.
    """

    reset_period: int
    _buckets: dict[int, list[str]] = field(default_factory=dict)

    @classmethod
    def from_records(
        cls,
        records: Iterable[CredentialRecord],
        reset_period: int,
    ) -> DayBucketMap:
        """Place each record at its target day, preserving input order."""
        bucket_map = cls(reset_period=reset_period)
        for record in records:
            day = target_day(record.age_days, reset_period)
            bucket_map._buckets.setdefault(day, []).append(record.credential_id)
        return bucket_map

    def _check_day(self, day: int) -> None:
        if not 0 <= day < self.reset_period:
            raise IndexError(
                f"day {day} outside horizon [0, {self.reset_period})"
            )

    def size(self, day: int) -> int:
        """Number of credentials currently due on ``day``."""
        self._check_day(day)
        return len(self._buckets.get(day, ()))

    def ids(self, day: int) -> list[str]:
        """Copy of the credential IDs due on ``day``, in bucket order."""
        self._check_day(day)
        return list(self._buckets.get(day, ()))

    def move(self, source: int, dest: int) -> str:
        """Move the last credential of ``source`` onto the end of ``dest``."""
        self._check_day(dest)
        cid = self.pop(source)
        self.push(dest, cid)
        return cid

    def pop(self, day: int) -> str:
        """Remove and return the last credential of ``day``.

        Raises IndexError if the bucket is empty.
        """
        self._check_day(day)
        bucket = self._buckets.get(day)
        if not bucket:
            raise IndexError(f"day {day} has no credentials")
        return bucket.pop()

    def push(self, day: int, credential_id: str) -> None:
        """Append a credential to the end of ``day``."""
        self._check_day(day)
        self._buckets.setdefault(day, []).append(credential_id)

    def take_all(self, day: int) -> list[str]:
        """Empty the bucket for ``day`` and return its IDs in order."""
        self._check_day(day)
        return self._buckets.pop(day, [])

    @property
    def total(self) -> int:
        """Number of credentials across all days."""
        return sum(len(b) for b in self._buckets.values())

    def loads(self) -> list[int]:
        """Per-day counts, indexed by day offset."""
        return [self.size(day) for day in range(self.reset_period)]

    def blocks(self) -> Iterator[DayBlock]:
        """Non-empty days in increasing order."""
        for day in sorted(self._buckets):
            bucket = self._buckets[day]
            if bucket:
                yield DayBlock(day=day, credential_ids=tuple(bucket))
