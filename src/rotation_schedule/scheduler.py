"""Rotation scheduler: spread password changes across the reset period.

Credentials start on their target day. A single pass over days 0..N-1 then
moves work from overfull days onto earlier days with spare capacity, balances
each day against the least loaded earlier day, and queues whatever still does
not fit for the next day with room.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from rotation_schedule.buckets import DayBucketMap
from rotation_schedule.config import SchedulerConfig
from rotation_schedule.heap import OccupancyHeap
from rotation_schedule.schema import validate_records
from rotation_schedule.types import (
    CredentialRecord,
    CredentialValidationError,
    DayBlock,
    InfeasibleError,
    ScheduleConsistencyError,
)

logger = logging.getLogger(__name__)

CredentialInput = CredentialRecord | tuple[int, str]


def as_records(credentials: Iterable[CredentialInput]) -> list[CredentialRecord]:
    """Normalise (age, id) pairs and CredentialRecords to records.

    Raises CredentialValidationError listing every item that is not a record
    or a two-element pair.
    """
    records: list[CredentialRecord] = []
    errors: list[str] = []
    for i, item in enumerate(credentials):
        if isinstance(item, CredentialRecord):
            records.append(item)
            continue
        try:
            age_days, credential_id = item
        except (TypeError, ValueError):
            errors.append(
                f"credential {i}: expected (age_days, id) pair, got {item!r}"
            )
            continue
        records.append(
            CredentialRecord(credential_id=credential_id, age_days=age_days)
        )
    if errors:
        raise CredentialValidationError(errors)
    return records


def check_feasible(credential_count: int, config: SchedulerConfig) -> None:
    """Raise InfeasibleError if the horizon cannot hold every credential."""
    if credential_count > config.capacity:
        raise InfeasibleError(
            credential_count=credential_count,
            reset_period=config.reset_period,
            max_changes_per_day=config.max_changes_per_day,
        )


class Scheduler:
    """Owns the state of one scheduling pass.

    The bucket map, occupancy heap and carry-over queue are rebuilt on every
    call to ``run``; nothing survives between runs.
    """

    def __init__(self, config: SchedulerConfig | None = None) -> None:
        self.config = config if config is not None else SchedulerConfig()
        self._buckets = DayBucketMap(reset_period=self.config.reset_period)
        self._heap = OccupancyHeap()
        # (original day, credential id), earliest original day first
        self._carry: deque[tuple[int, str]] = deque()
        self.carried_late = 0

    def run(self, credentials: Iterable[CredentialInput]) -> list[DayBlock]:
        """Compute the schedule.

        Args:
            credentials: (age_days, credential_id) pairs or CredentialRecords.

        Returns:
            Non-empty days in increasing order.

        Raises:
            CredentialValidationError: If any age or identifier is invalid.
            InfeasibleError: If max_changes_per_day * reset_period is smaller
                than the number of credentials.
            ScheduleConsistencyError: If a credential could not be placed.
        """
        records = as_records(credentials)
        errors = validate_records(records)
        if errors:
            raise CredentialValidationError(errors)
        check_feasible(len(records), self.config)

        self._buckets = DayBucketMap.from_records(records, self.config.reset_period)
        self._heap = OccupancyHeap()
        self._carry = deque()
        self.carried_late = 0

        for day in range(self.config.reset_period):
            self._distribute(day)

        if self._carry:
            raise ScheduleConsistencyError(
                [cid for _, cid in self._carry],
                "carry-over queue not empty after the last day",
            )
        if self._buckets.total != len(records):
            raise ScheduleConsistencyError(
                [], f"placed {self._buckets.total} of {len(records)} credentials"
            )

        if self.carried_late:
            logger.warning(
                "%d credential(s) scheduled after their target day "
                "(max %d changes per day)",
                self.carried_late,
                self.config.max_changes_per_day,
            )
        blocks = list(self._buckets.blocks())
        logger.debug(
            "Scheduled %d credentials over %d days (reset_period=%d, "
            "max_changes_per_day=%d, peak=%d)",
            len(records),
            len(blocks),
            self.config.reset_period,
            self.config.max_changes_per_day,
            max((len(b) for b in blocks), default=0),
        )
        return blocks

    def _distribute(self, day: int) -> None:
        """Settle one day. Earlier days are already settled."""
        limit = self.config.max_changes_per_day
        buckets = self._buckets

        # Overflow goes to the least loaded earlier day with room
        while self._heap and buckets.size(day) > limit:
            self._shift_to_earlier(day)

        # Nothing earlier has room: queue the overflow behind older residue
        if buckets.size(day) > limit or self._carry:
            self._carry.extend((day, cid) for cid in buckets.take_all(day))
            while self._carry and buckets.size(day) < limit:
                origin, cid = self._carry.popleft()
                if origin < day:
                    self.carried_late += 1
                buckets.push(day, cid)

        while self._heap and buckets.size(day) - self._heap.min_occupancy() > 1:
            self._shift_to_earlier(day)

        if buckets.size(day) < limit:
            self._heap.push(day, buckets.size(day))

    def _shift_to_earlier(self, day: int) -> None:
        _, earlier = self._heap.pop()
        self._buckets.move(day, earlier)
        occupancy = self._buckets.size(earlier)
        if occupancy < self.config.max_changes_per_day:
            self._heap.push(earlier, occupancy)


def schedule(
    credentials: Iterable[CredentialInput],
    reset_period: int = 365,
    max_changes_per_day: int = 5,
) -> list[DayBlock]:
    """Schedule credentials with the given parameters.

    Shorthand for ``Scheduler(SchedulerConfig(...)).run(credentials)``.
    """
    config = SchedulerConfig(
        reset_period=reset_period, max_changes_per_day=max_changes_per_day
    )
    return Scheduler(config).run(credentials)


def due_on(blocks: Iterable[DayBlock], day: int = 0) -> tuple[str, ...]:
    """Credential IDs scheduled for ``day``; day 0 is today."""
    for block in blocks:
        if block.day == day:
            return block.credential_ids
    return ()
