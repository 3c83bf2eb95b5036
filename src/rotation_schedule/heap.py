"""Min-priority structure over days with spare capacity.

Keys are (occupancy, day), so among equally loaded days the earliest is
returned first.
"""

from __future__ import annotations

import heapq


class OccupancyHeap:
    """Heap of days keyed by bucket occupancy at insertion time.

    A day's occupancy must not change while it sits in the heap; callers pop
    a day, add to its bucket, then push it back if it still has room.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int]] = []
        self._days: set[int] = set()

    def push(self, day: int, occupancy: int) -> None:
        if day in self._days:
            raise ValueError(f"day {day} is already in the heap")
        heapq.heappush(self._heap, (occupancy, day))
        self._days.add(day)

    def pop(self) -> tuple[int, int]:
        """Remove the least occupied day. Returns (occupancy, day)."""
        occupancy, day = heapq.heappop(self._heap)
        self._days.discard(day)
        return occupancy, day

    def min_occupancy(self) -> int:
        """Occupancy of the least loaded day. IndexError if empty."""
        return self._heap[0][0]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, day: object) -> bool:
        return day in self._days

    def __repr__(self) -> str:
        return f"OccupancyHeap(entries={sorted(self._heap)})"
