"""rotation-schedule: Capacity-bounded password rotation planning."""

__version__ = "0.1.0"

from rotation_schedule.buckets import DayBucketMap, target_day
from rotation_schedule.config import SchedulerConfig
from rotation_schedule.heap import OccupancyHeap
from rotation_schedule.scheduler import Scheduler, check_feasible, due_on, schedule
from rotation_schedule.types import (
    ConfigurationError,
    CredentialRecord,
    CredentialValidationError,
    DayBlock,
    InfeasibleError,
    RotationScheduleError,
    ScheduleConsistencyError,
)

__all__ = [
    "ConfigurationError",
    "CredentialRecord",
    "CredentialValidationError",
    "DayBlock",
    "DayBucketMap",
    "InfeasibleError",
    "OccupancyHeap",
    "RotationScheduleError",
    "ScheduleConsistencyError",
    "Scheduler",
    "SchedulerConfig",
    "check_feasible",
    "due_on",
    "schedule",
    "target_day",
]
