# weekplan/models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class TaskType(str, Enum):
    FIXED = "FIXED"
    FLEXIBLE = "FLEXIBLE"


# Unscheduled reasons
MISSING_TIME_WINDOW = "FIXED task missing timeWindow"
EMPTY_FIXED_WINDOW = "FIXED task has zero or negative length window"
WINDOW_TOO_SMALL = "allowed window too small"
PREREQUISITE_UNSCHEDULED = "prerequisite instance unscheduled"
NO_FEASIBLE_START = "no feasible start"
NO_CONTIGUOUS_BLOCK = "no contiguous block"


class SchedulingError(Exception):
    """Base class for errors that abort a whole scheduling run."""


class CycleDetected(SchedulingError):
    def __init__(self, remaining: Optional[List[str]] = None):
        self.remaining = remaining or []
        super().__init__("Cycle detected")


@dataclass
class SchedulerPrefs:
    active_start_minutes: float = 8 * 60   # minute-of-day
    active_end_minutes: float = 22 * 60


@dataclass
class TimeWindow:
    start_minutes: float
    end_minutes: float


@dataclass
class FixedTask:
    id: str
    time_window: Optional[TimeWindow] = None  # minute-of-week
    prerequisites: List[str] = field(default_factory=list)

    @property
    def type(self) -> TaskType:
        return TaskType.FIXED


@dataclass
class FlexibleTask:
    id: str
    duration: float = 0                        # minutes
    days: Optional[List[int]] = None           # None = every day
    allowed_window: Optional[TimeWindow] = None  # minute-of-day
    prerequisites: List[str] = field(default_factory=list)

    @property
    def type(self) -> TaskType:
        return TaskType.FLEXIBLE


Task = Union[FixedTask, FlexibleTask]


@dataclass
class TaskInstance:
    instance_id: str
    task_id: str
    task: FlexibleTask
    day_index: int
    units: int
    allowed_start_slot: int
    allowed_end_slot: int  # exclusive


@dataclass
class Placement:
    start_slot: int
    end_slot_exclusive: int
    task_id: str
    day_index: int


@dataclass
class Unscheduled:
    task_id: str
    reason: str
    instance_id: Optional[str] = None
    day_index: Optional[int] = None


@dataclass
class ScheduleResult:
    schedule: List[Optional[str]]
    unscheduled: List[Unscheduled]
    placements: Dict[str, Placement] = field(default_factory=dict)


def instance_id_for(task_id: str, day_index: int) -> str:
    return f"{task_id}__d{day_index}"
