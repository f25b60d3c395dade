# weekplan/schemas.py
# JSON wire format for the schedule endpoint and the CLI input file.

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import (
    FixedTask,
    FlexibleTask,
    ScheduleResult,
    SchedulerPrefs,
    Task,
    TimeWindow,
)


class WindowIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    startMinutes: float
    endMinutes: float

    def to_window(self) -> TimeWindow:
        return TimeWindow(self.startMinutes, self.endMinutes)


class ActiveHours(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    start: float = 8 * 60
    end: float = 22 * 60


class TaskIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    type: Literal["FIXED", "FLEXIBLE"]
    prerequisites: List[str] = []
    # FIXED
    timeWindow: Optional[WindowIn] = None
    # FLEXIBLE
    duration: float = 0
    days: Optional[List[int]] = None
    allowedWindow: Optional[WindowIn] = None

    @field_validator("days")
    @classmethod
    def check_days(cls, v):
        if v is not None and any(d < 0 or d > 6 for d in v):
            raise ValueError("days must be weekday indices 0-6")
        return v

    def to_task(self) -> Task:
        if self.type == "FIXED":
            return FixedTask(
                id=self.id,
                time_window=self.timeWindow.to_window() if self.timeWindow else None,
                prerequisites=list(self.prerequisites),
            )
        return FlexibleTask(
            id=self.id,
            duration=self.duration,
            days=list(self.days) if self.days is not None else None,
            allowed_window=self.allowedWindow.to_window() if self.allowedWindow else None,
            prerequisites=list(self.prerequisites),
        )


class ScheduleRequest(BaseModel):
    tasks: List[TaskIn] = []
    dailyActiveHours: ActiveHours = Field(default_factory=ActiveHours)

    @field_validator("tasks")
    @classmethod
    def check_unique_ids(cls, v):
        seen = set()
        for t in v:
            if t.id in seen:
                raise ValueError(f"duplicate task id: {t.id}")
            seen.add(t.id)
        return v

    def to_tasks(self) -> List[Task]:
        return [t.to_task() for t in self.tasks]

    def to_prefs(self) -> SchedulerPrefs:
        return SchedulerPrefs(
            active_start_minutes=self.dailyActiveHours.start,
            active_end_minutes=self.dailyActiveHours.end,
        )


class UnscheduledOut(BaseModel):
    taskId: str
    instanceId: Optional[str] = None
    dayIndex: Optional[int] = None
    reason: str


class ScheduleResponse(BaseModel):
    success: bool = True
    schedule: Optional[List[Optional[str]]] = None
    unscheduled: List[UnscheduledOut] = []
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: ScheduleResult) -> "ScheduleResponse":
        return cls(
            success=True,
            schedule=list(result.schedule),
            unscheduled=[
                UnscheduledOut(
                    taskId=u.task_id,
                    instanceId=u.instance_id,
                    dayIndex=u.day_index,
                    reason=u.reason,
                )
                for u in result.unscheduled
            ],
        )

    def to_payload(self) -> dict:
        """Drop absent optional keys, keeping `schedule` (null on failure)."""
        data = self.model_dump()
        data["unscheduled"] = [u.model_dump(exclude_none=True) for u in self.unscheduled]
        if self.error is None:
            data.pop("error")
        return data


CYCLE_RESPONSE = {"success": False, "error": "Cycle detected", "schedule": None}
INTERNAL_ERROR_RESPONSE = {"success": False, "error": "internal server error"}
