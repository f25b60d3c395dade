"""Builders and checks shared by the scheduler tests."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from weekplan.models import FixedTask, FlexibleTask, ScheduleResult, TimeWindow

DAY = 24 * 60


def fixed(tid: str, start: Optional[int] = None, end: Optional[int] = None,
          prerequisites: Iterable[str] = ()) -> FixedTask:
    window = TimeWindow(start, end) if start is not None else None
    return FixedTask(id=tid, time_window=window, prerequisites=list(prerequisites))


def flex(tid: str, duration: int = 30, days: Optional[List[int]] = None,
         window: Optional[tuple] = None, prerequisites: Iterable[str] = ()) -> FlexibleTask:
    return FlexibleTask(
        id=tid,
        duration=duration,
        days=days,
        allowed_window=TimeWindow(*window) if window else None,
        prerequisites=list(prerequisites),
    )


def owned_slots(result: ScheduleResult, tid: str) -> List[int]:
    return [i for i, owner in enumerate(result.schedule) if owner == tid]


def reasons(result: ScheduleResult) -> Dict[str, str]:
    """instance id (or task id for fixed tasks) -> reason."""
    return {u.instance_id or u.task_id: u.reason for u in result.unscheduled}


def request_body(*tasks: dict, active: Optional[dict] = None) -> dict:
    body = {"tasks": list(tasks)}
    if active is not None:
        body["dailyActiveHours"] = active
    return body
