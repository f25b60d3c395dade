# weekplan/expander.py
from typing import Dict, List, Sequence, Tuple

from .models import (
    FlexibleTask,
    SchedulerPrefs,
    Task,
    TaskInstance,
    TimeWindow,
    Unscheduled,
    WINDOW_TOO_SMALL,
    instance_id_for,
)
from .timegrid import DAYS_PER_WEEK, MINUTES_PER_DAY, SLOT_MINUTES, ceil_div, window_to_slots

ALL_DAYS = list(range(DAYS_PER_WEEK))


def required_units(duration: int) -> int:
    return max(1, ceil_div(duration or 0, SLOT_MINUTES))


def resolve_days(task: FlexibleTask) -> List[int]:
    if task.days is None:
        return list(ALL_DAYS)
    return sorted(set(task.days))


def resolve_window(task: FlexibleTask, prefs: SchedulerPrefs) -> TimeWindow:
    if task.allowed_window is not None:
        return task.allowed_window
    return TimeWindow(prefs.active_start_minutes, prefs.active_end_minutes)


def expand_task(task: FlexibleTask,
                prefs: SchedulerPrefs) -> Tuple[List[TaskInstance], List[Unscheduled]]:
    """One instance per recurrence day, in ascending day order."""
    units = required_units(task.duration)
    window = resolve_window(task, prefs)

    instances: List[TaskInstance] = []
    rejected: List[Unscheduled] = []
    for day in resolve_days(task):
        base = day * MINUTES_PER_DAY
        start_slot, end_slot = window_to_slots(base + window.start_minutes,
                                               base + window.end_minutes)
        iid = instance_id_for(task.id, day)
        if start_slot >= end_slot:
            rejected.append(Unscheduled(task.id, WINDOW_TOO_SMALL, instance_id=iid, day_index=day))
            continue
        instances.append(TaskInstance(
            instance_id=iid,
            task_id=task.id,
            task=task,
            day_index=day,
            units=units,
            allowed_start_slot=start_slot,
            allowed_end_slot=end_slot,
        ))
    return instances, rejected


def expand_instances(tasks: Sequence[Task],
                     prefs: SchedulerPrefs) -> Tuple[Dict[str, List[TaskInstance]], List[Unscheduled]]:
    """
    Expand every FLEXIBLE task into day instances.

    Returns instances grouped by task id (ascending day within a task) and
    the instances rejected because their window holds no whole slot.
    """
    by_task: Dict[str, List[TaskInstance]] = {}
    rejected: List[Unscheduled] = []
    for t in tasks:
        if not isinstance(t, FlexibleTask):
            continue
        instances, bad = expand_task(t, prefs)
        rejected.extend(bad)
        if instances:
            by_task[t.id] = instances
    return by_task, rejected
