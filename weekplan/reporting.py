# weekplan/reporting.py
from pathlib import Path
from typing import List

import pandas as pd

from .models import ScheduleResult
from .timegrid import DAY_NAMES, DAYS_PER_WEEK, SLOT_MINUTES, day_of_slot, slot_label

BLOCK_COLUMNS = ["id", "day", "start", "end", "start_slot", "end_slot"]
UNSCHEDULED_COLUMNS = ["taskId", "instanceId", "dayIndex", "reason"]


def schedule_to_frame(result: ScheduleResult) -> pd.DataFrame:
    """
    Collapse the slot array into one row per contiguous block of a task id.

    Adjacent placements of the same task merge into one row, and blocks
    are split at midnight so every row belongs to exactly one day.
    """
    rows: List[dict] = []
    schedule = result.schedule
    s = 0
    while s < len(schedule):
        owner = schedule[s]
        if owner is None:
            s += 1
            continue
        e = s + 1
        while e < len(schedule) and schedule[e] == owner and day_of_slot(e) == day_of_slot(s):
            e += 1
        rows.append({
            "id": owner,
            "day": DAY_NAMES[day_of_slot(s)],
            "start": slot_label(s),
            "end": slot_label(e),
            "start_slot": s,
            "end_slot": e,
        })
        s = e
    return pd.DataFrame(rows, columns=BLOCK_COLUMNS)


def unscheduled_to_frame(result: ScheduleResult) -> pd.DataFrame:
    return pd.DataFrame([{
        "taskId": u.task_id,
        "instanceId": u.instance_id,
        "dayIndex": u.day_index,
        "reason": u.reason,
    } for u in result.unscheduled], columns=UNSCHEDULED_COLUMNS)


def daily_load(result: ScheduleResult) -> pd.Series:
    """Booked minutes per day, indexed by day name (all seven days present)."""
    occupied = pd.Series([owner is not None for owner in result.schedule])
    days = pd.Series([day_of_slot(i) for i in range(len(result.schedule))])
    per_day = occupied.groupby(days).sum().reindex(range(DAYS_PER_WEEK), fill_value=0)
    per_day.index = list(DAY_NAMES)
    return (per_day * SLOT_MINUTES).astype(int)


def plot_daily_load(result: ScheduleResult, path) -> Path:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    load = daily_load(result) / 60.0
    fig, ax = plt.subplots(figsize=(8, 3))
    ax.bar(load.index, load.values)
    ax.set_title("Booked hours per day")
    ax.set_ylabel("Hours")
    fig.tight_layout()

    path = Path(path)
    fig.savefig(path)
    plt.close(fig)
    return path
