# weekplan/timegrid.py
from typing import NamedTuple, Tuple

SLOT_MINUTES = 15
DAYS_PER_WEEK = 7
MINUTES_PER_DAY = 24 * 60
SLOTS_PER_DAY = MINUTES_PER_DAY // SLOT_MINUTES   # 96
SLOTS_PER_WEEK = DAYS_PER_WEEK * SLOTS_PER_DAY    # 672

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class DayTime(NamedTuple):
    day: int
    hour: int
    minute: int
    slot_of_day: int


def ceil_div(a: float, b: int) -> int:
    return int(-(-a // b))


def minute_to_slot(minutes: float) -> int:
    return int(minutes // SLOT_MINUTES)


def absolute_slot(day: int, slot_of_day: int) -> int:
    return day * SLOTS_PER_DAY + slot_of_day


def day_of_slot(slot: int) -> int:
    return slot // SLOTS_PER_DAY


def slot_to_day_time(slot: int) -> DayTime:
    day = slot // SLOTS_PER_DAY
    slot_of_day = slot % SLOTS_PER_DAY
    minutes = slot_of_day * SLOT_MINUTES
    return DayTime(day, minutes // 60, minutes % 60, slot_of_day)


def window_to_slots(start_minutes: float, end_minutes: float) -> Tuple[int, int]:
    """
    Convert a minute window to a half-open slot range.

    The start rounds up and the end rounds down, so the slots never cover
    time outside the requested window. The range is empty when
    start >= end.
    """
    return ceil_div(start_minutes, SLOT_MINUTES), minute_to_slot(end_minutes)


def slot_label(slot: int) -> str:
    """'Mon 08:15' style label; slot == SLOTS_PER_WEEK renders as end of week."""
    dt = slot_to_day_time(slot)
    name = DAY_NAMES[dt.day % DAYS_PER_WEEK]
    if dt.day >= DAYS_PER_WEEK:
        name = "End"
    return f"{name} {dt.hour:02d}:{dt.minute:02d}"
