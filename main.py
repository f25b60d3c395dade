# demo.py
import logging

from weekplan.config import configure_logging
from weekplan.models import FixedTask, FlexibleTask, SchedulerPrefs, TimeWindow
from weekplan.reporting import plot_daily_load, schedule_to_frame, unscheduled_to_frame
from weekplan.scheduler import generate_schedule

DAY = 24 * 60


def main():
    configure_logging("INFO")

    prefs = SchedulerPrefs(active_start_minutes=7 * 60, active_end_minutes=22 * 60)

    tasks = [
        FixedTask(
            id="standup",
            # Monday 09:00-09:30, minute-of-week
            time_window=TimeWindow(1 * DAY + 9 * 60, 1 * DAY + 9 * 60 + 30),
        ),
        FixedTask(
            id="os-class",
            # Wednesday 12:45-14:45
            time_window=TimeWindow(3 * DAY + 12 * 60 + 45, 3 * DAY + 14 * 60 + 45),
        ),
        FlexibleTask(
            id="gym",
            duration=60,
            days=[1, 3, 5],
            allowed_window=TimeWindow(6 * 60, 9 * 60),
        ),
        FlexibleTask(
            id="shower",
            duration=20,
            days=[1, 3, 5],
            prerequisites=["gym"],
        ),
        FlexibleTask(
            id="deep-work",
            duration=150,
            days=[1, 2, 3, 4, 5],
            allowed_window=TimeWindow(9 * 60, 17 * 60),
            prerequisites=["shower"],
        ),
        FlexibleTask(
            id="reading",
            duration=45,
        ),
    ]

    result = generate_schedule(tasks, prefs)

    print("=== Schedule ===")
    print(schedule_to_frame(result).to_string(index=False))
    missed = unscheduled_to_frame(result)
    if not missed.empty:
        print("=== Unscheduled ===")
        print(missed.to_string(index=False))

    path = plot_daily_load(result, "daily_load.png")
    logging.info("Load chart written to %s", path)


if __name__ == "__main__":
    main()
