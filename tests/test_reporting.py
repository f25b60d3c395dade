from __future__ import annotations

from pathlib import Path

from weekplan.reporting import daily_load, plot_daily_load, schedule_to_frame, unscheduled_to_frame
from weekplan.scheduler import generate_schedule
from tests.utils import fixed, flex


def test_blocks_are_split_by_owner_and_day() -> None:
    result = generate_schedule([fixed("meeting", 480, 600), fixed("overnight", 1380, 1500)])
    frame = schedule_to_frame(result)
    assert frame[["id", "start", "end"]].values.tolist() == [
        ["meeting", "Sun 08:00", "Sun 10:00"],
        ["overnight", "Sun 23:00", "Mon 00:00"],
        ["overnight", "Mon 00:00", "Mon 01:00"],
    ]
    assert frame["start_slot"].tolist() == [32, 92, 96]


def test_empty_frames_keep_columns() -> None:
    result = generate_schedule([])
    assert schedule_to_frame(result).empty
    assert list(unscheduled_to_frame(result).columns) == ["taskId", "instanceId", "dayIndex", "reason"]


def test_daily_load_minutes() -> None:
    result = generate_schedule([fixed("meeting", 480, 600), flex("walk", duration=30, days=[1, 3])])
    load = daily_load(result)
    assert list(load.index) == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert load.tolist() == [120, 30, 0, 30, 0, 0, 0]


def test_plot_written(tmp_path: Path) -> None:
    result = generate_schedule([flex("walk", duration=30)])
    out = plot_daily_load(result, tmp_path / "load.png")
    assert out.exists()
    assert out.stat().st_size > 0
