from __future__ import annotations

import time

from weekplan.models import (
    EMPTY_FIXED_WINDOW,
    MISSING_TIME_WINDOW,
    NO_CONTIGUOUS_BLOCK,
    NO_FEASIBLE_START,
    PREREQUISITE_UNSCHEDULED,
)
from weekplan.placement import SlotBoard
from weekplan.scheduler import generate_schedule
from tests.utils import DAY, fixed, flex, owned_slots, reasons


def test_board_bounds_and_claims() -> None:
    board = SlotBoard()
    assert board.can_place(0, 4)
    assert not board.can_place(-1, 2)
    assert not board.can_place(len(board) - 1, 2)
    board.claim(10, 14, "x")
    assert not board.can_place(12, 1)
    assert board.can_place(14, 3)
    assert board.owners[10:14] == ["x"] * 4


def test_fixed_task_occupies_exact_range() -> None:
    result = generate_schedule([fixed("meeting", 480, 600)])
    assert owned_slots(result, "meeting") == list(range(32, 40))
    assert result.unscheduled == []


def test_fixed_task_failures() -> None:
    result = generate_schedule([fixed("nowhere"), fixed("blink", 500, 510)])
    assert reasons(result) == {
        "nowhere": MISSING_TIME_WINDOW,
        "blink": EMPTY_FIXED_WINDOW,
    }
    assert all(u.instance_id is None and u.day_index is None for u in result.unscheduled)
    assert set(result.schedule) == {None}


def test_later_fixed_task_wins_overlap() -> None:
    result = generate_schedule([fixed("a", 480, 600), fixed("b", 540, 660)])
    assert owned_slots(result, "a") == list(range(32, 36))
    assert owned_slots(result, "b") == list(range(36, 44))


def test_fixed_window_is_clipped_to_the_week() -> None:
    result = generate_schedule([fixed("late", 7 * DAY - 60, 7 * DAY + 60)])
    assert len(result.schedule) == 7 * 96
    assert owned_slots(result, "late") == list(range(7 * 96 - 4, 7 * 96))


def test_recurring_flexible_task_on_selected_days() -> None:
    result = generate_schedule([flex("walk", duration=30, days=[1, 3])])
    assert result.unscheduled == []
    assert owned_slots(result, "walk") == [128, 129, 320, 321]
    assert result.placements["walk__d1"].start_slot == 128
    assert result.placements["walk__d3"].end_slot_exclusive == 322


def test_first_fit_follows_input_order() -> None:
    result = generate_schedule([flex("x", duration=60, days=[0]), flex("y", duration=30, days=[0])])
    assert owned_slots(result, "x") == [32, 33, 34, 35]
    assert owned_slots(result, "y") == [36, 37]


def test_flexible_skips_around_fixed_event() -> None:
    result = generate_schedule([flex("x", duration=60, days=[0]), fixed("class", 480, 540)])
    # fixed tasks are claimed before any flexible placement
    assert owned_slots(result, "class") == [32, 33, 34, 35]
    assert owned_slots(result, "x") == [36, 37, 38, 39]


def test_window_consumed_by_fixed_task() -> None:
    tasks = [fixed("class", 480, 600), flex("x", duration=30, days=[0], window=(540, 600))]
    result = generate_schedule(tasks)
    assert reasons(result) == {"x__d0": NO_CONTIGUOUS_BLOCK}
    assert owned_slots(result, "x") == []
    assert owned_slots(result, "class") == list(range(32, 40))


def test_duration_longer_than_window() -> None:
    result = generate_schedule([flex("long", duration=120, days=[0], window=(540, 600))])
    assert reasons(result) == {"long__d0": NO_FEASIBLE_START}


def test_prerequisite_finishes_before_dependent_starts() -> None:
    tasks = [flex("b", duration=30, days=[2], prerequisites=["a"]), flex("a", duration=60, days=[2])]
    result = generate_schedule(tasks)
    a = result.placements["a__d2"]
    b = result.placements["b__d2"]
    assert (a.start_slot, a.end_slot_exclusive) == (224, 228)
    assert a.end_slot_exclusive <= b.start_slot == 228


def test_dependent_of_unplaced_prerequisite_is_unscheduled() -> None:
    tasks = [
        flex("a", duration=120, days=[0], window=(540, 600)),
        flex("b", duration=15, days=[0, 1], prerequisites=["a"]),
    ]
    result = generate_schedule(tasks)
    assert reasons(result) == {
        "a__d0": NO_FEASIBLE_START,
        "b__d0": PREREQUISITE_UNSCHEDULED,
    }
    # no instance of a on day 1, so b is free there
    assert result.placements["b__d1"].start_slot == 96 + 32


def test_prerequisite_on_other_day_does_not_constrain() -> None:
    tasks = [flex("a", duration=60, days=[1]), flex("b", duration=30, days=[2], prerequisites=["a"])]
    result = generate_schedule(tasks)
    assert result.placements["b__d2"].start_slot == 2 * 96 + 32


def test_prerequisite_with_too_small_window_does_not_block() -> None:
    tasks = [
        flex("a", days=[0], window=(485, 495)),
        flex("b", duration=15, days=[0], prerequisites=["a"]),
    ]
    result = generate_schedule(tasks)
    assert reasons(result) == {"a__d0": "allowed window too small"}
    assert result.placements["b__d0"].start_slot == 32


def test_fixed_prerequisite_imposes_nothing() -> None:
    tasks = [fixed("f", 480, 540), flex("b", duration=15, days=[0], window=(420, 600), prerequisites=["f"])]
    result = generate_schedule(tasks)
    assert result.placements["b__d0"].start_slot == 28


def test_start_pushed_past_midnight_is_rejected() -> None:
    tasks = [
        flex("a", duration=60, days=[0], window=(1380, 1440)),
        flex("b", duration=15, days=[0], window=(1320, 1500), prerequisites=["a"]),
    ]
    result = generate_schedule(tasks)
    assert result.placements["a__d0"].end_slot_exclusive == 96
    assert reasons(result) == {"b__d0": NO_CONTIGUOUS_BLOCK}


def test_block_may_run_past_midnight_when_starting_same_day() -> None:
    result = generate_schedule([flex("late", duration=90, days=[0], window=(1380, 1500))])
    assert result.placements["late__d0"].start_slot == 92
    assert owned_slots(result, "late") == list(range(92, 98))


def test_huge_window_scan_stays_within_the_day() -> None:
    tasks = [fixed("block", 0, 7 * DAY), flex("x", duration=15, days=[0], window=(0, 2_000_000_000))]
    started = time.perf_counter()
    result = generate_schedule(tasks)
    elapsed = time.perf_counter() - started
    assert reasons(result) == {"x__d0": NO_CONTIGUOUS_BLOCK}
    assert elapsed < 1.0


def test_huge_window_places_on_own_day() -> None:
    result = generate_schedule([flex("x", duration=15, days=[2], window=(-1_000_000, 2_000_000_000))])
    assert result.placements["x__d2"].start_slot == 2 * 96


def test_fractional_minutes_round_to_whole_slots() -> None:
    result = generate_schedule([
        fixed("meeting", 480.5, 600.9),
        flex("walk", duration=20.5, days=[0], window=(600.2, 700)),
    ])
    assert owned_slots(result, "meeting") == list(range(33, 40))
    assert owned_slots(result, "walk") == [41, 42]
