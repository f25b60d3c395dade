# weekplan/placement.py
import logging
import math
from typing import Dict, List, Optional, Sequence

import numpy as np

from .models import (
    EMPTY_FIXED_WINDOW,
    MISSING_TIME_WINDOW,
    NO_CONTIGUOUS_BLOCK,
    NO_FEASIBLE_START,
    PREREQUISITE_UNSCHEDULED,
    FixedTask,
    Placement,
    Task,
    TaskInstance,
    Unscheduled,
)
from .timegrid import SLOTS_PER_WEEK, absolute_slot, day_of_slot, window_to_slots

logger = logging.getLogger(__name__)


class SlotBoard:
    """
    Slot-of-week ownership for a single run.

    `owners` is the schedule itself (task id or None per slot); `taken`
    mirrors it as a boolean mask so block checks stay vectorised.
    """

    def __init__(self, size: int = SLOTS_PER_WEEK):
        self.owners: List[Optional[str]] = [None] * size
        self.taken = np.zeros(size, dtype=bool)

    def __len__(self):
        return len(self.owners)

    def can_place(self, start_slot: int, units: int) -> bool:
        if start_slot < 0 or start_slot + units > len(self.owners):
            return False
        return not self.taken[start_slot:start_slot + units].any()

    def claim(self, start_slot: int, end_slot: int, task_id: str) -> None:
        # no ownership check: fixed tasks overwrite
        for s in range(start_slot, end_slot):
            self.owners[s] = task_id
        self.taken[start_slot:end_slot] = True


def place_fixed_tasks(board: SlotBoard,
                      tasks: Sequence[Task],
                      unscheduled: List[Unscheduled]) -> None:
    """Claim each FIXED task's window unconditionally, in input order."""
    for t in tasks:
        if not isinstance(t, FixedTask):
            continue
        tw = t.time_window
        if tw is None:
            unscheduled.append(Unscheduled(t.id, MISSING_TIME_WINDOW))
            continue

        start_slot, end_slot = window_to_slots(tw.start_minutes, tw.end_minutes)
        start_slot = max(start_slot, 0)
        end_slot = min(end_slot, len(board))
        if start_slot >= end_slot:
            unscheduled.append(Unscheduled(t.id, EMPTY_FIXED_WINDOW))
            continue

        board.claim(start_slot, end_slot, t.id)
        logger.debug("Fixed %s -> slots [%d, %d)", t.id, start_slot, end_slot)


def earliest_start_for(inst: TaskInstance,
                       instances_by_task: Dict[str, List[TaskInstance]],
                       placed: Dict[str, Placement]) -> float:
    """
    Lower bound on the start slot imposed by same-day prerequisites.

    Returns math.inf when a same-day prerequisite instance exists but was
    not placed. Prerequisites on other days, or without an instance on
    this day, impose nothing.
    """
    earliest = inst.allowed_start_slot
    for pid in inst.task.prerequisites or []:
        same_day = next((p for p in instances_by_task.get(pid, [])
                         if p.day_index == inst.day_index), None)
        if same_day is None:
            continue
        info = placed.get(same_day.instance_id)
        if info is None:
            return math.inf
        earliest = max(earliest, info.end_slot_exclusive)
    return earliest


def _reject(unscheduled: List[Unscheduled], inst: TaskInstance, reason: str) -> None:
    unscheduled.append(Unscheduled(inst.task_id, reason,
                                   instance_id=inst.instance_id,
                                   day_index=inst.day_index))
    logger.debug("Unscheduled %s: %s", inst.instance_id, reason)


def first_fit(board: SlotBoard, inst: TaskInstance, earliest: int, max_start: int) -> Optional[int]:
    # only starts on the instance's own day are candidates
    lo = max(earliest, absolute_slot(inst.day_index, 0))
    hi = min(max_start, absolute_slot(inst.day_index + 1, 0) - 1)
    for s in range(lo, hi + 1):
        if day_of_slot(s) != inst.day_index:
            continue
        if board.can_place(s, inst.units):
            return s
    return None


def place_flexible_instances(board: SlotBoard,
                             order: Sequence[str],
                             instances_by_task: Dict[str, List[TaskInstance]],
                             unscheduled: List[Unscheduled]) -> Dict[str, Placement]:
    """
    Greedy first-fit placement in topological, then chronological, order.

    A committed placement is never revisited.
    """
    placed: Dict[str, Placement] = {}

    for task_id in order:
        for inst in instances_by_task.get(task_id, []):
            earliest = earliest_start_for(inst, instances_by_task, placed)
            if earliest == math.inf:
                _reject(unscheduled, inst, PREREQUISITE_UNSCHEDULED)
                continue

            max_start = inst.allowed_end_slot - inst.units
            if earliest > max_start:
                _reject(unscheduled, inst, NO_FEASIBLE_START)
                continue

            start = first_fit(board, inst, int(earliest), max_start)
            if start is None:
                _reject(unscheduled, inst, NO_CONTIGUOUS_BLOCK)
                continue

            end = start + inst.units
            board.claim(start, end, task_id)
            placed[inst.instance_id] = Placement(start, end, task_id, inst.day_index)
            logger.debug("Placed %s -> slots [%d, %d)", inst.instance_id, start, end)

    return placed
