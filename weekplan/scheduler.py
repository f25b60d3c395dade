# weekplan/scheduler.py
import logging
from typing import List, Optional, Sequence

from .dependencies import topological_order
from .expander import expand_instances
from .models import SchedulerPrefs, ScheduleResult, Task, Unscheduled
from .placement import SlotBoard, place_fixed_tasks, place_flexible_instances

logger = logging.getLogger(__name__)


def generate_schedule(tasks: Sequence[Task],
                      prefs: Optional[SchedulerPrefs] = None) -> ScheduleResult:
    """
    Generate a weekly schedule.

    FIXED tasks are claimed first, then FLEXIBLE instances are placed
    greedily in prerequisite order. Every run starts from empty state.

    Raises CycleDetected if the prerequisite graph has a cycle; nothing
    is placed in that case.
    """
    prefs = prefs or SchedulerPrefs()

    # 1) Resolve processing order (the only run-fatal step)
    order = topological_order(tasks)

    board = SlotBoard()
    unscheduled: List[Unscheduled] = []

    # 2) Fixed events
    place_fixed_tasks(board, tasks, unscheduled)

    # 3) Expand and place flexible instances
    instances_by_task, rejected = expand_instances(tasks, prefs)
    unscheduled.extend(rejected)
    placements = place_flexible_instances(board, order, instances_by_task, unscheduled)

    logger.info(
        "Scheduled %d instance(s) across %d task(s); %d unscheduled.",
        len(placements), len(tasks), len(unscheduled),
    )
    return ScheduleResult(schedule=board.owners, unscheduled=unscheduled, placements=placements)
