# weekplan/dependencies.py
import logging
from collections import deque
from typing import Dict, List, Sequence

from .models import CycleDetected, Task

logger = logging.getLogger(__name__)


def build_graph(tasks: Sequence[Task]):
    """
    Adjacency (prerequisite -> dependents) and in-degree per task id.

    Prerequisite ids that do not name a submitted task are ignored.
    """
    ids = [t.id for t in tasks]
    if len(set(ids)) != len(ids):
        raise ValueError("task ids must be unique")

    adj: Dict[str, List[str]] = {tid: [] for tid in ids}
    in_deg: Dict[str, int] = {tid: 0 for tid in ids}
    for t in tasks:
        for pid in t.prerequisites or []:
            if pid not in adj:
                continue
            adj[pid].append(t.id)
            in_deg[t.id] += 1
    return adj, in_deg


def topological_order(tasks: Sequence[Task]) -> List[str]:
    """
    Kahn's algorithm over the prerequisite graph.

    Ties are broken by input order. Raises CycleDetected if any task is
    left over once the queue drains.
    """
    adj, in_deg = build_graph(tasks)

    queue = deque(tid for tid, deg in in_deg.items() if deg == 0)
    order: List[str] = []
    while queue:
        u = queue.popleft()
        order.append(u)
        for v in adj[u]:
            in_deg[v] -= 1
            if in_deg[v] == 0:
                queue.append(v)

    if len(order) != len(tasks):
        remaining = [tid for tid, deg in in_deg.items() if deg > 0]
        logger.warning("Cycle detected among %d task(s): %s", len(remaining), ", ".join(remaining))
        raise CycleDetected(remaining)

    return order
