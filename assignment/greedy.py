# Directory: assignment/greedy.py
"""
Greedy task assignment implementation.
"""
from decimal import Decimal
from typing import List, Dict, Optional
from models import MAX_DAILY_HOURS, Task, Worker
from analysis.queries import sort_by_priority
from assignment.interfaces import AssignmentModel
from utils.logger import logger


class GreedyAssigner(AssignmentModel):
    """
    Greedy task assignment model.

    Tasks are visited in priority order (ties broken by earliest deadline)
    and each goes to the worker with the most hours left who can still fit
    it, which keeps the daily load spread across the crew.
    """

    def __init__(self, load_penalty: float = 1.0):
        """
        Initialize the greedy assigner.

        Args:
            load_penalty: Penalty factor for a worker's current load ratio
        """
        self.load_penalty = load_penalty

    def plan(self, tasks: List[Task], workers: List[Worker]) -> Dict[str, Optional[str]]:
        """
        Propose assignments for open tasks.

        Args:
            tasks: List of tasks to assign
            workers: List of workers to assign to

        Returns:
            Dict mapping task IDs to worker IDs (or None if unassigned)
        """
        # Projected hours, so the input records are never touched
        projected: Dict[str, Decimal] = {w.id: w.total_assigned_hours for w in workers}
        eligible = [w for w in workers if w.availability]

        assigned: Dict[str, Optional[str]] = {t.id: None for t in tasks}

        for t in sort_by_priority(tasks):
            if t.completed or t.assigned_to is not None:
                continue

            best_worker = None
            best_score = -float("inf")

            for w in eligible:
                hours = projected[w.id]
                if hours + t.time_estimate > MAX_DAILY_HOURS:
                    continue

                # Less loaded workers score higher; earlier workers win ties
                load_ratio = float(hours / MAX_DAILY_HOURS)
                score = t.priority.weight * (1.0 - self.load_penalty * load_ratio)

                if score > best_score:
                    best_score = score
                    best_worker = w

            if best_worker:
                assigned[t.id] = best_worker.id
                projected[best_worker.id] += t.time_estimate
            else:
                logger.debug(f"No worker can fit task {t.id} ({t.time_estimate}h).")

        placed = sum(1 for v in assigned.values() if v is not None)
        logger.info(f"Greedy plan placed {placed} of {len(tasks)} tasks.")
        return assigned
