# Directory: analysis/metrics.py
"""
Dashboard metrics for the current board.
"""
import numpy as np
from typing import List, Dict, Union
from models import MAX_DAILY_HOURS, Task, Worker


def compute_board_metrics(
    workers: List[Worker], tasks: List[Task]
) -> Dict[str, Union[int, float]]:
    """
    Compute summary statistics for workers and tasks.

    Args:
        workers: List of workers
        tasks: List of tasks

    Returns:
        Dict of metric names to metric values
    """
    # 1. Task counts
    active_tasks = [t for t in tasks if not t.completed]
    completed_tasks = [t for t in tasks if t.completed]
    unassigned_tasks = [t for t in tasks if t.is_open]

    # 2. Working workers: distinct owners of active assigned tasks
    working_workers = {t.assigned_to for t in active_tasks if t.assigned_to}

    # 3. Resource Utilization (assigned hours over total daily capacity)
    hours = np.array([float(w.total_assigned_hours) for w in workers], dtype=float)
    total_assigned_hours = float(hours.sum()) if hours.size else 0.0
    total_capacity = float(MAX_DAILY_HOURS) * len(workers)
    utilization = (
        (total_assigned_hours / total_capacity * 100) if total_capacity > 0 else 0.0
    )

    # 4. Workload Balance Ratio (Lower is better): std / mean of worker hours
    mean_hours = float(np.mean(hours)) if hours.size else 0.0
    std_hours = float(np.std(hours)) if hours.size else 0.0
    workload_balance_ratio = std_hours / mean_hours if mean_hours != 0 else 0.0

    return {
        "total_workers": len(workers),
        "available_workers": sum(1 for w in workers if w.is_assignable()),
        "working_workers": len(working_workers),
        "total_tasks": len(tasks),
        "active_tasks": len(active_tasks),
        "completed_tasks": len(completed_tasks),
        "unassigned_tasks": len(unassigned_tasks),
        "total_assigned_hours": total_assigned_hours,
        "resource_utilization": utilization,
        "workload_balance_ratio": workload_balance_ratio,
    }
