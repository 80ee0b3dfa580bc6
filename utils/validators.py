# Directory: utils/validators.py
"""
Validation utilities for workers, tasks and assignments.
"""
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from errors import ValidationError
from models import MAX_DAILY_HOURS, Priority, Task, Worker, format_hours, to_hours
from utils.logger import logger

WORKER_ID_PATTERN = re.compile(r"^W\d{3,}$")
TASK_ID_PATTERN = re.compile(r"^T\d{3,}$")


def validate_worker_id(worker_id: str) -> bool:
    """Check that an id looks like W001."""
    return bool(WORKER_ID_PATTERN.match(worker_id or ""))


def validate_task_id(task_id: str) -> bool:
    """Check that an id looks like T001."""
    return bool(TASK_ID_PATTERN.match(task_id or ""))


def require_text(value: Any, field_name: str) -> str:
    """Return the stripped text or raise ValidationError when it is blank."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def parse_priority(value: Any) -> Priority:
    if isinstance(value, Priority):
        return value
    try:
        return Priority(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(p.value for p in Priority)
        raise ValidationError(f"Invalid priority {value!r}; expected one of {choices}") from exc


def parse_time_estimate(value: Any) -> Decimal:
    """Parse a time estimate, which must be a positive number of hours."""
    try:
        hours = to_hours(value)
    except ValueError as exc:
        raise ValidationError(f"Time estimate must be a number, got {value!r}") from exc

    if hours <= 0:
        raise ValidationError("Time estimate must be greater than 0")

    if hours > MAX_DAILY_HOURS:
        logger.warning(
            f"Time estimate {format_hours(hours)}h exceeds the {MAX_DAILY_HOURS}h "
            f"daily ceiling; this task can never be assigned."
        )
    return hours


def parse_deadline(value: Any) -> datetime:
    """
    Parse a deadline into a timezone-aware UTC datetime.

    Accepts datetime, date and ISO 8601 strings. Naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValidationError(f"Please enter a valid deadline, got {value!r}") from exc
    else:
        raise ValidationError(f"Please enter a valid deadline, got {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def check_hours_consistency(workers: List[Worker], tasks: List[Task]) -> List[str]:
    """
    Check the hour bookkeeping between workers and tasks.

    Checks:
    1. Every assigned task points to an existing worker
    2. Each worker's stored hours equal the sum of its tasks' estimates
    3. No worker is over the daily ceiling

    Args:
        workers: List of workers
        tasks: List of tasks

    Returns:
        List[str]: Human-readable problems, empty when everything is consistent
    """
    problems = []
    expected: Dict[str, Decimal] = {w.id: Decimal("0") for w in workers}

    for task in tasks:
        if task.assigned_to is None:
            continue
        if task.assigned_to not in expected:
            problems.append(
                f"Task {task.id} is assigned to unknown worker {task.assigned_to}."
            )
            continue
        expected[task.assigned_to] += task.time_estimate

    for worker in workers:
        if worker.total_assigned_hours != expected[worker.id]:
            problems.append(
                f"Worker {worker.id} records {format_hours(worker.total_assigned_hours)}h "
                f"but its tasks sum to {format_hours(expected[worker.id])}h."
            )
        if worker.total_assigned_hours > MAX_DAILY_HOURS:
            problems.append(
                f"Worker {worker.id} is overloaded. Assigned: "
                f"{format_hours(worker.total_assigned_hours)} hours, "
                f"Limit: {MAX_DAILY_HOURS} hours."
            )

    return problems
