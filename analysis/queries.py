"""
Read-only sorting, filtering and search over task lists.

Every function takes a list and returns a new one; inputs are never
reordered or modified. Python's sort is stable, so records that tie on
every key keep their input order.
"""
from enum import Enum
from typing import Iterable, List, Optional, Union

from models import Priority, Task


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"


class SortOption(str, Enum):
    NONE = "none"
    PRIORITY = "priority"
    DEADLINE = "deadline"
    CREATED = "created"


def sort_by_priority(tasks: Iterable[Task]) -> List[Task]:
    """Highest priority first, earliest deadline first within a priority."""
    return sorted(tasks, key=lambda t: (-t.priority.weight, t.deadline))


def sort_by_deadline(tasks: Iterable[Task]) -> List[Task]:
    return sorted(tasks, key=lambda t: t.deadline)


def sort_by_created(tasks: Iterable[Task]) -> List[Task]:
    """Newest first."""
    return sorted(tasks, key=lambda t: t.created_at, reverse=True)


def search(query: str, tasks: Iterable[Task]) -> List[Task]:
    """
    Case-insensitive substring match on description, id and assigned worker.

    A blank query matches every task.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(tasks)

    return [
        t
        for t in tasks
        if needle in t.description.lower()
        or needle in t.id.lower()
        or (t.assigned_to is not None and needle in t.assigned_to.lower())
    ]


def filter_by_status(tasks: Iterable[Task], status: Union[StatusFilter, str]) -> List[Task]:
    status = StatusFilter(status)
    if status is StatusFilter.ACTIVE:
        return [t for t in tasks if not t.completed]
    if status is StatusFilter.COMPLETED:
        return [t for t in tasks if t.completed]
    if status is StatusFilter.ASSIGNED:
        return [t for t in tasks if t.assigned_to is not None]
    if status is StatusFilter.UNASSIGNED:
        return [t for t in tasks if t.assigned_to is None]
    return list(tasks)


def filter_by_priority(
    tasks: Iterable[Task], priority: Optional[Union[Priority, str]]
) -> List[Task]:
    if priority is None or priority == "all":
        return list(tasks)
    priority = Priority(priority)
    return [t for t in tasks if t.priority is priority]


def apply_view(
    tasks: Iterable[Task],
    query: str = "",
    status: Union[StatusFilter, str] = StatusFilter.ALL,
    priority: Optional[Union[Priority, str]] = None,
    sort: Union[SortOption, str] = SortOption.NONE,
) -> List[Task]:
    """Search, filter by status and priority, then sort."""
    result = search(query, tasks)
    result = filter_by_status(result, status)
    result = filter_by_priority(result, priority)

    sort = SortOption(sort)
    if sort is SortOption.PRIORITY:
        return sort_by_priority(result)
    if sort is SortOption.DEADLINE:
        return sort_by_deadline(result)
    if sort is SortOption.CREATED:
        return sort_by_created(result)
    return result
