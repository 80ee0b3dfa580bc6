"""
Task store.
"""
from typing import Any, Iterable, List, Optional

from errors import NotFoundError
from models import Task, utc_now
from stores.ids import EntityKind, IdAllocator
from utils.validators import (
    parse_deadline,
    parse_priority,
    parse_time_estimate,
    require_text,
)


class TaskStore:
    """
    Authoritative task list, ordered by insertion.

    Lookups are a linear scan.
    """

    def __init__(self, allocator: IdAllocator, tasks: Iterable[Task] = ()):
        self._allocator = allocator
        self._tasks: List[Task] = list(tasks)

        seen = set()
        for task in self._tasks:
            if task.id in seen:
                raise ValueError(f"Duplicate task id {task.id}")
            seen.add(task.id)

    def __len__(self) -> int:
        return len(self._tasks)

    def add_task(
        self, description: str, priority: Any, time_estimate: Any, deadline: Any
    ) -> Task:
        """
        Validate the inputs and append a new unassigned task.

        All fields are validated before an id is allocated, so a rejected
        task never consumes a sequence number.
        """
        description = require_text(description, "Task description")
        priority = parse_priority(priority)
        hours = parse_time_estimate(time_estimate)
        due = parse_deadline(deadline)

        task = Task(
            id=self._allocator.next_id(EntityKind.TASK),
            description=description,
            priority=priority,
            time_estimate=hours,
            deadline=due,
            created_at=utc_now(),
        )
        self._tasks.append(task)
        return task

    def find_by_id(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def require(self, task_id: str) -> Task:
        task = self.find_by_id(task_id)
        if task is None:
            raise NotFoundError(f"Task with ID {task_id} not found")
        return task

    def list_all(self) -> List[Task]:
        return list(self._tasks)

    def list_unassigned(self) -> List[Task]:
        return [t for t in self._tasks if t.is_open]
