from datetime import datetime, timezone

import pytest

from assignment.engine import AssignmentEngine
from models import Priority, Task, to_hours
from persistence.memory import InMemoryGateway


@pytest.fixture
def gateway():
    return InMemoryGateway()


@pytest.fixture
def engine(gateway):
    return AssignmentEngine(gateway)


@pytest.fixture
def add_task(engine):
    """Create a task on the engine and return the stored copy."""

    def _add(description="Clean Room 101", priority="medium", hours=2, deadline="2025-01-10"):
        return engine.add_task(description, priority, hours, deadline).unwrap()

    return _add


@pytest.fixture
def make_task():
    """Build a detached Task record for query tests."""

    def _make(
        task_id,
        priority="medium",
        deadline="2025-01-10",
        description="Task",
        assigned_to=None,
        completed=False,
        created_at=None,
        hours=1,
    ):
        return Task(
            id=task_id,
            description=description,
            priority=Priority(priority),
            time_estimate=to_hours(hours),
            deadline=datetime.fromisoformat(deadline).replace(tzinfo=timezone.utc),
            assigned_to=assigned_to,
            created_at=created_at or datetime(2025, 1, 1, tzinfo=timezone.utc),
            completed=completed,
        )

    return _make
