# Directory: models.py
"""
Core data models for the task assignment engine.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, Optional

MAX_DAILY_HOURS = Decimal("8")

# Hours are fixed-point with millihour resolution.
HOURS_QUANTUM = Decimal("0.001")


class Priority(str, Enum):
    """Task priority levels."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        return PRIORITY_WEIGHTS[self]


PRIORITY_WEIGHTS: Dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def to_hours(value: Any) -> Decimal:
    """
    Convert a number of hours into the fixed-point representation.

    Floats go through their shortest repr so that 0.1 becomes exactly
    Decimal("0.1") rather than its binary approximation.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid hours value: {value!r}")
    try:
        if isinstance(value, float):
            hours = Decimal(repr(value))
        else:
            hours = Decimal(str(value).strip())
        if not hours.is_finite():
            raise ValueError(f"Invalid hours value: {value!r}")
        # Too many digits for the context precision raises InvalidOperation
        return hours.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid hours value: {value!r}") from exc


def format_hours(hours: Decimal) -> str:
    """Render hours without trailing zeros (8, 2.5, 0.25)."""
    text = f"{hours.normalize():f}"
    return "0" if text in ("-0", "0") else text


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(raw: str) -> datetime:
    value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class Worker:
    """Worker with a bounded number of assignable hours per day."""

    id: str
    name: str
    availability: bool = True
    total_assigned_hours: Decimal = Decimal("0.000")

    def __repr__(self) -> str:
        return (
            f"Worker({self.id}, name={self.name}, available={self.availability}, "
            f"hours={format_hours(self.total_assigned_hours)}/{MAX_DAILY_HOURS})"
        )

    @property
    def available_hours(self) -> Decimal:
        """Hours left before the daily ceiling, never negative."""
        return max(Decimal("0"), MAX_DAILY_HOURS - self.total_assigned_hours)

    def has_capacity_for(self, hours: Decimal) -> bool:
        """Check if the worker can take on `hours` more without passing the ceiling."""
        return self.total_assigned_hours + hours <= MAX_DAILY_HOURS

    def is_assignable(self) -> bool:
        """Available and still under the daily ceiling."""
        return self.availability and self.total_assigned_hours < MAX_DAILY_HOURS

    def copy(self) -> "Worker":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "availability": self.availability,
            "totalAssignedHours": float(self.total_assigned_hours),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Worker":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            availability=bool(data.get("availability", True)),
            total_assigned_hours=to_hours(data.get("totalAssignedHours", 0)),
        )


@dataclass
class Task:
    """Task model representing a unit of work to be bound to a worker."""

    id: str
    description: str
    priority: Priority
    time_estimate: Decimal
    deadline: datetime
    assigned_to: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    completed: bool = False

    def __repr__(self) -> str:
        return (
            f"Task({self.id}, description={self.description}, "
            f"priority={self.priority.value}, hours={format_hours(self.time_estimate)}, "
            f"assigned_to={self.assigned_to}, completed={self.completed})"
        )

    @property
    def is_assigned(self) -> bool:
        return self.assigned_to is not None

    @property
    def is_open(self) -> bool:
        """Unassigned and not completed."""
        return self.assigned_to is None and not self.completed

    def copy(self) -> "Task":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "priority": self.priority.value,
            "timeEstimate": float(self.time_estimate),
            "deadline": self.deadline.isoformat(),
            "assignedTo": self.assigned_to,
            "createdAt": self.created_at.isoformat(),
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        assigned_to = data.get("assignedTo")
        return cls(
            id=str(data["id"]),
            description=str(data["description"]),
            priority=Priority(data["priority"]),
            time_estimate=to_hours(data["timeEstimate"]),
            deadline=_parse_timestamp(str(data["deadline"])),
            assigned_to=str(assigned_to) if assigned_to else None,
            created_at=_parse_timestamp(str(data["createdAt"])),
            completed=bool(data.get("completed", False)),
        )
