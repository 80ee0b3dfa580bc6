"""
Snapshot of the full engine state and its dictionary codec.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from errors import PersistenceError
from models import Task, Worker


@dataclass
class EngineState:
    """Workers, tasks and both id counters at one instant."""

    workers: List[Worker] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    next_worker_seq: int = 1
    next_task_seq: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "workers": [w.to_dict() for w in self.workers],
            "tasks": [t.to_dict() for t in self.tasks],
            "nextWorkerSeq": self.next_worker_seq,
            "nextTaskSeq": self.next_task_seq,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "EngineState":
        """
        Decode a snapshot dictionary.

        Missing collections default to empty and missing counters to 1.
        The older nextWorkerId/nextTaskId keys are read as well.

        Raises:
            PersistenceError: If the payload is not a valid snapshot
        """
        if not isinstance(data, dict):
            raise PersistenceError("Snapshot payload must be an object")

        try:
            workers = [Worker.from_dict(w) for w in data.get("workers") or []]
            tasks = [Task.from_dict(t) for t in data.get("tasks") or []]
            next_worker_seq = data.get("nextWorkerSeq", data.get("nextWorkerId")) or 1
            next_task_seq = data.get("nextTaskSeq", data.get("nextTaskId")) or 1
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise PersistenceError(f"Corrupt snapshot: {exc}") from exc

        for name, value in (("nextWorkerSeq", next_worker_seq), ("nextTaskSeq", next_task_seq)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise PersistenceError(f"Corrupt snapshot: invalid {name} {value!r}")

        return cls(
            workers=workers,
            tasks=tasks,
            next_worker_seq=next_worker_seq,
            next_task_seq=next_task_seq,
        )
