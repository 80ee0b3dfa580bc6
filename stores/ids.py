"""
Identifier allocation for workers and tasks.
"""
from enum import Enum
from typing import Dict, Iterable

from utils.logger import logger


class EntityKind(str, Enum):
    WORKER = "worker"
    TASK = "task"

    @property
    def prefix(self) -> str:
        return "W" if self is EntityKind.WORKER else "T"


class IdAllocator:
    """
    Issues W001, W002, ... and T001, T002, ... from two independent counters.

    Counters only ever move forward, so an id is never handed out twice.
    Past 999 the numeric part simply gets wider (W1000).
    """

    def __init__(self, next_worker_seq: int = 1, next_task_seq: int = 1, width: int = 3):
        self.width = width
        self._next: Dict[EntityKind, int] = {}
        self.restore(next_worker_seq, next_task_seq)

    @property
    def next_worker_seq(self) -> int:
        return self._next[EntityKind.WORKER]

    @property
    def next_task_seq(self) -> int:
        return self._next[EntityKind.TASK]

    def format_id(self, kind: EntityKind, seq: int) -> str:
        return f"{kind.prefix}{seq:0{self.width}d}"

    def next_id(self, kind: EntityKind) -> str:
        """Allocate the next identifier of the given kind."""
        kind = EntityKind(kind)
        seq = self._next[kind]
        self._next[kind] = seq + 1
        return self.format_id(kind, seq)

    def restore(self, next_worker_seq: int, next_task_seq: int) -> None:
        """Set both counters, as read back from a snapshot."""
        for kind, value in (
            (EntityKind.WORKER, next_worker_seq),
            (EntityKind.TASK, next_task_seq),
        ):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"Invalid {kind.value} sequence: {value!r}")
            self._next[kind] = value

    def reserve_existing(self, kind: EntityKind, ids: Iterable[str]) -> None:
        """Move a counter past every id already in use."""
        kind = EntityKind(kind)
        highest = 0
        for item_id in ids:
            suffix = item_id[len(kind.prefix):]
            if item_id.startswith(kind.prefix) and suffix.isdigit():
                highest = max(highest, int(suffix))

        if highest >= self._next[kind]:
            logger.warning(
                f"Stored {kind.value} sequence {self._next[kind]} is behind existing id "
                f"{self.format_id(kind, highest)}; advancing to {highest + 1}."
            )
            self._next[kind] = highest + 1
