"""
Worker registry.
"""
from typing import Dict, Iterable, List, Optional

from errors import NotFoundError
from models import Worker
from stores.ids import EntityKind, IdAllocator
from utils.validators import require_text


class WorkerRegistry:
    """
    Owns the workers in insertion order plus an id index.

    The list and the index are only ever extended together and there is no
    removal, so the two cannot drift apart. Not thread-safe on its own; the
    engine serializes access.
    """

    def __init__(self, allocator: IdAllocator, workers: Iterable[Worker] = ()):
        self._allocator = allocator
        self._workers: List[Worker] = []
        self._index: Dict[str, Worker] = {}
        for worker in workers:
            self._insert(worker)

    def __len__(self) -> int:
        return len(self._workers)

    def _insert(self, worker: Worker) -> None:
        if worker.id in self._index:
            raise ValueError(f"Duplicate worker id {worker.id}")
        self._workers.append(worker)
        self._index[worker.id] = worker

    def add_worker(self, name: str) -> Worker:
        """Create an available worker with no hours assigned."""
        name = require_text(name, "Worker name")
        worker = Worker(id=self._allocator.next_id(EntityKind.WORKER), name=name)
        self._insert(worker)
        return worker

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        return self._index.get(worker_id)

    def require(self, worker_id: str) -> Worker:
        worker = self._index.get(worker_id)
        if worker is None:
            raise NotFoundError(f"Worker with ID {worker_id} not found")
        return worker

    def set_availability(self, worker_id: str, availability: bool) -> Worker:
        """Flip the availability flag; hours and existing assignments stay as they are."""
        worker = self.require(worker_id)
        worker.availability = bool(availability)
        return worker

    def list_all(self) -> List[Worker]:
        return list(self._workers)

    def list_available(self) -> List[Worker]:
        """Workers that can still take new tasks, in registry order."""
        return [w for w in self._workers if w.is_assignable()]
