"""
Capacity-constrained assignment engine.

The engine owns the worker registry, the task store and the id allocator
for one independent board. Every mutator runs under a single re-entrant
lock, so the capacity check and the commit of an assignment can never
interleave with another writer. Readers take the same lock and receive
copies, so a half-applied reassignment is never visible.

Snapshots are captured inside the lock and written after it is released.
A capture carries a version number; the save step drops any capture older
than the last one written, so a slow writer cannot overwrite newer state.
"""
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from assignment.greedy import GreedyAssigner
from assignment.interfaces import AssignmentModel
from errors import (
    AvailabilityError,
    CapacityError,
    EngineError,
    PersistenceError,
    Result,
)
from models import MAX_DAILY_HOURS, Task, Worker, format_hours
from persistence.interfaces import SnapshotGateway
from persistence.snapshot import EngineState
from stores.ids import EntityKind, IdAllocator
from stores.tasks import TaskStore
from stores.workers import WorkerRegistry
from utils.logger import logger
from utils.validators import check_hours_consistency

T = TypeVar("T")


class AssignmentEngine:
    """Workers, tasks and the rules that bind them."""

    def __init__(self, gateway: Optional[SnapshotGateway] = None, id_width: int = 3):
        self.gateway = gateway
        self._id_width = id_width
        self._lock = threading.RLock()
        self._save_lock = threading.Lock()
        self._version = 0
        self._saved_version = 0
        self._reset()

    def _reset(self, state: Optional[EngineState] = None) -> None:
        state = state or EngineState()
        self.allocator = IdAllocator(
            state.next_worker_seq, state.next_task_seq, width=self._id_width
        )
        self.workers = WorkerRegistry(self.allocator, state.workers)
        self.tasks = TaskStore(self.allocator, state.tasks)

    # ------------------------------------------------------------------
    # Snapshot handling
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """
        Replace the in-memory state with the gateway's snapshot.

        Missing, unreadable or corrupt data resets the engine to an empty
        board with both counters at 1 instead of failing.

        Returns:
            bool: True if a stored snapshot was restored
        """
        if self.gateway is None:
            return False

        with self._lock:
            try:
                state = self.gateway.load()
                if state is not None:
                    self._reset(state)
            except (PersistenceError, ValueError) as exc:
                logger.error(f"Failed to load snapshot, starting empty: {exc}")
                self._reset()
                return False

            if state is None:
                self._reset()
                return False

            self.allocator.reserve_existing(EntityKind.WORKER, (w.id for w in state.workers))
            self.allocator.reserve_existing(EntityKind.TASK, (t.id for t in state.tasks))

            for problem in check_hours_consistency(state.workers, state.tasks):
                logger.warning(f"Snapshot inconsistency: {problem}")

            logger.info(
                f"Loaded {len(self.workers)} workers and {len(self.tasks)} tasks."
            )
            return True

    def snapshot(self) -> EngineState:
        """Copy of the full state, suitable for a gateway."""
        with self._lock:
            return self._capture()

    def _capture(self) -> EngineState:
        return EngineState(
            workers=[w.copy() for w in self.workers.list_all()],
            tasks=[t.copy() for t in self.tasks.list_all()],
            next_worker_seq=self.allocator.next_worker_seq,
            next_task_seq=self.allocator.next_task_seq,
        )

    def _persist(self, state: EngineState, version: int) -> Optional[PersistenceError]:
        if self.gateway is None:
            return None

        with self._save_lock:
            if version <= self._saved_version:
                return None
            try:
                self.gateway.save(state)
            except PersistenceError as exc:
                logger.error(f"Snapshot save failed; in-memory change kept: {exc}")
                return exc
            self._saved_version = version
        return None

    def _mutate(self, action: str, fn: Callable[[], Tuple[T, bool]]) -> Result[T]:
        """
        Run `fn` under the lock and persist if it changed anything.

        `fn` returns (value, changed). Engine errors become a failed Result.
        """
        with self._lock:
            try:
                value, changed = fn()
            except EngineError as exc:
                logger.warning(f"{action} rejected: {exc}")
                return Result.failure(exc)

            if not changed:
                return Result.success(value)

            self._version += 1
            version = self._version
            state = self._capture()

        result = Result.success(value)
        result.save_error = self._persist(state, version)
        return result

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------

    def add_worker(self, name: str) -> Result[Worker]:
        def apply():
            worker = self.workers.add_worker(name)
            logger.info(f"Added worker {worker.id} ({worker.name}).")
            return worker.copy(), True

        return self._mutate("Add worker", apply)

    def set_availability(self, worker_id: str, availability: bool) -> Result[Worker]:
        def apply():
            worker = self.workers.set_availability(worker_id, availability)
            logger.info(
                f"Worker {worker.id} marked {'available' if worker.availability else 'unavailable'}."
            )
            return worker.copy(), True

        return self._mutate("Set availability", apply)

    def get_worker(self, worker_id: str) -> Optional[Worker]:
        with self._lock:
            worker = self.workers.get_by_id(worker_id)
            return worker.copy() if worker else None

    def list_workers(self) -> List[Worker]:
        with self._lock:
            return [w.copy() for w in self.workers.list_all()]

    def list_available_workers(self) -> List[Worker]:
        with self._lock:
            return [w.copy() for w in self.workers.list_available()]

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def add_task(
        self,
        description: str,
        priority: Any,
        time_estimate: Any,
        deadline: Any,
        assign_to: Optional[str] = None,
    ) -> Result[Task]:
        """
        Create a task, optionally assigning it right away.

        With `assign_to`, a rejected assignment is reported as the result's
        error while the created task is kept (and returned as the value).
        """

        def apply():
            task = self.tasks.add_task(description, priority, time_estimate, deadline)
            logger.info(f"Added task {task.id} ({task.description}).")
            return task.copy(), True

        created = self._mutate("Add task", apply)
        if not created.ok or assign_to is None:
            return created

        assigned = self.assign(created.value.id, assign_to)
        if not assigned.ok:
            return Result(value=created.value, error=assigned.error, save_error=created.save_error)
        return assigned

    def find_task(self, task_id: str) -> Optional[Task]:
        with self._lock:
            task = self.tasks.find_by_id(task_id)
            return task.copy() if task else None

    def list_tasks(self) -> List[Task]:
        with self._lock:
            return [t.copy() for t in self.tasks.list_all()]

    def list_unassigned_tasks(self) -> List[Task]:
        with self._lock:
            return [t.copy() for t in self.tasks.list_unassigned()]

    # ------------------------------------------------------------------
    # Assignment
    # ------------------------------------------------------------------

    def _assign_locked(self, task_id: str, worker_id: str) -> bool:
        task = self.tasks.require(task_id)
        worker = self.workers.require(worker_id)

        if not worker.availability:
            raise AvailabilityError(f"Worker {worker.name} is not available")

        if not worker.has_capacity_for(task.time_estimate):
            raise CapacityError(
                f"Worker {worker.name} would exceed maximum hours ({MAX_DAILY_HOURS}): "
                f"{format_hours(worker.total_assigned_hours)} + "
                f"{format_hours(task.time_estimate)}"
            )

        if task.assigned_to == worker.id:
            return False

        # Credit the previous owner; capacity only matters for the new one
        if task.assigned_to is not None:
            previous = self.workers.get_by_id(task.assigned_to)
            if previous is not None:
                previous.total_assigned_hours -= task.time_estimate

        task.assigned_to = worker.id
        worker.total_assigned_hours += task.time_estimate
        return True

    def assign(self, task_id: str, worker_id: str) -> Result[Task]:
        """
        Bind a task to a worker, moving it off its previous worker if any.

        Rejected with NotFoundError, AvailabilityError or CapacityError.
        Reaching exactly the daily ceiling is allowed.
        """

        def apply():
            changed = self._assign_locked(task_id, worker_id)
            if changed:
                logger.info(f"Assigned task {task_id} to worker {worker_id}.")
            return self.tasks.require(task_id).copy(), changed

        return self._mutate("Assign", apply)

    def unassign(self, task_id: str) -> Result[Task]:
        """Release a task from its worker; a no-op when it has none."""

        def apply():
            task = self.tasks.require(task_id)
            if task.assigned_to is None:
                return task.copy(), False

            owner = self.workers.get_by_id(task.assigned_to)
            if owner is not None:
                owner.total_assigned_hours -= task.time_estimate
            logger.info(f"Unassigned task {task.id} from worker {task.assigned_to}.")
            task.assigned_to = None
            return task.copy(), True

        return self._mutate("Unassign", apply)

    def complete(self, task_id: str) -> Result[Task]:
        """
        Mark a task completed.

        The owner and its hours are left alone: a completed task keeps
        counting against its worker's daily total.
        """

        def apply():
            task = self.tasks.require(task_id)
            task.completed = True
            logger.info(f"Completed task {task.id}.")
            return task.copy(), True

        return self._mutate("Complete", apply)

    def auto_assign(self, model: Optional[AssignmentModel] = None) -> Result[Dict[str, str]]:
        """
        Place open tasks using an assignment model (greedy by default).

        Each proposal goes through the same checks as `assign`; proposals
        that fail are skipped and logged.

        Returns:
            Result whose value maps task IDs to the worker each was bound to
        """
        if model is None:
            model = GreedyAssigner()

        def apply():
            proposal = model.plan(
                [t.copy() for t in self.tasks.list_unassigned()],
                [w.copy() for w in self.workers.list_available()],
            )
            applied: Dict[str, str] = {}
            for task_id, worker_id in proposal.items():
                if worker_id is None:
                    continue
                try:
                    if self._assign_locked(task_id, worker_id):
                        applied[task_id] = worker_id
                except EngineError as exc:
                    logger.warning(f"Skipping proposed assignment {task_id} -> {worker_id}: {exc}")
            logger.info(f"Auto-assigned {len(applied)} tasks.")
            return applied, bool(applied)

        return self._mutate("Auto-assign", apply)
