"""
In-memory snapshot storage for tests and throwaway sessions.
"""
import copy
from typing import Any, Dict, Optional

from errors import PersistenceError
from persistence.interfaces import SnapshotGateway
from persistence.snapshot import EngineState


class InMemoryGateway(SnapshotGateway):
    """Keeps the last saved snapshot as an encoded dictionary."""

    def __init__(self, payload: Optional[Dict[str, Any]] = None):
        self.payload = copy.deepcopy(payload)
        self.save_count = 0
        self.fail_saves = False

    def load(self) -> Optional[EngineState]:
        if self.payload is None:
            return None
        return EngineState.from_dict(copy.deepcopy(self.payload))

    def save(self, state: EngineState) -> None:
        if self.fail_saves:
            raise PersistenceError("Failed to save data")
        self.payload = state.to_dict()
        self.save_count += 1
