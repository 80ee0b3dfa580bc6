# Directory: persistence/interfaces.py
"""
Interfaces for snapshot storage.
"""
from abc import ABC, abstractmethod
from typing import Optional

from persistence.snapshot import EngineState


class SnapshotGateway(ABC):
    """Base interface for loading and saving the engine state."""

    @abstractmethod
    def load(self) -> Optional[EngineState]:
        """
        Load the last saved state.

        Returns:
            EngineState, or None when nothing has been saved yet

        Raises:
            PersistenceError: If stored data is unreadable or corrupt
        """
        pass

    @abstractmethod
    def save(self, state: EngineState) -> None:
        """
        Persist a full state snapshot.

        Args:
            state: State to write

        Raises:
            PersistenceError: If the snapshot could not be written
        """
        pass
