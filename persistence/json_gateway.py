"""
JSON file snapshot storage.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from errors import PersistenceError
from persistence.interfaces import SnapshotGateway
from persistence.snapshot import EngineState
from utils.logger import logger


class JsonFileGateway(SnapshotGateway):
    """
    Stores the snapshot as a single JSON document.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash mid-write leaves the previous snapshot intact.
    """

    def __init__(self, path: Union[str, Path], indent: Optional[int] = 2):
        self.path = Path(path)
        self.indent = indent

    def load(self) -> Optional[EngineState]:
        if not self.path.exists():
            logger.info(f"No snapshot at {self.path}; starting empty.")
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Failed to read snapshot {self.path}: {exc}") from exc

        state = EngineState.from_dict(payload)
        logger.debug(
            f"Loaded {len(state.workers)} workers and {len(state.tasks)} tasks from {self.path}"
        )
        return state

    def save(self, state: EngineState) -> None:
        payload = state.to_dict()
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=self.indent)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise PersistenceError(f"Failed to save snapshot {self.path}: {exc}") from exc

        logger.debug(f"Snapshot saved to {self.path}")
