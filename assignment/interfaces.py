# Directory: assignment/interfaces.py
"""
Interfaces for task assignment models.
"""
from abc import ABC, abstractmethod
from typing import List, Dict, Optional
from models import Task, Worker


class AssignmentModel(ABC):
    """Base interface for models that propose task-to-worker bindings."""

    @abstractmethod
    def plan(self, tasks: List[Task], workers: List[Worker]) -> Dict[str, Optional[str]]:
        """
        Propose assignments without changing any record.

        Args:
            tasks: Open tasks to place
            workers: Workers that may receive tasks

        Returns:
            Dict mapping task IDs to worker IDs (or None if no worker fits)
        """
        pass
