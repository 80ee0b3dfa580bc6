"""
Utility functions for generating demo workers and tasks.
"""
import random
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime, timedelta, timezone
from faker import Faker
from config import GeneratorConfig
from utils.logger import logger

TASK_ACTIONS = ["Clean", "Vacuum", "Mop", "Dust", "Sanitize", "Polish", "Restock"]
TASK_AREAS = ["Room", "Hallway", "Lobby", "Kitchen", "Office", "Restroom", "Stairwell"]


class DataGenerator:
    """Generator for demo data: worker names and cleaning tasks."""

    def __init__(self, seed: int = 42, config: Optional[GeneratorConfig] = None):
        """
        Initialize the generator with a specific seed and optional configuration.

        Args:
            seed: Random seed for reproducibility
            config: Optional generation settings
        """
        self.seed = seed
        self.fake = Faker()
        self.fake.seed_instance(seed)
        self.random = random.Random(seed)
        self.config = config or GeneratorConfig()

    def generate_worker_names(self, num_workers: int) -> List[str]:
        """Generate distinct-looking worker names."""
        names = [self.fake.name() for _ in range(num_workers)]
        logger.debug(f"Generated worker names: {names}")
        return names

    def generate_tasks(
        self, num_tasks: int, base_date: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """
        Generate task inputs for `AssignmentEngine.add_task`.

        Estimates are rounded to the nearest half hour inside the configured
        range; deadlines fall within the configured number of days.

        Args:
            num_tasks: Number of tasks to generate
            base_date: Start of the deadline window (defaults to now, UTC)

        Returns:
            List of dicts with description, priority, time_estimate, deadline
        """
        base_date = base_date or datetime.now(timezone.utc)
        low = int(self.config.hours_min * 2)
        high = max(low, int(self.config.hours_max * 2))
        tasks = []

        for _ in range(num_tasks):
            action = self.random.choice(TASK_ACTIONS)
            area = self.random.choice(TASK_AREAS)
            if area == "Room":
                area = f"Room {self.fake.random_int(min=100, max=399)}"

            deadline = base_date + timedelta(
                days=self.fake.random_int(min=0, max=self.config.deadline_max_days),
                hours=self.fake.random_int(min=8, max=17),
            )
            tasks.append(
                {
                    "description": f"{action} {area}",
                    "priority": self.random.choice(["high", "medium", "low"]),
                    "time_estimate": max(1, self.random.randint(low, high)) / 2,
                    "deadline": deadline.replace(minute=0, second=0, microsecond=0),
                }
            )

        logger.info(f"Generated {len(tasks)} demo tasks.")
        return tasks

    def generate_scenario(
            self,
            num_workers: int,
            num_tasks: int
    ) -> Tuple[List[str], List[Dict[str, Any]]]:
        """
        Generate worker names and task inputs together.

        Args:
            num_workers: Number of workers to generate
            num_tasks: Number of tasks to generate

        Returns:
            Tuple of worker names and task input dicts
        """
        return self.generate_worker_names(num_workers), self.generate_tasks(num_tasks)
