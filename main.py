# Directory: main.py
"""
Command-line entry point for the task assignment engine.

Each invocation loads the snapshot, runs one operation and, for
mutations, saves the snapshot again.
"""
import os
import sys
import argparse
import json
import logging
from typing import List, Optional

from config import AppConfig
from errors import Result
from utils.logger import logger, setup_logger
from utils.generators import DataGenerator
from utils.validators import validate_task_id, validate_worker_id
from assignment.engine import AssignmentEngine
from analysis.metrics import compute_board_metrics
from analysis.queries import SortOption, StatusFilter, apply_view
from export import (
    export_tasks_csv,
    export_to_excel,
    export_workers_csv,
    tasks_to_frame,
    workers_to_frame,
)
from persistence.json_gateway import JsonFileGateway

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_SAVE_FAILED = 2


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        AppConfig: Application configuration
    """
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                config_dict = json.load(f)
            return AppConfig.from_dict(config_dict)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")
            logger.info("Using default configuration.")
            return AppConfig()
    else:
        return AppConfig()


def build_engine(config: AppConfig, data_path: Optional[str] = None) -> AssignmentEngine:
    """Create an engine backed by the JSON snapshot and load it."""
    gateway = JsonFileGateway(
        data_path or config.storage.snapshot_path, indent=config.storage.indent
    )
    engine = AssignmentEngine(gateway)
    engine.load()
    return engine


def report(result: Result, message: str) -> int:
    """Print the outcome of a mutation and map it to an exit code."""
    if not result.ok:
        print(f"Error ({result.kind.value}): {result.error}")
        return EXIT_REJECTED
    print(message)
    if result.save_error is not None:
        print(f"Warning: change applied but not saved: {result.save_error}")
        return EXIT_SAVE_FAILED
    return EXIT_OK


def check_ids(task_id: Optional[str] = None, worker_id: Optional[str] = None) -> Optional[str]:
    """Return a message for the first malformed id, or None."""
    if task_id is not None and not validate_task_id(task_id):
        return f"Invalid task ID {task_id!r}; expected T followed by digits (T001)"
    if worker_id is not None and not validate_worker_id(worker_id):
        return f"Invalid worker ID {worker_id!r}; expected W followed by digits (W001)"
    return None


def parse_on_off(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("on", "yes", "true", "1", "available"):
        return True
    if lowered in ("off", "no", "false", "0", "unavailable"):
        return False
    raise argparse.ArgumentTypeError(f"expected on/off, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Capacity-constrained task assignment for a daily crew"
    )
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--data", help="Path to the snapshot file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add-worker", help="Register a worker")
    p.add_argument("name")

    p = sub.add_parser("set-availability", help="Mark a worker available or not")
    p.add_argument("worker_id")
    p.add_argument("availability", type=parse_on_off, help="on or off")

    p = sub.add_parser("add-task", help="Create a task")
    p.add_argument("description")
    p.add_argument("--priority", default="medium", choices=["high", "medium", "low"])
    p.add_argument("--hours", required=True, help="Time estimate in hours")
    p.add_argument("--deadline", required=True, help="ISO date or date-time")
    p.add_argument("--assign", dest="assign_to", help="Worker ID to assign right away")

    p = sub.add_parser("assign", help="Assign a task to a worker")
    p.add_argument("task_id")
    p.add_argument("worker_id")

    p = sub.add_parser("unassign", help="Release a task from its worker")
    p.add_argument("task_id")

    p = sub.add_parser("complete", help="Mark a task completed")
    p.add_argument("task_id")

    p = sub.add_parser("workers", help="List workers")
    p.add_argument("--available", action="store_true", help="Only workers that can take tasks")

    p = sub.add_parser("tasks", help="List tasks")
    p.add_argument("--search", default="", help="Match description, ID or worker ID")
    p.add_argument("--status", default="all", choices=[s.value for s in StatusFilter])
    p.add_argument("--priority", default="all", choices=["all", "high", "medium", "low"])
    p.add_argument("--sort", default="none", choices=[s.value for s in SortOption])

    sub.add_parser("stats", help="Show board metrics")
    sub.add_parser("auto-assign", help="Assign open tasks greedily")

    p = sub.add_parser("export", help="Export tasks or workers")
    p.add_argument("what", choices=["tasks", "workers", "all"])
    p.add_argument("--format", default="csv", choices=["csv", "xlsx"])
    p.add_argument("--output", help="Output file (CSV is printed when omitted)")

    p = sub.add_parser("seed", help="Populate the board with demo data")
    p.add_argument("--workers", type=int, help="Number of workers")
    p.add_argument("--tasks", type=int, help="Number of tasks")

    return parser


def run_command(args: argparse.Namespace, engine: AssignmentEngine, config: AppConfig) -> int:
    """Dispatch a parsed command against the engine."""
    command = args.command

    problem = check_ids(getattr(args, "task_id", None), getattr(args, "worker_id", None))
    if problem is None and command == "add-task" and args.assign_to is not None:
        problem = check_ids(worker_id=args.assign_to)
    if problem is not None:
        print(f"Error (validation): {problem}")
        return EXIT_REJECTED

    if command == "add-worker":
        result = engine.add_worker(args.name)
        return report(result, f"Added worker {result.value.id}" if result.ok else "")

    if command == "set-availability":
        result = engine.set_availability(args.worker_id, args.availability)
        state = "available" if args.availability else "unavailable"
        return report(result, f"Worker {args.worker_id} is now {state}")

    if command == "add-task":
        result = engine.add_task(
            args.description, args.priority, args.hours, args.deadline, assign_to=args.assign_to
        )
        if result.value is not None and not result.ok:
            print(f"Created task {result.value.id} (left unassigned)")
        message = ""
        if result.ok:
            message = f"Created task {result.value.id}"
            if args.assign_to:
                message += f" and assigned it to {args.assign_to}"
        return report(result, message)

    if command == "assign":
        result = engine.assign(args.task_id, args.worker_id)
        return report(result, f"Assigned {args.task_id} to {args.worker_id}")

    if command == "unassign":
        result = engine.unassign(args.task_id)
        return report(result, f"Task {args.task_id} is unassigned")

    if command == "complete":
        result = engine.complete(args.task_id)
        return report(result, f"Task {args.task_id} completed")

    if command == "workers":
        workers = engine.list_available_workers() if args.available else engine.list_workers()
        print(workers_to_frame(workers).to_string(index=False) if workers else "No workers yet")
        return EXIT_OK

    if command == "tasks":
        tasks = apply_view(
            engine.list_tasks(),
            query=args.search,
            status=args.status,
            priority=args.priority,
            sort=args.sort,
        )
        if tasks:
            frame = tasks_to_frame(tasks, config.export.unassigned_label)
            print(frame.to_string(index=False))
        else:
            print("No tasks match filters")
        return EXIT_OK

    if command == "stats":
        metrics = compute_board_metrics(engine.list_workers(), engine.list_tasks())
        for name, value in metrics.items():
            shown = f"{value:.2f}" if isinstance(value, float) else value
            print(f"{name}: {shown}")
        return EXIT_OK

    if command == "auto-assign":
        result = engine.auto_assign()
        if result.ok:
            for task_id, worker_id in result.value.items():
                print(f"{task_id} -> {worker_id}")
        return report(result, f"Auto-assigned {len(result.value or {})} tasks")

    if command == "export":
        return run_export(args, engine, config)

    if command == "seed":
        generator = DataGenerator(seed=config.seed, config=config.generator)
        names, task_inputs = generator.generate_scenario(
            args.workers if args.workers is not None else config.generator.workers,
            args.tasks if args.tasks is not None else config.generator.tasks,
        )
        code = EXIT_OK
        for name in names:
            code = max(code, report(engine.add_worker(name), f"Added worker {name}"))
        for item in task_inputs:
            code = max(code, report(engine.add_task(**item), f"Added task {item['description']}"))
        return code

    raise ValueError(f"Unknown command {command}")


def run_export(args: argparse.Namespace, engine: AssignmentEngine, config: AppConfig) -> int:
    workers = engine.list_workers()
    tasks = engine.list_tasks()
    label = config.export.unassigned_label

    if args.format == "xlsx":
        filename = args.output or os.path.join(config.export.output_dir, "crewdesk_report.xlsx")
        return EXIT_OK if export_to_excel(filename, workers, tasks, label) else EXIT_REJECTED

    targets = ["tasks", "workers"] if args.what == "all" else [args.what]
    for target in targets:
        path = args.output
        if path and len(targets) > 1:
            root, ext = os.path.splitext(path)
            path = f"{root}_{target}{ext or '.csv'}"
        if target == "tasks":
            text = export_tasks_csv(tasks, path, label)
        else:
            text = export_workers_csv(workers, path)
        if not path:
            print(text)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)

    # Set up logging
    log_level = getattr(logging, args.log_level or config.log_level.upper(), logging.INFO)
    setup_logger(level=log_level)

    engine = build_engine(config, args.data)
    return run_command(args, engine, config)


if __name__ == "__main__":
    sys.exit(main())
