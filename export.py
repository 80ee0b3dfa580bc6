"""
Export utilities for tasks and workers.

CSV exports use a fixed column header and quote every cell. The Excel
export writes the same tables to separate sheets plus a summary sheet.
"""
import csv
import os
from typing import List, Dict, Optional, Union

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import PatternFill, Font, Alignment

from analysis.metrics import compute_board_metrics
from models import Task, Worker, format_hours
from utils.logger import logger

UNASSIGNED_LABEL = "Unassigned"

TASK_COLUMNS = [
    "ID",
    "Description",
    "Priority",
    "Time Estimate",
    "Deadline",
    "Assigned To",
    "Status",
    "Created At",
]

WORKER_COLUMNS = ["ID", "Name", "Availability", "Assigned Hours", "Available Hours"]


def tasks_to_frame(tasks: List[Task], unassigned_label: str = UNASSIGNED_LABEL) -> pd.DataFrame:
    """Tabulate tasks as display strings, one row per task."""
    rows = [
        [
            t.id,
            t.description,
            t.priority.value,
            format_hours(t.time_estimate),
            t.deadline.isoformat(),
            t.assigned_to or unassigned_label,
            "Completed" if t.completed else "Active",
            t.created_at.isoformat(),
        ]
        for t in tasks
    ]
    return pd.DataFrame(rows, columns=TASK_COLUMNS, dtype=str)


def workers_to_frame(workers: List[Worker]) -> pd.DataFrame:
    """Tabulate workers as display strings, one row per worker."""
    rows = [
        [
            w.id,
            w.name,
            "Available" if w.availability else "Unavailable",
            format_hours(w.total_assigned_hours),
            format_hours(w.available_hours),
        ]
        for w in workers
    ]
    return pd.DataFrame(rows, columns=WORKER_COLUMNS, dtype=str)


def _write_csv(frame: pd.DataFrame, path: Optional[str]) -> str:
    text = frame.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n").rstrip("\n")
    if path:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text + "\n")
        logger.info(f"CSV export saved as '{path}'")
    return text


def export_tasks_csv(
    tasks: List[Task],
    path: Optional[str] = None,
    unassigned_label: str = UNASSIGNED_LABEL,
) -> str:
    """
    Render tasks as CSV text, optionally writing it to `path`.

    Returns:
        str: CSV text with a header row and no trailing newline
    """
    return _write_csv(tasks_to_frame(tasks, unassigned_label), path)


def export_workers_csv(workers: List[Worker], path: Optional[str] = None) -> str:
    """Render workers as CSV text, optionally writing it to `path`."""
    return _write_csv(workers_to_frame(workers), path)


def export_to_excel(
        filename: str,
        workers: List[Worker],
        tasks: List[Task],
        unassigned_label: str = UNASSIGNED_LABEL,
) -> bool:
    """
    Export workers, tasks and board metrics to an Excel workbook.

    Args:
        filename: File to save the Excel spreadsheet
        workers: Workers to list
        tasks: Tasks to list
        unassigned_label: Placeholder for tasks without a worker

    Returns:
        bool: True if export successful
    """
    wb = Workbook()

    header_fill = PatternFill(start_color="D0D0D0", end_color="D0D0D0", fill_type="solid")
    header_font = Font(bold=True)
    center_align = Alignment(horizontal="center")

    def style_header(sheet) -> None:
        for cell in sheet[1]:
            cell.fill = header_fill
            cell.font = header_font
            cell.alignment = center_align

    # Tasks sheet
    ws1 = wb.active
    ws1.title = "Tasks"
    ws1.append(TASK_COLUMNS)
    style_header(ws1)
    for row in tasks_to_frame(tasks, unassigned_label).itertuples(index=False):
        ws1.append(list(row))

    # Workers sheet
    ws2 = wb.create_sheet("Workers")
    ws2.append(WORKER_COLUMNS)
    style_header(ws2)
    for row in workers_to_frame(workers).itertuples(index=False):
        ws2.append(list(row))

    # Summary sheet
    ws3 = wb.create_sheet("Summary")
    ws3.append(["Metric", "Value"])
    style_header(ws3)
    metrics: Dict[str, Union[int, float]] = compute_board_metrics(workers, tasks)
    for name, value in metrics.items():
        label = name.replace("_", " ").title()
        ws3.append([label, round(value, 2) if isinstance(value, float) else value])

    # Adjust column widths for better readability
    for sheet in wb.worksheets:
        for col in sheet.columns:
            max_len = 0
            col_letter = get_column_letter(col[0].column)
            for cell in col:
                if cell.value is not None:
                    max_len = max(max_len, len(str(cell.value)))
            sheet.column_dimensions[col_letter].width = max_len + 2

    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)

    try:
        wb.save(filename)
    except OSError as e:
        logger.error(f"Error saving Excel report: {e}")
        return False

    logger.info(f"Excel report saved as '{filename}'")
    return True
