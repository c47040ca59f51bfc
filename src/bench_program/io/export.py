"""
Tabular export of a generated program.

One row per prescription.  Weights are shown at the nearest 0.5 kg (what
can actually be loaded), RPE as an integer, and the estimated max with one
decimal; the last two are blank for ramp singles.
"""

import csv
import json
import math
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from ..core.config import EXERCISE_NAMES
from ..core.formulas import round1, round_to_plate
from ..core.models import StartingMaxes, WeekPlan
from .serializers import program_to_dict

EXPORT_FORMATS: tuple[str, ...] = ("xlsx", "csv", "json")

HEADERS: tuple[str, ...] = ("Week", "Day", "Exercise", "Weight (kg)", "Reps", "Sets", "RPE", "e1RM (kg)")
COLUMN_WIDTHS: tuple[int, ...] = (6, 5, 14, 10, 6, 8, 6, 14)
SHEET_TITLE = "Program"

_HEADER_FILL = PatternFill("solid", fgColor="1F4E78")
_HEADER_FONT = Font(bold=True, color="FFFFFF")


def _round_half_up(value: float) -> int:
    # RPE 8.5 displays as 9; round() would give 8
    return math.floor(value + 0.5)


def program_rows(program: list[WeekPlan]) -> list[list[Any]]:
    """
    Flatten a program into export rows (header excluded).

    Columns follow HEADERS; missing RPE / e1RM are empty strings.
    """
    rows: list[list[Any]] = []
    for week in program:
        for day in week.days:
            for p in day.prescriptions:
                rows.append([
                    week.week,
                    day.day,
                    EXERCISE_NAMES[p.exercise],
                    round_to_plate(p.weight_kg),
                    p.reps,
                    p.sets,
                    _round_half_up(p.rpe) if p.rpe is not None else "",
                    round1(p.estimated_max_kg) if p.estimated_max_kg is not None else "",
                ])
    return rows


def write_xlsx(program: list[WeekPlan], path: Path) -> None:
    """Write a single-sheet workbook with a styled header row."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    for ci, header in enumerate(HEADERS, 1):
        c = ws.cell(row=1, column=ci, value=header)
        c.fill = _HEADER_FILL
        c.font = _HEADER_FONT
        c.alignment = Alignment(horizontal="center", vertical="center")
    for ci, width in enumerate(COLUMN_WIDTHS, 1):
        ws.column_dimensions[get_column_letter(ci)].width = width

    for row in program_rows(program):
        ws.append([None if v == "" else v for v in row])
    ws.freeze_panes = "A2"

    wb.save(path)


def write_csv(program: list[WeekPlan], path: Path) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADERS)
        writer.writerows(program_rows(program))


def write_json(program: list[WeekPlan], path: Path, maxes: StartingMaxes | None = None) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(program_to_dict(program, maxes), f, indent=2, ensure_ascii=False)


def export_program(
    program: list[WeekPlan],
    path: str | Path,
    fmt: str = "xlsx",
    maxes: StartingMaxes | None = None,
) -> Path:
    """
    Export a program in the requested format.

    Raises:
        ValueError: On an unknown format
    """
    path = Path(path)
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format {fmt!r}. Use one of {EXPORT_FORMATS}")
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "xlsx":
        write_xlsx(program, path)
    elif fmt == "csv":
        write_csv(program, path)
    else:
        write_json(program, path, maxes)
    return path
