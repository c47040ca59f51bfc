"""
Tests for tabular program export.
"""

import csv
import json

import openpyxl
import pytest

from bench_program.core.models import StartingMaxes
from bench_program.core.planner import generate_program
from bench_program.io.export import COLUMN_WIDTHS, HEADERS, export_program, program_rows

MAXES = StartingMaxes(90.0, 80.0, 80.0)


@pytest.fixture(scope="module")
def program():
    return generate_program(*MAXES.as_tuple())


def _count_prescriptions(program):
    return sum(len(d.prescriptions) for w in program for d in w.days)


class TestProgramRows:
    def test_row_count(self, program):
        assert len(program_rows(program)) == _count_prescriptions(program)

    def test_first_row(self, program):
        assert program_rows(program)[0] == [1, 1, "Bench Press", 74.5, 5, 3, 8, 90.5]

    def test_ramp_row_blank(self, program):
        row = program_rows(program)[2]  # week 1 day 2 ramp single
        assert row[:3] == [1, 2, "Bench Press"]
        assert row[6] == ""
        assert row[7] == ""

    def test_half_rpe_rounds_up(self, program):
        rows = program_rows(program)
        # week 3 day 1 legs-up is prescribed at RPE 8.5
        row = next(r for r in rows if r[0] == 3 and r[1] == 1 and r[2] == "Legs-Up Bench")
        assert row[6] == 9


class TestExportFiles:
    def test_xlsx(self, program, tmp_path):
        path = export_program(program, tmp_path / "program.xlsx", "xlsx")
        ws = openpyxl.load_workbook(path).active

        assert ws.title == "Program"
        assert tuple(c.value for c in ws[1]) == HEADERS
        assert ws.max_row == _count_prescriptions(program) + 1
        assert ws.column_dimensions["A"].width == COLUMN_WIDTHS[0]
        assert ws.column_dimensions["H"].width == COLUMN_WIDTHS[7]
        assert ws["D2"].value == 74.5
        assert ws["G4"].value is None  # ramp single has no RPE

    def test_csv(self, program, tmp_path):
        path = export_program(program, tmp_path / "out" / "program.csv", "csv")
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert tuple(rows[0]) == HEADERS
        assert rows[1][:4] == ["1", "1", "Bench Press", "74.5"]

    def test_json(self, program, tmp_path):
        path = export_program(program, tmp_path / "program.json", "json", MAXES)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["maxes"]["bench_kg"] == 90.0
        assert len(data["weeks"]) == 12
        first = data["weeks"][0]["days"][0]["prescriptions"][0]
        assert first["weight_kg"] == 74.7
        assert first["estimated_max_kg"] == 90.5
        assert data["weeks"][3]["is_deload"] is True
        assert len(data["weeks"][3]["accessories"]) == 6

    def test_unknown_format(self, program, tmp_path):
        with pytest.raises(ValueError):
            export_program(program, tmp_path / "program.pdf", "pdf")
