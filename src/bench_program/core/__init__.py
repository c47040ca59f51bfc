"""
Core computation for bench-program.

Pure modules: models, constants, formulas, the schedule loader and the
progression engine.
"""

from .models import (
    AccessoryPrescription,
    DayPlan,
    LoggedSet,
    MaxRecord,
    ProgramProfile,
    SetPrescription,
    StartingMaxes,
    WeekPlan,
)
from .planner import explain_day, find_day, generate_program, trace_program

__all__ = [
    "AccessoryPrescription",
    "DayPlan",
    "LoggedSet",
    "MaxRecord",
    "ProgramProfile",
    "SetPrescription",
    "StartingMaxes",
    "WeekPlan",
    "explain_day",
    "find_day",
    "generate_program",
    "trace_program",
]
