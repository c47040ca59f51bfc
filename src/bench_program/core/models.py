"""
Data models for bench-program.

All core dataclasses representing the generated program, the caller-side
starting maxes, and logged training results.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from .config import (
    DAYS_PER_WEEK,
    DELOAD_INTERVAL_WEEKS,
    EXERCISE_KINDS,
    EXERCISE_NAMES,
    MAX_SLOTS_PER_DAY,
    PROGRAM_WEEKS,
    RPE_MAX,
    RPE_MIN,
)

ExerciseKind = Literal["bench", "paused_bench", "legs_up_bench"]


def _validate_week(week: int) -> None:
    if not 1 <= week <= PROGRAM_WEEKS:
        raise ValueError(f"week must be in 1..{PROGRAM_WEEKS}, got {week}")


def _validate_day(day: int) -> None:
    if not 1 <= day <= DAYS_PER_WEEK:
        raise ValueError(f"day must be in 1..{DAYS_PER_WEEK}, got {day}")


@dataclass(frozen=True)
class SetPrescription:
    """
    One exercise prescription within a day.

    rpe and estimated_max_kg are both None for ramp singles, which carry
    no progression semantics.
    """

    exercise: ExerciseKind
    weight_kg: float
    reps: int
    sets: int
    rpe: float | None = None
    estimated_max_kg: float | None = None

    def __post_init__(self) -> None:
        """Validate prescription data."""
        if self.exercise not in EXERCISE_KINDS:
            raise ValueError(f"Invalid exercise: {self.exercise!r}")
        if self.weight_kg < 0:
            raise ValueError("weight_kg must be non-negative")
        if self.reps <= 0:
            raise ValueError("reps must be positive")
        if self.sets <= 0:
            raise ValueError("sets must be positive")
        if self.rpe is not None and not RPE_MIN <= self.rpe <= RPE_MAX:
            raise ValueError(f"rpe must be in [{RPE_MIN}, {RPE_MAX}], got {self.rpe}")
        if (self.rpe is None) != (self.estimated_max_kg is None):
            raise ValueError("estimated_max_kg must be present exactly when rpe is")

    @property
    def is_ramp(self) -> bool:
        """True for feeler singles without RPE or estimated max."""
        return self.rpe is None

    @property
    def display_name(self) -> str:
        return EXERCISE_NAMES[self.exercise]


@dataclass(frozen=True)
class DayPlan:
    """A training day: ordered prescriptions, first listed is performed first."""

    day: int
    prescriptions: tuple[SetPrescription, ...]

    def __post_init__(self) -> None:
        _validate_day(self.day)
        if not 1 <= len(self.prescriptions) <= MAX_SLOTS_PER_DAY:
            raise ValueError(
                f"A day holds 1..{MAX_SLOTS_PER_DAY} prescriptions, got {len(self.prescriptions)}"
            )


@dataclass(frozen=True)
class AccessoryPrescription:
    """Assistance exercise for one weekday.  Purely descriptive."""

    weekday: str
    category: str
    name: str
    reps: int
    sets: int

    def __post_init__(self) -> None:
        if self.reps <= 0:
            raise ValueError("reps must be positive")
        if self.sets <= 0:
            raise ValueError("sets must be positive")


@dataclass(frozen=True)
class WeekPlan:
    """One program week: three days plus the accessory list."""

    week: int
    days: tuple[DayPlan, ...]
    accessories: tuple[AccessoryPrescription, ...]

    def __post_init__(self) -> None:
        _validate_week(self.week)
        if len(self.days) != DAYS_PER_WEEK:
            raise ValueError(f"A week holds exactly {DAYS_PER_WEEK} days, got {len(self.days)}")

    @property
    def is_deload(self) -> bool:
        return self.week % DELOAD_INTERVAL_WEEKS == 0

    def day(self, day: int) -> DayPlan:
        """Return the DayPlan with the given 1-based index."""
        _validate_day(day)
        return self.days[day - 1]


@dataclass(frozen=True)
class StartingMaxes:
    """
    The three one-rep maxes a program is generated from (kg).

    Validation lives here, on the caller side: the engine assumes three
    finite positive numbers and never checks them itself.
    """

    bench_kg: float
    paused_bench_kg: float
    legs_up_bench_kg: float

    def __post_init__(self) -> None:
        for name in ("bench_kg", "paused_bench_kg", "legs_up_bench_kg"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive number, got {value}")

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.bench_kg, self.paused_bench_kg, self.legs_up_bench_kg)


@dataclass
class ProgramProfile:
    """
    User's program state: starting maxes and where they are in the plan.

    completed_sessions holds (week, day) pairs already logged.
    """

    maxes: StartingMaxes
    current_week: int = 1
    current_day: int = 1
    program_started: bool = True
    completed_sessions: list[tuple[int, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate profile data."""
        _validate_week(self.current_week)
        _validate_day(self.current_day)
        for week, day in self.completed_sessions:
            _validate_week(week)
            _validate_day(day)

    def is_completed(self, week: int, day: int) -> bool:
        return (week, day) in self.completed_sessions


@dataclass
class LoggedSet:
    """
    One performed (or pre-filled) set of a program session.

    Identified by (week, day, exercise_index, set_number); set_number is
    1-based.  actual_* are None when the user left the field blank.
    """

    week: int
    day: int
    exercise_index: int
    set_number: int
    exercise: ExerciseKind
    planned_weight_kg: float
    planned_reps: int
    actual_weight_kg: float | None = None
    actual_reps: int | None = None
    memo: str | None = None

    def __post_init__(self) -> None:
        """Validate logged set data."""
        _validate_week(self.week)
        _validate_day(self.day)
        if self.exercise not in EXERCISE_KINDS:
            raise ValueError(f"Invalid exercise: {self.exercise!r}")
        if self.exercise_index < 0:
            raise ValueError("exercise_index must be non-negative")
        if self.set_number < 1:
            raise ValueError("set_number must be >= 1")
        if self.actual_weight_kg is not None and self.actual_weight_kg < 0:
            raise ValueError("actual_weight_kg must be non-negative")
        if self.actual_reps is not None and self.actual_reps < 0:
            raise ValueError("actual_reps must be non-negative")

    @property
    def key(self) -> tuple[int, int, int, int]:
        return (self.week, self.day, self.exercise_index, self.set_number)


@dataclass
class MaxRecord:
    """Dated snapshot of the three maxes, appended whenever they change."""

    date: str  # ISO format: YYYY-MM-DD
    maxes: StartingMaxes

    def __post_init__(self) -> None:
        """Validate record date."""
        if not re.match(r"^\d{4}-\d{2}-\d{2}$", self.date):
            raise ValueError(f"Invalid date format: {self.date}. Expected YYYY-MM-DD")
        try:
            datetime.strptime(self.date, "%Y-%m-%d")
        except ValueError as e:
            raise ValueError(f"Invalid date: {self.date}") from e
