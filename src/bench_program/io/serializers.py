"""
JSON serialization for program data models.

Handles conversion between dataclasses and JSON-compatible dicts, plus
parsing of the compact set strings accepted by ``log-session``.
"""

import json
import math
import re
from typing import Any

from ..core.config import EXERCISE_KINDS
from ..core.models import (
    AccessoryPrescription,
    DayPlan,
    LoggedSet,
    MaxRecord,
    ProgramProfile,
    SetPrescription,
    StartingMaxes,
    WeekPlan,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_positive(value: Any, name: str) -> float:
    """
    Validate that a value is a finite positive number.

    Args:
        value: Value to validate
        name: Name for error message

    Returns:
        The value as float

    Raises:
        ValidationError: If value is not a positive number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return float(value)


def validate_exercise(exercise: Any) -> str:
    if exercise not in EXERCISE_KINDS:
        raise ValidationError(
            f"Invalid exercise: {exercise!r}. Must be one of {EXERCISE_KINDS}"
        )
    return exercise


# ---------------------------------------------------------------------------
# Maxes / profile
# ---------------------------------------------------------------------------


def maxes_to_dict(maxes: StartingMaxes) -> dict[str, Any]:
    return {
        "bench_kg": maxes.bench_kg,
        "paused_bench_kg": maxes.paused_bench_kg,
        "legs_up_bench_kg": maxes.legs_up_bench_kg,
    }


def dict_to_maxes(data: dict[str, Any]) -> StartingMaxes:
    """
    Convert dict to StartingMaxes.

    Raises:
        ValidationError: If any max is missing or not positive
    """
    return StartingMaxes(
        bench_kg=validate_positive(data.get("bench_kg"), "bench_kg"),
        paused_bench_kg=validate_positive(data.get("paused_bench_kg"), "paused_bench_kg"),
        legs_up_bench_kg=validate_positive(data.get("legs_up_bench_kg"), "legs_up_bench_kg"),
    )


def profile_to_dict(profile: ProgramProfile) -> dict[str, Any]:
    """
    Convert ProgramProfile to JSON-compatible dict.

    Args:
        profile: ProgramProfile to convert

    Returns:
        Dict representation
    """
    return {
        "maxes": maxes_to_dict(profile.maxes),
        "current_week": profile.current_week,
        "current_day": profile.current_day,
        "program_started": profile.program_started,
        "completed_sessions": [[w, d] for w, d in profile.completed_sessions],
    }


def dict_to_profile(data: dict[str, Any]) -> ProgramProfile:
    """
    Convert dict to ProgramProfile.

    Args:
        data: Dict representation

    Returns:
        ProgramProfile instance

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data.get("maxes"), dict):
        raise ValidationError("Profile has no 'maxes' section")
    maxes = dict_to_maxes(data["maxes"])

    try:
        completed = [(int(w), int(d)) for w, d in data.get("completed_sessions") or []]
        return ProgramProfile(
            maxes=maxes,
            current_week=int(data.get("current_week", 1)),
            current_day=int(data.get("current_day", 1)),
            program_started=bool(data.get("program_started", True)),
            completed_sessions=completed,
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid profile: {e}") from e


# ---------------------------------------------------------------------------
# Logged sets / max history
# ---------------------------------------------------------------------------


def logged_set_to_dict(s: LoggedSet) -> dict[str, Any]:
    d: dict[str, Any] = {
        "week": s.week,
        "day": s.day,
        "exercise_index": s.exercise_index,
        "set_number": s.set_number,
        "exercise": s.exercise,
        "planned_weight_kg": s.planned_weight_kg,
        "planned_reps": s.planned_reps,
        "actual_weight_kg": s.actual_weight_kg,
        "actual_reps": s.actual_reps,
    }
    if s.memo:
        d["memo"] = s.memo
    return d


def dict_to_logged_set(data: dict[str, Any]) -> LoggedSet:
    """
    Convert dict to LoggedSet.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        actual_weight = data.get("actual_weight_kg")
        actual_reps = data.get("actual_reps")
        return LoggedSet(
            week=int(data["week"]),
            day=int(data["day"]),
            exercise_index=int(data["exercise_index"]),
            set_number=int(data["set_number"]),
            exercise=validate_exercise(data.get("exercise")),  # type: ignore[arg-type]
            planned_weight_kg=float(data["planned_weight_kg"]),
            planned_reps=int(data["planned_reps"]),
            actual_weight_kg=float(actual_weight) if actual_weight is not None else None,
            actual_reps=int(actual_reps) if actual_reps is not None else None,
            memo=data.get("memo"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid logged set: {e}") from e


def max_record_to_dict(record: MaxRecord) -> dict[str, Any]:
    return {"date": record.date, **maxes_to_dict(record.maxes)}


def dict_to_max_record(data: dict[str, Any]) -> MaxRecord:
    try:
        return MaxRecord(date=str(data["date"]), maxes=dict_to_maxes(data))
    except KeyError as e:
        raise ValidationError(f"Max record missing field {e}") from e
    except ValueError as e:
        raise ValidationError(str(e)) from e


def to_json_line(data: dict[str, Any]) -> str:
    """Serialize a record to a single JSON line (no trailing newline)."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


# ---------------------------------------------------------------------------
# Program (export / --json output only; programs are never read back)
# ---------------------------------------------------------------------------


def prescription_to_dict(p: SetPrescription) -> dict[str, Any]:
    return {
        "exercise": p.exercise,
        "weight_kg": p.weight_kg,
        "reps": p.reps,
        "sets": p.sets,
        "rpe": p.rpe,
        "estimated_max_kg": p.estimated_max_kg,
    }


def day_plan_to_dict(day: DayPlan) -> dict[str, Any]:
    return {
        "day": day.day,
        "prescriptions": [prescription_to_dict(p) for p in day.prescriptions],
    }


def accessory_to_dict(a: AccessoryPrescription) -> dict[str, Any]:
    return {
        "weekday": a.weekday,
        "category": a.category,
        "name": a.name,
        "reps": a.reps,
        "sets": a.sets,
    }


def week_plan_to_dict(week: WeekPlan) -> dict[str, Any]:
    return {
        "week": week.week,
        "is_deload": week.is_deload,
        "days": [day_plan_to_dict(d) for d in week.days],
        "accessories": [accessory_to_dict(a) for a in week.accessories],
    }


def program_to_dict(program: list[WeekPlan], maxes: StartingMaxes | None = None) -> dict[str, Any]:
    d: dict[str, Any] = {"weeks": [week_plan_to_dict(w) for w in program]}
    if maxes is not None:
        d = {"maxes": maxes_to_dict(maxes), **d}
    return d


# ---------------------------------------------------------------------------
# log-session input
# ---------------------------------------------------------------------------

_SET_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*[xX×]\s*(\d+)$")
_SLOT_RE = re.compile(r"^(\d+)\s*:\s*(.+)$")
_MEMO_SLOT_RE = re.compile(r"^(\d+)\s*:\s*(.*)$", re.DOTALL)


def parse_slot_sets(text: str) -> tuple[int, list[tuple[float, int]]]:
    """
    Parse one ``--sets`` value.

    Format:
        SLOT:WxR,WxR,...   e.g. "1:75x5,75x5,72.5x5"

    SLOT is the 1-based exercise position within the day; each WxR is
    one performed set (weight kg × reps), in set order.

    Returns:
        (0-based exercise index, [(weight_kg, reps), ...])

    Raises:
        ValidationError: If the string is malformed
    """
    if not text or not text.strip():
        raise ValidationError("Sets string cannot be empty")

    m = _SLOT_RE.match(text.strip())
    if not m:
        raise ValidationError(
            f"Invalid sets string: '{text}'. Use SLOT:WxR,... (e.g. 1:75x5,75x5)."
        )
    slot = int(m.group(1))
    if slot < 1:
        raise ValidationError(f"Slot must be >= 1, got {slot}")

    sets: list[tuple[float, int]] = []
    for part in (p.strip() for p in m.group(2).split(",")):
        if not part:
            continue
        sm = _SET_RE.match(part)
        if not sm:
            raise ValidationError(
                f"Invalid set format: '{part}'. Use weight x reps (e.g. 75x5 or 72.5x5)."
            )
        sets.append((float(sm.group(1)), int(sm.group(2))))

    if not sets:
        raise ValidationError("No valid sets found in sets string")

    return slot - 1, sets


def parse_slot_memo(text: str) -> tuple[int | None, str]:
    """
    Parse one ``--memo`` value.

    "SLOT:text" attaches the note to one exercise of the day (1-based
    SLOT); anything else is a note for the whole session.

    Returns:
        (0-based exercise index or None, note text)

    Raises:
        ValidationError: If the note or a given SLOT is invalid
    """
    if not text or not text.strip():
        raise ValidationError("Memo cannot be empty")

    m = _MEMO_SLOT_RE.match(text.strip())
    if not m:
        return None, text.strip()

    slot = int(m.group(1))
    if slot < 1:
        raise ValidationError(f"Slot must be >= 1, got {slot}")
    note = m.group(2).strip()
    if not note:
        raise ValidationError(f"Memo for exercise #{slot} cannot be empty")
    return slot - 1, note
