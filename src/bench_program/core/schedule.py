"""
YAML → typed program schedule loader.

Loads the 12-week slot table and the accessory tables from program.yaml
(bundled with the package).  A program.yaml in the data directory may
rename accessories (e.g. into the user's language) through
load_user_schedule.

Only weekday, category and name of accessory rows are taken from the
override.  Rep and set volumes and the ``weeks`` section encode the
coaching program and are never taken from it.  SCHEDULE holds the
bundled data only.

The slot table is validated once, at load time, so that the progression
engine can treat it as total:
  - 12 weeks in order, 3 days each, 1–2 slots per day
  - every ``base`` is a starting max or a key recorded by an earlier slot
  - every ``record`` key is written once
  - ramp slots (no rpe) carry no estimate and record nothing

Usage:
    from bench_program.core.schedule import SCHEDULE
    for week in SCHEDULE.weeks: ...
"""

from __future__ import annotations

import copy
import importlib.resources
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import yaml

from .config import (
    DAYS_PER_WEEK,
    DELOAD_ACCESSORY_COUNT,
    EXERCISE_KINDS,
    INPUT_PREFIX,
    MAX_SLOTS_PER_DAY,
    NORMAL_ACCESSORY_COUNT,
    PROGRAM_WEEKS,
    RPE_MAX,
    RPE_MIN,
    USER_OVERRIDE_FILENAME,
)

EstimateMode = Literal["formula", "carry", "lifted"]
_ESTIMATE_MODES: frozenset[str] = frozenset({"formula", "carry", "lifted"})

INPUT_REFS: tuple[str, ...] = tuple(INPUT_PREFIX + kind for kind in EXERCISE_KINDS)

_REQUIRED_SLOT_FIELDS: frozenset[str] = frozenset(
    {"exercise", "base", "percent", "reps", "sets"}
)

_RENAMABLE_ACCESSORY_FIELDS: frozenset[str] = frozenset({"weekday", "category", "name"})


# ---------------------------------------------------------------------------
# Typed schedule
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SlotSpec:
    """
    One prescription slot of the static schedule.

    weight = round1(value(base) * percent).  rpe=None marks a ramp single.
    """

    exercise: str
    base: str
    percent: float
    reps: int
    sets: int
    rpe: float | None = None
    estimate: EstimateMode | None = None
    record: str | None = None

    @property
    def is_ramp(self) -> bool:
        return self.rpe is None


@dataclass(frozen=True)
class DaySpec:
    day: int
    slots: tuple[SlotSpec, ...]


@dataclass(frozen=True)
class WeekSpec:
    week: int
    days: tuple[DaySpec, ...]


@dataclass(frozen=True)
class AccessorySpec:
    """Accessory row: weekday, category, name, and reps added to the base."""

    weekday: str
    category: str
    name: str
    rep_offset: int = 0


@dataclass(frozen=True)
class AccessoryTable:
    cycle: dict[int, tuple[int, int]]     # cycle week → (reps, sets)
    default: tuple[int, int]
    normal: tuple[AccessorySpec, ...]
    deload_reps: int
    deload_sets: int
    deload: tuple[AccessorySpec, ...]


@dataclass(frozen=True)
class ProgramSchedule:
    weeks: tuple[WeekSpec, ...]
    accessories: AccessoryTable

    def week(self, week: int) -> WeekSpec:
        return self.weeks[week - 1]


# ---------------------------------------------------------------------------
# Dict → dataclass conversion
# ---------------------------------------------------------------------------


def slot_from_dict(d: dict) -> SlotSpec:
    """Convert a raw slot dict to a SlotSpec, raising ValueError on bad fields."""
    missing = _REQUIRED_SLOT_FIELDS - set(d)
    if missing:
        raise ValueError(f"Slot missing fields: {sorted(missing)}")

    exercise = str(d["exercise"])
    if exercise not in EXERCISE_KINDS:
        raise ValueError(f"Unknown exercise {exercise!r}")

    rpe = float(d["rpe"]) if d.get("rpe") is not None else None
    estimate = d.get("estimate")
    record = d.get("record")

    if rpe is None:
        if estimate is not None or record is not None:
            raise ValueError(f"Ramp slot on {d['base']!r} cannot estimate or record")
    else:
        if not RPE_MIN <= rpe <= RPE_MAX:
            raise ValueError(f"rpe out of range: {rpe}")
        estimate = str(estimate) if estimate is not None else "formula"
        if estimate not in _ESTIMATE_MODES:
            raise ValueError(f"Unknown estimate mode {estimate!r}")
        if estimate != "formula" and rpe != RPE_MAX:
            raise ValueError(f"Estimate mode {estimate!r} requires rpe {RPE_MAX:g}")
        if not record:
            raise ValueError(f"Slot on {d['base']!r} with rpe {rpe:g} needs a record key")

    slot = SlotSpec(
        exercise=exercise,
        base=str(d["base"]),
        percent=float(d["percent"]),
        reps=int(d["reps"]),
        sets=int(d["sets"]),
        rpe=rpe,
        estimate=estimate,
        record=str(record) if record else None,
    )
    if slot.percent <= 0:
        raise ValueError(f"percent must be positive, got {slot.percent}")
    if slot.reps <= 0 or slot.sets <= 0:
        raise ValueError("reps and sets must be positive")
    return slot


def weeks_from_list(raw_weeks: list) -> tuple[WeekSpec, ...]:
    """
    Convert and validate the ``weeks`` section.

    Raises ValueError on shape errors, duplicate record keys, or a base
    that is not written before it is read.
    """
    if len(raw_weeks) != PROGRAM_WEEKS:
        raise ValueError(f"Expected {PROGRAM_WEEKS} weeks, got {len(raw_weeks)}")

    written: set[str] = set(INPUT_REFS)
    weeks: list[WeekSpec] = []

    for expected_week, raw_week in enumerate(raw_weeks, 1):
        if int(raw_week.get("week", 0)) != expected_week:
            raise ValueError(f"Weeks out of order at position {expected_week}")
        raw_days = raw_week.get("days") or []
        if len(raw_days) != DAYS_PER_WEEK:
            raise ValueError(f"Week {expected_week}: expected {DAYS_PER_WEEK} days")

        days: list[DaySpec] = []
        for expected_day, raw_day in enumerate(raw_days, 1):
            if int(raw_day.get("day", 0)) != expected_day:
                raise ValueError(f"Week {expected_week}: days out of order")
            raw_slots = raw_day.get("slots") or []
            if not 1 <= len(raw_slots) <= MAX_SLOTS_PER_DAY:
                raise ValueError(
                    f"Week {expected_week} day {expected_day}: "
                    f"expected 1..{MAX_SLOTS_PER_DAY} slots"
                )
            slots: list[SlotSpec] = []
            for raw_slot in raw_slots:
                slot = slot_from_dict(raw_slot)
                if slot.base not in written:
                    raise ValueError(
                        f"Week {expected_week} day {expected_day}: base {slot.base!r} "
                        "is not recorded by an earlier slot"
                    )
                if slot.record is not None:
                    if slot.record in written:
                        raise ValueError(f"Record key {slot.record!r} written twice")
                    written.add(slot.record)
                slots.append(slot)
            days.append(DaySpec(day=expected_day, slots=tuple(slots)))
        weeks.append(WeekSpec(week=expected_week, days=tuple(days)))

    return tuple(weeks)


def _accessory_from_dict(d: dict) -> AccessorySpec:
    missing = {"weekday", "category", "name"} - set(d)
    if missing:
        raise ValueError(f"Accessory missing fields: {sorted(missing)}")
    return AccessorySpec(
        weekday=str(d["weekday"]),
        category=str(d["category"]),
        name=str(d["name"]),
        rep_offset=int(d.get("rep_offset", 0)),
    )


def accessories_from_dict(d: dict) -> AccessoryTable:
    """Convert and validate the ``accessories`` section."""
    cycle = {
        int(k): (int(v["reps"]), int(v["sets"]))
        for k, v in (d.get("cycle") or {}).items()
    }
    default_raw = d.get("default") or {}
    default = (int(default_raw.get("reps", 15)), int(default_raw.get("sets", 2)))

    normal = tuple(_accessory_from_dict(a) for a in d.get("normal") or [])
    if len(normal) != NORMAL_ACCESSORY_COUNT:
        raise ValueError(
            f"Expected {NORMAL_ACCESSORY_COUNT} normal accessories, got {len(normal)}"
        )

    deload_raw = d.get("deload") or {}
    deload = tuple(_accessory_from_dict(a) for a in deload_raw.get("exercises") or [])
    if len(deload) != DELOAD_ACCESSORY_COUNT:
        raise ValueError(
            f"Expected {DELOAD_ACCESSORY_COUNT} deload accessories, got {len(deload)}"
        )

    return AccessoryTable(
        cycle=cycle,
        default=default,
        normal=normal,
        deload_reps=int(deload_raw.get("reps", 20)),
        deload_sets=int(deload_raw.get("sets", 2)),
        deload=deload,
    )


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; raises ValueError when the file is not one."""
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a mapping")
    return data


def get_bundled_yaml_path() -> Path:
    """Return the path to the bundled program.yaml."""
    ref = importlib.resources.files("bench_program").joinpath("program.yaml")
    with importlib.resources.as_file(ref) as p:
        return p


def get_user_yaml_path(data_dir: Path) -> Path | None:
    """Return <data_dir>/program.yaml if it exists, else None."""
    p = Path(data_dir) / USER_OVERRIDE_FILENAME
    return p if p.exists() else None


def _user_accessories(user_path: Path) -> dict | None:
    """Return the accessories section of a user override, or None to ignore it."""
    try:
        raw = _load_yaml_file(user_path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        warnings.warn(
            f"bench-program: ignoring override {user_path} ({exc})",
            stacklevel=3,
        )
        return None
    if "weeks" in raw:
        warnings.warn(
            f"bench-program: {user_path} overrides 'weeks'; "
            "the program coefficients are fixed and this section is ignored.",
            stacklevel=3,
        )
    section = raw.get("accessories")
    return section if isinstance(section, dict) else None


def _rename_rows(base_rows: list, rows: Any, label: str, ignored: list[str]) -> None:
    """Copy weekday/category/name from ``rows`` onto ``base_rows`` in place."""
    if not isinstance(rows, list) or len(rows) != len(base_rows):
        raise ValueError(f"'{label}' must list exactly {len(base_rows)} exercises")
    for base_row, row in zip(base_rows, rows):
        if not isinstance(row, dict):
            raise ValueError(f"'{label}' entries must be mappings")
        for k, v in row.items():
            if k in _RENAMABLE_ACCESSORY_FIELDS:
                base_row[k] = str(v)
            elif base_row.get(k) != v:
                ignored.append(f"{label}.{k}")


def _rename_accessories(base: dict, override: dict, user_path: Path) -> dict:
    """
    Apply an accessory override to the bundled section (non-destructive).

    Only weekday, category and name are taken from the override.  Volume
    keys (cycle, default, deload reps/sets, rep_offset) that differ from
    the bundled values are ignored with a warning.
    """
    result = copy.deepcopy(base)
    ignored: list[str] = []

    for k, v in override.items():
        if k == "normal":
            _rename_rows(result["normal"], v, "normal", ignored)
        elif k == "deload":
            if not isinstance(v, dict):
                raise ValueError("'deload' must be a mapping")
            for dk, dv in v.items():
                if dk == "exercises":
                    _rename_rows(result["deload"]["exercises"], dv, "deload.exercises", ignored)
                elif result["deload"].get(dk) != dv:
                    ignored.append(f"deload.{dk}")
        elif result.get(k) != v:
            ignored.append(k)

    if ignored:
        warnings.warn(
            f"bench-program: {user_path} may only rename accessories; "
            f"ignoring {', '.join(sorted(set(ignored)))}",
            stacklevel=3,
        )
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_schedule(
    bundled_path: Path | None = None,
    user_path: Path | None = None,
) -> ProgramSchedule:
    """
    Load and validate the program schedule.

    Load order (later overrides earlier, accessory names only):
    1. Bundled src/bench_program/program.yaml
    2. ``user_path``, normally <data_dir>/program.yaml (see get_user_yaml_path)

    Raises:
        ValueError: If the bundled data is malformed.
    """
    raw = _load_yaml_file(bundled_path or get_bundled_yaml_path())

    accessories_raw = raw.get("accessories") or {}
    if user_path is not None:
        override = _user_accessories(user_path)
        if override:
            try:
                renamed = _rename_accessories(accessories_raw, override, user_path)
                accessories_from_dict(renamed)
                accessories_raw = renamed
            except (ValueError, KeyError, TypeError) as exc:
                warnings.warn(
                    f"bench-program: ignoring accessory override in {user_path} ({exc})",
                    stacklevel=2,
                )

    return ProgramSchedule(
        weeks=weeks_from_list(raw.get("weeks") or []),
        accessories=accessories_from_dict(accessories_raw),
    )


def load_user_schedule(data_dir: Path) -> ProgramSchedule:
    """The bundled schedule with the accessory override of ``data_dir`` applied, if any."""
    user_path = get_user_yaml_path(data_dir)
    if user_path is None:
        return SCHEDULE
    return load_schedule(user_path=user_path)


def _build_schedule() -> ProgramSchedule:
    try:
        return load_schedule()
    except (OSError, ValueError, KeyError, TypeError, yaml.YAMLError) as exc:
        raise RuntimeError(
            f"bench-program: the bundled program.yaml could not be loaded ({exc}). "
            "Check that src/bench_program/program.yaml is present and valid."
        ) from exc


# Bundled data only; user overrides never reach this module-level value.
SCHEDULE: ProgramSchedule = _build_schedule()
