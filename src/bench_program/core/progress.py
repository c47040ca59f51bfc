"""
Program progress bookkeeping.

Tracks where the user is in the 12-week plan, builds pre-filled session
logs from the generated program, merges logged sets, and summarizes how
the starting maxes changed over time.  Everything here is pure; the
store in io/program_store.py persists the results.
"""

from dataclasses import replace

from .config import DAYS_PER_WEEK, EXERCISE_KINDS, PROGRAM_WEEKS, TOTAL_SESSIONS
from .formulas import round_to_plate
from .models import LoggedSet, MaxRecord, ProgramProfile, WeekPlan
from .planner import find_day


def next_position(week: int, day: int) -> tuple[int, int]:
    """
    Position after finishing (week, day).

    The last session of the program is terminal: finishing week 12 day 3
    stays at week 12 day 3.
    """
    if day < DAYS_PER_WEEK:
        return week, day + 1
    if week < PROGRAM_WEEKS:
        return week + 1, 1
    return PROGRAM_WEEKS, DAYS_PER_WEEK


def completion_percent(week: int, day: int) -> float:
    """Share of sessions before (week, day), in percent."""
    done = (week - 1) * DAYS_PER_WEEK + (day - 1)
    return done / TOTAL_SESSIONS * 100


def prefill_log(program: list[WeekPlan], week: int, day: int) -> list[LoggedSet]:
    """
    Build the default log for one session.

    One LoggedSet per prescribed set.  Weights are rounded to the nearest
    loadable plate increment; actual values default to the planned ones.
    """
    day_plan = find_day(program, week, day)
    rows: list[LoggedSet] = []
    for idx, p in enumerate(day_plan.prescriptions):
        weight = round_to_plate(p.weight_kg)
        for set_number in range(1, p.sets + 1):
            rows.append(
                LoggedSet(
                    week=week,
                    day=day,
                    exercise_index=idx,
                    set_number=set_number,
                    exercise=p.exercise,
                    planned_weight_kg=weight,
                    planned_reps=p.reps,
                    actual_weight_kg=weight,
                    actual_reps=p.reps,
                )
            )
    return rows


def upsert_sets(existing: list[LoggedSet], new: list[LoggedSet]) -> list[LoggedSet]:
    """
    Merge ``new`` rows into ``existing`` by (week, day, exercise_index, set_number).

    Returned rows are sorted by key.
    """
    merged = {s.key: s for s in existing}
    for s in new:
        merged[s.key] = s
    return [merged[k] for k in sorted(merged)]


def apply_logged_session(
    profile: ProgramProfile,
    existing: list[LoggedSet],
    logged: list[LoggedSet],
    week: int,
    day: int,
) -> tuple[ProgramProfile, list[LoggedSet], bool]:
    """
    Record a logged session.

    The rows are upserted and the session marked complete.  The current
    position moves to the session after (week, day) only on the first
    completion of that session; editing an already completed session
    leaves the position alone.

    Returns:
        (updated profile, merged log rows, whether the position advanced)
    """
    for s in logged:
        if (s.week, s.day) != (week, day):
            raise ValueError(
                f"Logged set belongs to week {s.week} day {s.day}, not week {week} day {day}"
            )

    rows = upsert_sets(existing, logged)
    if profile.is_completed(week, day):
        return profile, rows, False

    next_week, next_day = next_position(week, day)
    updated = replace(
        profile,
        current_week=next_week,
        current_day=next_day,
        program_started=True,
        completed_sessions=sorted([*profile.completed_sessions, (week, day)]),
    )
    return updated, rows, True


def max_progress(records: list[MaxRecord]) -> dict[str, float] | None:
    """
    Per-lift change from the first to the latest max record (kg).

    Returns None when there are fewer than two records.
    """
    if len(records) < 2:
        return None
    first = records[0].maxes.as_tuple()
    last = records[-1].maxes.as_tuple()
    return {kind: b - a for kind, a, b in zip(EXERCISE_KINDS, first, last)}
