"""Session logging commands: log-session, show-log."""

from dataclasses import replace
from typing import Annotated, Optional

import typer

from ...core.config import DAYS_PER_WEEK, PROGRAM_WEEKS
from ...core.models import LoggedSet
from ...core.progress import apply_logged_session, completion_percent, prefill_log
from ...io.serializers import ValidationError, parse_slot_memo, parse_slot_sets
from .. import views
from ..app import DataDirOption, app, get_store, load_profile_or_exit, program_for


def _apply_slot_sets(
    rows: list[LoggedSet],
    slot_index: int,
    sets: list[tuple[float, int]],
) -> list[LoggedSet]:
    """
    Overwrite actual results of one exercise with user-given sets.

    Prescribed sets without a given value are left blank.
    """
    slot_rows = [r for r in rows if r.exercise_index == slot_index]
    if not slot_rows:
        raise ValidationError(f"This day has no exercise #{slot_index + 1}")
    if len(sets) > len(slot_rows):
        raise ValidationError(
            f"Exercise #{slot_index + 1} has {len(slot_rows)} sets, got {len(sets)}"
        )

    out: list[LoggedSet] = []
    for r in rows:
        if r.exercise_index != slot_index:
            out.append(r)
            continue
        i = r.set_number - 1
        if i < len(sets):
            weight, reps = sets[i]
            out.append(replace(r, actual_weight_kg=weight, actual_reps=reps))
        else:
            out.append(replace(r, actual_weight_kg=None, actual_reps=None))
    return out


def _apply_memos(rows: list[LoggedSet], memos: list[str]) -> list[LoggedSet]:
    """
    Attach ``--memo`` notes to the session rows.

    Session notes go on every row; "SLOT:text" notes only on that
    exercise's rows.  Several notes for the same row are joined with "; ".
    """
    session_notes: list[str] = []
    slot_notes: dict[int, list[str]] = {}
    for text in memos:
        slot_index, note = parse_slot_memo(text)
        if slot_index is None:
            session_notes.append(note)
            continue
        if not any(r.exercise_index == slot_index for r in rows):
            raise ValidationError(f"This day has no exercise #{slot_index + 1}")
        slot_notes.setdefault(slot_index, []).append(note)

    out: list[LoggedSet] = []
    for r in rows:
        notes = session_notes + slot_notes.get(r.exercise_index, [])
        out.append(replace(r, memo="; ".join(notes)) if notes else r)
    return out


@app.command("log-session")
def log_session(
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-w", help="Program week (default: current)"),
    ] = None,
    day_num: Annotated[
        Optional[int],
        typer.Option("--day", "-d", help="Day of the week, 1-3 (default: current)"),
    ] = None,
    sets: Annotated[
        Optional[list[str]],
        typer.Option(
            "--sets",
            "-s",
            help="Actual sets for one exercise: SLOT:WxR,... e.g. 1:75x5,75x5,72.5x5 (repeatable)",
        ),
    ] = None,
    memo: Annotated[
        Optional[list[str]],
        typer.Option(
            "--memo",
            "-m",
            help="Note for the session, or SLOT:text for one exercise (repeatable)",
        ),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Record a training session.

    Exercises not given with --sets are logged exactly as planned
    (weights rounded to 0.5 kg).  A --memo of the form SLOT:text is stored
    with that exercise only.  The first log of a session advances
    the program to the next day; logging it again edits the entries.
    """
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)

    week = week if week is not None else profile.current_week
    day_num = day_num if day_num is not None else profile.current_day
    if not 1 <= week <= PROGRAM_WEEKS or not 1 <= day_num <= DAYS_PER_WEEK:
        views.print_error(f"Week must be 1-{PROGRAM_WEEKS} and day 1-{DAYS_PER_WEEK}")
        raise typer.Exit(1)

    rows = prefill_log(program_for(profile, store), week, day_num)
    try:
        for text in sets or []:
            slot_index, slot_sets = parse_slot_sets(text)
            rows = _apply_slot_sets(rows, slot_index, slot_sets)
        rows = _apply_memos(rows, memo or [])
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    try:
        existing = store.load_log()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    profile, merged, advanced = apply_logged_session(profile, existing, rows, week, day_num)
    store.save_log(merged)
    store.save_profile(profile)

    views.print_success(f"Logged week {week} day {day_num} ({len(rows)} sets).")
    if advanced:
        pct = completion_percent(profile.current_week, profile.current_day)
        views.print_info(
            f"Next session: week {profile.current_week} day {profile.current_day} ({pct:.0f}% done)"
        )
    else:
        views.print_info("Session was already completed; entries updated.")


@app.command("show-log")
def show_log(
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-w", help="Only this week"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Show logged sets next to the plan."""
    store = get_store(data_dir)
    load_profile_or_exit(store)
    try:
        rows = store.load_log()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if week is not None:
        rows = [r for r in rows if r.week == week]
    views.print_log(rows)
