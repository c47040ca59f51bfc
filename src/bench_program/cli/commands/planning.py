"""Planning commands: program, day, explain, export."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.config import DAYS_PER_WEEK, PROGRAM_WEEKS
from ...core.planner import explain_day, find_day
from ...io.export import EXPORT_FORMATS, export_program
from ...io.serializers import program_to_dict, week_plan_to_dict
from .. import views
from ..app import DataDirOption, app, get_schedule, get_store, load_profile_or_exit, program_for


def _check_week(week: int) -> None:
    if not 1 <= week <= PROGRAM_WEEKS:
        views.print_error(f"Week must be between 1 and {PROGRAM_WEEKS}")
        raise typer.Exit(1)


def _check_day(day: int) -> None:
    if not 1 <= day <= DAYS_PER_WEEK:
        views.print_error(f"Day must be between 1 and {DAYS_PER_WEEK}")
        raise typer.Exit(1)


@app.command()
def program(
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-w", help="Show only this week (1-12)"),
    ] = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON instead of a table"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Show the 12-week program generated from your maxes.
    """
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)
    plan = program_for(profile, store)

    if week is not None:
        _check_week(week)
        plan = [plan[week - 1]]

    if json_out:
        if week is not None:
            data = week_plan_to_dict(plan[0])
        else:
            data = program_to_dict(plan, profile.maxes)
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return

    views.print_program(plan, profile)


@app.command()
def day(
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-w", help="Program week (default: current)"),
    ] = None,
    day_num: Annotated[
        Optional[int],
        typer.Option("--day", "-d", help="Day of the week, 1-3 (default: current)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Show one training day with its accessories.

    Defaults to the next session to perform.
    """
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)

    week = week if week is not None else profile.current_week
    day_num = day_num if day_num is not None else profile.current_day
    _check_week(week)
    _check_day(day_num)

    plan = program_for(profile, store)
    views.print_day(plan[week - 1], find_day(plan, week, day_num), profile)


@app.command()
def explain(
    week: Annotated[
        int,
        typer.Option("--week", "-w", help="Program week (1-12)"),
    ],
    day_num: Annotated[
        int,
        typer.Option("--day", "-d", help="Day of the week (1-3)"),
    ],
    data_dir: DataDirOption = None,
) -> None:
    """
    Explain step by step how a day's weights and estimated maxes were derived.
    """
    _check_week(week)
    _check_day(day_num)

    store = get_store(data_dir)
    profile = load_profile_or_exit(store)
    schedule = get_schedule(store)
    views.console.print(explain_day(*profile.maxes.as_tuple(), week, day_num, schedule=schedule))


@app.command()
def export(
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file path"),
    ],
    fmt: Annotated[
        str,
        typer.Option("--format", "-f", help="xlsx, csv or json"),
    ] = "xlsx",
    data_dir: DataDirOption = None,
) -> None:
    """
    Export the program to a spreadsheet, CSV or JSON file.
    """
    if fmt not in EXPORT_FORMATS:
        views.print_error(f"Format must be one of: {', '.join(EXPORT_FORMATS)}")
        raise typer.Exit(1)

    store = get_store(data_dir)
    profile = load_profile_or_exit(store)

    try:
        path = export_program(program_for(profile, store), output, fmt, profile.maxes)
    except OSError as e:
        views.print_error(f"Could not write {output}: {e}")
        raise typer.Exit(1)

    views.print_success(f"Program exported to {path}")
