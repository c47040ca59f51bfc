"""Profile management commands: init, update-maxes, status."""

from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.models import MaxRecord, ProgramProfile, StartingMaxes
from .. import views
from ..app import DataDirOption, app, get_store, load_profile_or_exit


def _today() -> str:
    return datetime.now().strftime("%Y-%m-%d")


@app.command()
def init(
    bench_max: Annotated[
        float,
        typer.Option("--bench-max", "-b", help="Bench press 1RM in kg"),
    ],
    paused_max: Annotated[
        float,
        typer.Option("--paused-max", "-p", help="2-second paused bench 1RM in kg"),
    ],
    legs_up_max: Annotated[
        float,
        typer.Option("--legs-up-max", "-l", help="Legs-up bench 1RM in kg"),
    ],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing profile without prompting"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Start the program from your three current maxes.

    Creates the profile at week 1 day 1 and records the first max
    snapshot.  An existing profile and its training log are replaced.
    """
    store = get_store(data_dir)

    try:
        maxes = StartingMaxes(bench_max, paused_max, legs_up_max)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if store.exists() and not force:
        views.print_warning(f"A profile already exists in {store.data_dir}.")
        if not views.confirm_action("Start over and clear the training log?"):
            views.print_info("Cancelled.")
            raise typer.Exit(0)

    store.reset()
    store.save_profile(ProgramProfile(maxes=maxes))
    store.append_max_record(MaxRecord(date=_today(), maxes=maxes))

    views.print_success(f"Program initialized in {store.data_dir}")
    views.console.print(views.format_status_display(store.load_profile()))


@app.command("update-maxes")
def update_maxes(
    bench_max: Annotated[
        Optional[float],
        typer.Option("--bench-max", "-b", help="New bench press 1RM in kg"),
    ] = None,
    paused_max: Annotated[
        Optional[float],
        typer.Option("--paused-max", "-p", help="New 2-second paused bench 1RM in kg"),
    ] = None,
    legs_up_max: Annotated[
        Optional[float],
        typer.Option("--legs-up-max", "-l", help="New legs-up bench 1RM in kg"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Change one or more starting maxes.

    The whole program is regenerated from the new maxes; position and
    logged sets are kept.
    """
    if bench_max is None and paused_max is None and legs_up_max is None:
        views.print_error("Give at least one of --bench-max, --paused-max, --legs-up-max")
        raise typer.Exit(1)

    store = get_store(data_dir)
    profile = load_profile_or_exit(store)
    old = profile.maxes

    try:
        maxes = StartingMaxes(
            bench_max if bench_max is not None else old.bench_kg,
            paused_max if paused_max is not None else old.paused_bench_kg,
            legs_up_max if legs_up_max is not None else old.legs_up_bench_kg,
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    profile.maxes = maxes
    store.save_profile(profile)
    store.append_max_record(MaxRecord(date=_today(), maxes=maxes))

    views.print_success("Maxes updated; program regenerated.")
    views.console.print(views.format_status_display(profile))


@app.command()
def status(data_dir: DataDirOption = None) -> None:
    """Show maxes, next session and overall progress."""
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)
    views.console.print(views.format_status_display(profile))
