"""Shared Typer app object, shared option types, and store utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.models import ProgramProfile, WeekPlan
from ..core.planner import generate_program
from ..core.schedule import ProgramSchedule, load_user_schedule
from ..io.program_store import ProgramStore, get_default_store
from ..io.serializers import ValidationError
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-D", help="Data directory (default: ~/.bench-program)"),
]

app = typer.Typer(
    name="bench-program",
    help="12-week bench-press program generated from your bench, paused bench and legs-up bench maxes.",
    no_args_is_help=True,
)


def get_store(data_dir: Path | None) -> ProgramStore:
    """Get program store from path or the default location."""
    if data_dir is None:
        return get_default_store()
    return ProgramStore(data_dir)


def load_profile_or_exit(store: ProgramStore) -> ProgramProfile:
    """Load the profile, printing an error and exiting 1 when it is missing or corrupt."""
    try:
        return store.load_profile()
    except FileNotFoundError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(f"Invalid profile: {e}")
        raise typer.Exit(1)


def get_schedule(store: ProgramStore) -> ProgramSchedule:
    """Bundled schedule with the accessory names from <data_dir>/program.yaml, if present."""
    return load_user_schedule(store.data_dir)


def program_for(profile: ProgramProfile, store: ProgramStore) -> list[WeekPlan]:
    """Regenerate the full program from the profile's maxes."""
    return generate_program(*profile.maxes.as_tuple(), schedule=get_schedule(store))
