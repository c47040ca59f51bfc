"""Analysis commands: progress."""

import typer

from ...core.config import EXERCISE_NAMES
from ...core.progress import max_progress
from ...io.serializers import ValidationError
from .. import views
from ..app import DataDirOption, app, get_store, load_profile_or_exit, program_for


@app.command()
def progress(data_dir: DataDirOption = None) -> None:
    """
    Show how your maxes changed, the projected e1RM curve and logged tonnage.
    """
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)

    try:
        records = store.load_max_history()
        log = store.load_log()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if records:
        views.print_max_history(records)
    else:
        views.print_warning("No max records yet.")

    diffs = max_progress(records)
    if diffs is not None:
        views.console.print()
        views.console.print("[bold]Change since first record[/bold]")
        for kind, diff in diffs.items():
            color = "green" if diff > 0 else "red" if diff < 0 else "dim"
            views.console.print(f"  {EXERCISE_NAMES[kind]:<16} [{color}]{diff:+.1f} kg[/{color}]")

    views.console.print()
    views.print_estimate_chart(program_for(profile, store))
    views.console.print()
    views.print_tonnage_chart(log)
