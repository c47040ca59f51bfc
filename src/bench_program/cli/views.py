"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of program data.
"""

from rich.console import Console
from rich.table import Table

from ..core.ascii_plot import create_estimate_chart, create_max_history_chart, create_weekly_tonnage_chart
from ..core.config import EXERCISE_NAMES
from ..core.formulas import round_to_plate
from ..core.models import AccessoryPrescription, DayPlan, LoggedSet, MaxRecord, ProgramProfile, WeekPlan
from ..core.progress import completion_percent

console = Console()

_EXERCISE_STYLE = {
    "bench": "cyan",
    "paused_bench": "magenta",
    "legs_up_bench": "green",
}


def _fmt_rpe(rpe: float | None) -> str:
    return f"{rpe:g}" if rpe is not None else "-"


def _fmt_e1rm(value: float | None) -> str:
    return f"{value:.1f}" if value is not None else "-"


def _marker(profile: ProgramProfile | None, week: int, day: int) -> str:
    if profile is None:
        return ""
    if profile.is_completed(week, day):
        return "✓"
    if (profile.current_week, profile.current_day) == (week, day):
        return ">"
    return ""


def format_program_table(
    program: list[WeekPlan],
    profile: ProgramProfile | None = None,
    title: str = "Bench Program",
) -> Table:
    """
    Create a Rich table of prescriptions, one row per exercise.

    Args:
        program: Weeks to display
        profile: When given, completed sessions get ✓ and the current one >

    Returns:
        Rich Table object
    """
    table = Table(title=title)

    table.add_column("", width=1)
    table.add_column("Wk", justify="right")
    table.add_column("Day", justify="right")
    table.add_column("Exercise")
    table.add_column("Weight(kg)", justify="right", style="bold")
    table.add_column("Reps", justify="right")
    table.add_column("Sets", justify="right")
    table.add_column("RPE", justify="right")
    table.add_column("e1RM(kg)", justify="right", style="dim")

    for week in program:
        wk_label = f"{week.week}D" if week.is_deload else str(week.week)
        for day in week.days:
            for i, p in enumerate(day.prescriptions):
                style = _EXERCISE_STYLE.get(p.exercise, "")
                table.add_row(
                    _marker(profile, week.week, day.day) if i == 0 else "",
                    wk_label if day.day == 1 and i == 0 else "",
                    str(day.day) if i == 0 else "",
                    f"[{style}]{p.display_name}[/{style}]",
                    f"{p.weight_kg:.1f}",
                    str(p.reps),
                    str(p.sets),
                    _fmt_rpe(p.rpe),
                    _fmt_e1rm(p.estimated_max_kg),
                )
        if week is not program[-1]:
            table.add_section()

    return table


def format_accessory_table(accessories: tuple[AccessoryPrescription, ...], week: int) -> Table:
    table = Table(title=f"Accessories, week {week}")
    table.add_column("Day", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Exercise")
    table.add_column("Reps", justify="right")
    table.add_column("Sets", justify="right")
    for a in accessories:
        table.add_row(a.weekday, a.category, a.name, str(a.reps), str(a.sets))
    return table


def print_program(program: list[WeekPlan], profile: ProgramProfile | None = None) -> None:
    console.print(format_program_table(program, profile))
    console.print("[dim]D = deload week · ✓ done · > next session[/dim]")


def print_day(week: WeekPlan, day: DayPlan, profile: ProgramProfile | None = None) -> None:
    """Print one training day with loadable weights and the week's accessories."""
    status = ""
    if profile is not None and profile.is_completed(week.week, day.day):
        status = " [green](done)[/green]"
    deload = " [yellow]deload[/yellow]" if week.is_deload else ""
    console.print(f"\n[bold cyan]Week {week.week} · Day {day.day}[/bold cyan]{deload}{status}")

    for i, p in enumerate(day.prescriptions, 1):
        style = _EXERCISE_STYLE.get(p.exercise, "")
        rpe = f" @ RPE {p.rpe:g}" if p.rpe is not None else " (ramp single)"
        e1rm = f"  [dim]e1RM {p.estimated_max_kg:.1f} kg[/dim]" if p.estimated_max_kg is not None else ""
        console.print(
            f"  {i}. [{style}]{p.display_name}[/{style}]: "
            f"[bold]{p.weight_kg:.1f} kg[/bold] (load {round_to_plate(p.weight_kg):g})"
            f" × {p.reps} × {p.sets}{rpe}{e1rm}"
        )
    console.print()
    console.print(format_accessory_table(week.accessories, week.week))


def format_log_table(rows: list[LoggedSet], title: str = "Training Log") -> Table:
    """
    Create a Rich table comparing logged sets with the plan.

    Args:
        rows: Logged sets, sorted by key

    Returns:
        Rich Table object
    """
    table = Table(title=title)

    table.add_column("Wk", justify="right")
    table.add_column("Day", justify="right")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Set", justify="right", style="dim")
    table.add_column("Exercise")
    table.add_column("Planned", justify="right")
    table.add_column("Actual", justify="right", style="bold")
    table.add_column("Memo", style="dim")

    for s in rows:
        planned = f"{s.planned_weight_kg:g}×{s.planned_reps}"
        if s.actual_weight_kg is None and s.actual_reps is None:
            actual = "-"
        else:
            w = f"{s.actual_weight_kg:g}" if s.actual_weight_kg is not None else "?"
            r = str(s.actual_reps) if s.actual_reps is not None else "?"
            actual = f"{w}×{r}"
            if (s.actual_weight_kg, s.actual_reps) != (s.planned_weight_kg, s.planned_reps):
                actual = f"[yellow]{actual}[/yellow]"
        style = _EXERCISE_STYLE.get(s.exercise, "")
        table.add_row(
            str(s.week),
            str(s.day),
            str(s.exercise_index + 1),
            str(s.set_number),
            f"[{style}]{EXERCISE_NAMES[s.exercise]}[/{style}]",
            planned,
            actual,
            s.memo or "",
        )

    return table


def print_log(rows: list[LoggedSet]) -> None:
    if not rows:
        console.print("[yellow]No sets logged yet.[/yellow]")
        return
    console.print(format_log_table(rows))


def format_status_display(profile: ProgramProfile) -> str:
    """
    Format program status as text block.

    Args:
        profile: Current profile

    Returns:
        Formatted string
    """
    m = profile.maxes
    pct = completion_percent(profile.current_week, profile.current_day)
    lines = [
        "Current status",
        f"- Bench Press max:     {m.bench_kg:g} kg",
        f"- 2s Paused Bench max: {m.paused_bench_kg:g} kg",
        f"- Legs-Up Bench max:   {m.legs_up_bench_kg:g} kg",
        f"- Next session: week {profile.current_week}, day {profile.current_day}",
        f"- Completed sessions: {len(profile.completed_sessions)}",
        f"- Program progress: {pct:.0f}%",
    ]
    return "\n".join(lines)


def format_max_history_table(records: list[MaxRecord]) -> Table:
    table = Table(title="Max History")
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Bench", justify="right", style="bold")
    table.add_column("Paused", justify="right")
    table.add_column("Legs-up", justify="right")
    for i, r in enumerate(records, 1):
        table.add_row(
            str(i),
            r.date,
            f"{r.maxes.bench_kg:g}",
            f"{r.maxes.paused_bench_kg:g}",
            f"{r.maxes.legs_up_bench_kg:g}",
        )
    return table


def print_max_history(records: list[MaxRecord]) -> None:
    console.print(format_max_history_table(records))
    console.print()
    console.print(create_max_history_chart(records))


def print_estimate_chart(program: list[WeekPlan]) -> None:
    console.print(create_estimate_chart(program))


def print_tonnage_chart(rows: list[LoggedSet]) -> None:
    console.print(create_weekly_tonnage_chart(rows))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
