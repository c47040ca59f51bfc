"""
ASCII charts for terminal progress views.

Horizontal bar charts only: the projected estimated max per program week,
the starting-max history, and logged weekly tonnage.
"""

from .config import EXERCISE_NAMES
from .models import LoggedSet, MaxRecord, WeekPlan


def create_simple_bar_chart(
    labels: list[str],
    values: list[float],
    width: int = 40,
    title: str = "",
    unit: str = "",
) -> str:
    """
    Create a simple horizontal bar chart.

    Args:
        labels: Labels for each bar
        values: Values for each bar
        width: Maximum bar width
        title: Chart title
        unit: Suffix printed after each value

    Returns:
        ASCII bar chart string
    """
    if not values:
        return "No data to display."

    max_val = max(values)
    max_label_len = max(len(l) for l in labels) if labels else 0

    lines = []

    if title:
        lines.append(title)
        lines.append("─" * (max_label_len + width + 5))

    for label, value in zip(labels, values):
        bar_len = int((value / max_val) * width) if max_val > 0 else 0
        bar = "█" * bar_len
        lines.append(f"{label:>{max_label_len}} │{bar} {value:.1f}{unit}")

    return "\n".join(lines)


def weekly_top_estimate(program: list[WeekPlan], exercise: str = "bench") -> list[float | None]:
    """Highest estimated max of ``exercise`` prescribed in each week (None if absent)."""
    out: list[float | None] = []
    for week in program:
        estimates = [
            p.estimated_max_kg
            for d in week.days
            for p in d.prescriptions
            if p.exercise == exercise and p.estimated_max_kg is not None
        ]
        out.append(max(estimates) if estimates else None)
    return out


def create_estimate_chart(program: list[WeekPlan], exercise: str = "bench") -> str:
    """Bar chart of the projected estimated max across the program."""
    labels: list[str] = []
    values: list[float] = []
    for week, top in zip(program, weekly_top_estimate(program, exercise)):
        if top is None:
            continue
        labels.append(f"W{week.week}")
        values.append(top)
    return create_simple_bar_chart(
        labels,
        values,
        title=f"Projected e1RM: {EXERCISE_NAMES[exercise]}",
        unit=" kg",
    )


def create_max_history_chart(records: list[MaxRecord]) -> str:
    """Bar chart of the bench max at each recorded date."""
    if not records:
        return "No max records yet. Run 'init' first."
    labels = [r.date for r in records]
    values = [r.maxes.bench_kg for r in records]
    return create_simple_bar_chart(labels, values, title="Bench Press Max", unit=" kg")


def create_weekly_tonnage_chart(log: list[LoggedSet]) -> str:
    """Bar chart of logged tonnage (actual weight × actual reps) per program week."""
    tonnage: dict[int, float] = {}
    for s in log:
        if s.actual_weight_kg is None or s.actual_reps is None:
            continue
        tonnage[s.week] = tonnage.get(s.week, 0.0) + s.actual_weight_kg * s.actual_reps

    if not tonnage:
        return "No logged sets yet."

    weeks = sorted(tonnage)
    return create_simple_bar_chart(
        [f"W{w}" for w in weeks],
        [tonnage[w] for w in weeks],
        title="Weekly Tonnage",
        unit=" kg",
    )
