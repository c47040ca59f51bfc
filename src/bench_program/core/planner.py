"""
Program generation for bench-program.

Generates the deterministic 12-week plan from three starting maxes.
Weeks are processed strictly in order; each slot reads one value from
the estimated-max table (a starting max or an estimate written by an
earlier slot) and, unless it is a ramp single, writes a new estimate for
later slots to read.  The table lives for one call and is never exposed.
"""

from dataclasses import dataclass

from .accessories import accessories_for_week
from .config import EXERCISE_NAMES, INPUT_PREFIX
from .formulas import estimated_1rm, round1
from .models import DayPlan, SetPrescription, WeekPlan
from .schedule import SCHEDULE, ProgramSchedule, SlotSpec


class EstimatedMaxTable:
    """
    Write-once store of estimated maxes for a single generation call.

    Seeded with the three starting maxes under ``input.<exercise>``.
    Values are kept unrounded.
    """

    def __init__(self, bench_max: float, paused_bench_max: float, legs_up_max: float):
        self._values: dict[str, float] = {
            INPUT_PREFIX + "bench": bench_max,
            INPUT_PREFIX + "paused_bench": paused_bench_max,
            INPUT_PREFIX + "legs_up_bench": legs_up_max,
        }

    def __getitem__(self, key: str) -> float:
        return self._values[key]

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def record(self, key: str, value: float) -> None:
        """Write an estimate.  Each key may be written only once."""
        if key in self._values:
            raise ValueError(f"Estimated max {key!r} already recorded")
        self._values[key] = value


@dataclass(frozen=True)
class PrescriptionTrace:
    """
    All intermediate values behind one prescription.

    Consumed by explain_day() so the explanation never re-computes or
    diverges from the plan.
    """

    week: int
    day: int
    slot_index: int
    slot: SlotSpec
    base_value: float
    raw_weight: float          # base_value * percent, before rounding
    weight: float              # round1(raw_weight)
    estimated_max: float | None  # unrounded; None for ramp singles


def _derive(slot: SlotSpec, table: EstimatedMaxTable) -> tuple[float, float, float, float | None]:
    """Return (base_value, raw_weight, weight, estimate) for one slot and record the estimate."""
    base_value = table[slot.base]
    raw_weight = base_value * slot.percent
    weight = round1(raw_weight)

    estimate: float | None
    if slot.rpe is None:
        estimate = None
    elif slot.estimate == "carry":
        estimate = raw_weight
    elif slot.estimate == "lifted":
        estimate = weight
    else:
        estimate = estimated_1rm(weight, slot.reps, slot.rpe)

    if slot.record is not None and estimate is not None:
        table.record(slot.record, estimate)
    return base_value, raw_weight, weight, estimate


def _run(
    bench_max: float,
    paused_bench_max: float,
    legs_up_max: float,
    schedule: ProgramSchedule,
) -> tuple[list[WeekPlan], list[PrescriptionTrace]]:
    """Single forward pass producing both the plan and its traces."""
    table = EstimatedMaxTable(bench_max, paused_bench_max, legs_up_max)
    weeks: list[WeekPlan] = []
    traces: list[PrescriptionTrace] = []

    for week_spec in schedule.weeks:
        days: list[DayPlan] = []
        for day_spec in week_spec.days:
            prescriptions: list[SetPrescription] = []
            for i, slot in enumerate(day_spec.slots):
                base_value, raw_weight, weight, estimate = _derive(slot, table)
                prescriptions.append(
                    SetPrescription(
                        exercise=slot.exercise,  # type: ignore[arg-type]
                        weight_kg=weight,
                        reps=slot.reps,
                        sets=slot.sets,
                        rpe=slot.rpe,
                        estimated_max_kg=round1(estimate) if estimate is not None else None,
                    )
                )
                traces.append(
                    PrescriptionTrace(
                        week=week_spec.week,
                        day=day_spec.day,
                        slot_index=i,
                        slot=slot,
                        base_value=base_value,
                        raw_weight=raw_weight,
                        weight=weight,
                        estimated_max=estimate,
                    )
                )
            days.append(DayPlan(day=day_spec.day, prescriptions=tuple(prescriptions)))

        weeks.append(
            WeekPlan(
                week=week_spec.week,
                days=tuple(days),
                accessories=accessories_for_week(week_spec.week, schedule.accessories),
            )
        )

    return weeks, traces


def generate_program(
    bench_max: float,
    paused_bench_max: float,
    legs_up_max: float,
    schedule: ProgramSchedule = SCHEDULE,
) -> list[WeekPlan]:
    """
    Generate the full 12-week program.

    Inputs are starting maxes in kg and are assumed to be finite and
    positive; validate them with StartingMaxes before calling.

    Args:
        bench_max: Bench press 1RM
        paused_bench_max: 2-second paused bench 1RM
        legs_up_max: Legs-up bench 1RM
        schedule: Program data (defaults to the bundled schedule)

    Returns:
        12 WeekPlans in order
    """
    weeks, _ = _run(bench_max, paused_bench_max, legs_up_max, schedule)
    return weeks


def trace_program(
    bench_max: float,
    paused_bench_max: float,
    legs_up_max: float,
    schedule: ProgramSchedule = SCHEDULE,
) -> list[PrescriptionTrace]:
    """Return the derivation trace of every prescription, in program order."""
    _, traces = _run(bench_max, paused_bench_max, legs_up_max, schedule)
    return traces


def find_day(program: list[WeekPlan], week: int, day: int) -> DayPlan:
    """
    Look up one day of a generated program.

    Raises:
        ValueError: If week or day is out of range
    """
    if not 1 <= week <= len(program):
        raise ValueError(f"week must be in 1..{len(program)}, got {week}")
    return program[week - 1].day(day)


def _base_label(base: str) -> str:
    if base.startswith(INPUT_PREFIX):
        kind = base[len(INPUT_PREFIX):]
        return f"starting max ({EXERCISE_NAMES[kind]})"
    return f"e1RM [cyan]{base}[/cyan]"


def _format_trace(t: PrescriptionTrace) -> list[str]:
    slot = t.slot
    name = EXERCISE_NAMES[slot.exercise]
    L: list[str] = []

    rpe_str = f" @ RPE {slot.rpe:g}" if slot.rpe is not None else " (ramp)"
    L.append(
        f"\n[bold]{t.slot_index + 1}. {name}: {t.weight:.1f} kg × {slot.reps}"
        f" × {slot.sets} sets{rpe_str}[/bold]"
    )
    L.append(f"  Base: {_base_label(slot.base)} = {t.base_value:.3f} kg.")
    L.append(
        f"  Weight = round1({t.base_value:.3f} × {slot.percent:g})"
        f" = round1({t.raw_weight:.3f}) = [green]{t.weight:.1f} kg[/green]."
    )

    if t.estimated_max is None:
        L.append("  Ramp single: no RPE, no estimated max recorded.")
        return L

    if slot.estimate == "carry":
        L.append(
            f"  RPE 10 single: estimate carries the base forward unrounded"
            f" = {t.estimated_max:.3f} kg."
        )
    elif slot.estimate == "lifted":
        L.append(f"  RPE 10 single: estimate is the lifted weight = {t.estimated_max:.1f} kg.")
    else:
        L.append(
            f"  e1RM = {t.weight:.1f} × ({slot.reps} + 10 − {slot.rpe:g}) / 33 + {t.weight:.1f}"
            f" = {t.estimated_max:.3f} kg."
        )
    L.append(
        f"  Recorded as [cyan]{slot.record}[/cyan]; shown as"
        f" [bold]{round1(t.estimated_max):.1f} kg[/bold]."
    )
    return L


def explain_day(
    bench_max: float,
    paused_bench_max: float,
    legs_up_max: float,
    week: int,
    day: int,
    schedule: ProgramSchedule = SCHEDULE,
) -> str:
    """
    Explain step by step how one day's prescriptions were derived.

    Returns a Rich-markup string.  Pure formatter over trace_program().
    """
    program, traces = _run(bench_max, paused_bench_max, legs_up_max, schedule)
    find_day(program, week, day)  # range check

    rule = "─" * 54
    deload = " (deload)" if program[week - 1].is_deload else ""
    L: list[str] = [f"[bold cyan]Week {week}{deload}  ·  Day {day}[/bold cyan]", rule]
    for t in traces:
        if t.week == week and t.day == day:
            L.extend(_format_trace(t))
    return "\n".join(L)
