"""
Accessory schedule generation.

A pure function of the week number: deload weeks get the light fixed
list, other weeks take (reps, sets) from the position inside the current
4-week block.
"""

from .config import DELOAD_INTERVAL_WEEKS
from .models import AccessoryPrescription
from .schedule import SCHEDULE, AccessoryTable


def is_deload_week(week: int) -> bool:
    """Weeks 4, 8, 12 are deload weeks."""
    return week % DELOAD_INTERVAL_WEEKS == 0


def cycle_week(week: int) -> int:
    """Position of ``week`` inside its 4-week block (1..4)."""
    return ((week - 1) % DELOAD_INTERVAL_WEEKS) + 1


def accessory_volume(week: int, table: AccessoryTable = SCHEDULE.accessories) -> tuple[int, int]:
    """
    Return base (reps, sets) for a non-deload week.

    Positions missing from the cycle table fall back to the table default.
    """
    return table.cycle.get(cycle_week(week), table.default)


def accessories_for_week(
    week: int,
    table: AccessoryTable = SCHEDULE.accessories,
) -> tuple[AccessoryPrescription, ...]:
    """
    Build the accessory list for a week.

    Args:
        week: 1-based program week
        table: Accessory data (defaults to the loaded program schedule)

    Returns:
        6 entries in deload weeks, 10 otherwise
    """
    if is_deload_week(week):
        return tuple(
            AccessoryPrescription(
                weekday=a.weekday,
                category=a.category,
                name=a.name,
                reps=table.deload_reps,
                sets=table.deload_sets,
            )
            for a in table.deload
        )

    reps, sets = accessory_volume(week, table)
    return tuple(
        AccessoryPrescription(
            weekday=a.weekday,
            category=a.category,
            name=a.name,
            reps=reps + a.rep_offset,
            sets=sets,
        )
        for a in table.normal
    )
