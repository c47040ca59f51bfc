"""
Configuration constants for the bench-press program.

Numeric constants are centralized here.  The week-by-week coefficients
themselves are declarative data in program.yaml (see core/schedule.py).
"""

from pathlib import Path
from typing import Final

# =============================================================================
# ESTIMATED 1RM
# =============================================================================

E1RM_DIVISOR: Final[float] = 33.0  # weight * (reps + 10 - rpe) / 33 + weight
RPE_MAX: Final[float] = 10.0  # RPE 10 = no reps left in reserve
RPE_MIN: Final[float] = 0.0

# =============================================================================
# ROUNDING
# =============================================================================

PLATE_INCREMENT_KG: Final[float] = 0.5  # smallest loadable jump for logged sets

# =============================================================================
# PROGRAM SHAPE
# =============================================================================

PROGRAM_WEEKS: Final[int] = 12
DAYS_PER_WEEK: Final[int] = 3
TOTAL_SESSIONS: Final[int] = PROGRAM_WEEKS * DAYS_PER_WEEK
DELOAD_INTERVAL_WEEKS: Final[int] = 4  # weeks 4, 8, 12
MAX_SLOTS_PER_DAY: Final[int] = 2

NORMAL_ACCESSORY_COUNT: Final[int] = 10
DELOAD_ACCESSORY_COUNT: Final[int] = 6

# =============================================================================
# EXERCISES
# =============================================================================

EXERCISE_KINDS: Final[tuple[str, ...]] = ("bench", "paused_bench", "legs_up_bench")

EXERCISE_NAMES: Final[dict[str, str]] = {
    "bench": "Bench Press",
    "paused_bench": "2s Paused Bench",
    "legs_up_bench": "Legs-Up Bench",
}

# Base references resolving to the three starting maxes
INPUT_PREFIX: Final[str] = "input."

# =============================================================================
# STORAGE
# =============================================================================

DEFAULT_DATA_DIR: Final[Path] = Path.home() / ".bench-program"
USER_OVERRIDE_FILENAME: Final[str] = "program.yaml"
