"""
Estimated one-rep max and rounding primitives.

  RPE-adjusted Epley-style estimate:
    e1RM = weight * (reps + 10 - RPE) / 33 + weight
    reps + (10 - RPE) is the number of reps the lifter could have done at
    failure.  An RPE 10 single is not run through the formula; the program
    data decides what its estimate is (see core/schedule.py).

Estimates are evaluated in full precision.  Only round1() is applied
before a value leaves the engine or becomes the weight of a prescription.
"""

from __future__ import annotations

import math

from .config import E1RM_DIVISOR, PLATE_INCREMENT_KG, RPE_MAX


def estimated_1rm(weight: float, reps: int, rpe: float) -> float:
    """
    Estimate a one-rep max from a set of ``reps`` at ``weight`` and ``rpe``.

    Evaluated left to right exactly as written so repeated runs are
    bit-identical.
    """
    return weight * (reps + RPE_MAX - rpe) / E1RM_DIVISOR + weight


def round1(value: float) -> float:
    """Round to one decimal place, halves away from zero for positive values."""
    return math.floor(value * 10 + 0.5) / 10


def round_to_plate(weight: float, increment: float = PLATE_INCREMENT_KG) -> float:
    """Round a prescribed weight to the nearest loadable increment (0.5 kg)."""
    steps = math.floor(weight / increment + 0.5)
    return steps * increment
