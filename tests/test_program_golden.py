"""
Full-program golden tables.

Each day lists (exercise, weight_kg, reps, sets, rpe, estimated_max_kg) in
prescription order.  Ramp singles have no RPE and no estimated max.  The
values were computed independently of the engine by evaluating the week
coefficients with e1RM = w * (reps + 10 - rpe) / 33 + w and
round1(x) = floor(x * 10 + 0.5) / 10.
"""

import pytest

from bench_program.core.planner import generate_program, trace_program


def _rows(program, week, day):
    plan = program[week - 1].days[day - 1]
    return [
        (p.exercise, p.weight_kg, p.reps, p.sets, p.rpe, p.estimated_max_kg)
        for p in plan.prescriptions
    ]


# bench=90, paused=80, legs-up=80
GOLDEN_90_80_80 = {
    (1, 1): [
        ("bench", 74.7, 5, 3, 8, 90.5),
        ("paused_bench", 64.0, 5, 3, 7, 79.5),
    ],
    (1, 2): [
        ("bench", 75.2, 1, 3, None, None),
        ("legs_up_bench", 62.0, 8, 3, 8, 80.8),
    ],
    (1, 3): [
        ("bench", 81.5, 3, 3, 9, 91.4),
        ("bench", 73.1, 6, 3, 8, 90.8),
    ],
    (2, 1): [
        ("paused_bench", 66.8, 5, 4, 8, 81.0),
        ("legs_up_bench", 65.4, 5, 4, 7, 81.3),
    ],
    (2, 2): [
        ("bench", 75.4, 1, 3, None, None),
        ("bench", 70.4, 8, 3, 8, 91.7),
    ],
    (2, 3): [
        ("legs_up_bench", 74.3, 2, 3, 9, 81.1),
        ("bench", 74.3, 6, 3, 8, 92.3),
    ],
    (3, 1): [
        ("legs_up_bench", 68.5, 5, 4, 8.5, 82.0),
        ("bench", 74.8, 5, 5, 7, 92.9),
    ],
    (3, 2): [
        ("bench", 76.7, 1, 3, None, None),
        ("paused_bench", 64.4, 8, 3, 9, 82.0),
    ],
    (3, 3): [
        ("bench", 88.3, 1, 3, 9, 93.7),
        ("paused_bench", 66.4, 6, 4, 8, 82.5),
    ],
    (4, 1): [
        ("bench", 89.9, 1, 1, 9.5, 94.0),
        ("paused_bench", 66.8, 5, 5, 7, 83.0),
    ],
    (4, 2): [
        ("bench", 77.5, 1, 3, None, None),
        ("legs_up_bench", 66.4, 5, 5, 7, 82.5),
    ],
    (4, 3): [
        ("bench", 94.0, 1, 1, 10, 94.0),
    ],
    (5, 1): [
        ("bench", 77.1, 4, 2, 7, 93.5),
        ("paused_bench", 67.2, 4, 2, 6, 83.5),
    ],
    (5, 2): [
        ("bench", 77.1, 1, 3, None, None),
        ("legs_up_bench", 65.6, 6, 3, 7, 83.5),
    ],
    (5, 3): [
        ("bench", 86.9, 2, 3, 9, 94.8),
        ("bench", 75.8, 6, 3, 8, 94.2),
    ],
    (6, 1): [
        ("paused_bench", 71.8, 4, 4, 8, 84.9),
        ("legs_up_bench", 68.9, 4, 4, 7, 83.5),
    ],
    (6, 2): [
        ("bench", 77.7, 1, 3, None, None),
        ("bench", 76.3, 6, 4, 8, 94.8),
    ],
    (6, 3): [
        ("legs_up_bench", 77.3, 2, 3, 9, 84.3),
        ("bench", 78.7, 5, 4, 8, 95.4),
    ],
    (7, 1): [
        ("legs_up_bench", 72.5, 4, 5, 8.5, 84.6),
        ("bench", 78.7, 4, 6, 7, 95.4),
    ],
    (7, 2): [
        ("bench", 78.7, 1, 3, None, None),
        ("paused_bench", 70.0, 6, 5, 9, 84.8),
    ],
    (7, 3): [
        ("paused_bench", 80.6, 1, 3, 9, 85.5),
        ("paused_bench", 72.1, 4, 5, 8, 85.2),
    ],
    (8, 1): [
        ("paused_bench", 85.2, 1, 1, 10, 85.2),
        ("bench", 78.7, 4, 5, 7, 95.4),
    ],
    (8, 2): [
        ("bench", 78.7, 1, 3, None, None),
        ("legs_up_bench", 68.5, 5, 5, 7, 85.1),
    ],
    (8, 3): [
        ("bench", 96.3, 1, 1, 10, 96.3),
    ],
    (9, 1): [
        ("bench", 79.4, 4, 4, 7, 96.2),
        ("paused_bench", 70.7, 4, 4, 7, 85.7),
    ],
    (9, 2): [
        ("bench", 79.4, 1, 3, None, None),
        ("bench", 72.7, 8, 4, 7, 96.9),
    ],
    (9, 3): [
        ("legs_up_bench", 77.4, 1, 3, 7, 86.8),
        ("bench", 78.5, 6, 4, 8, 97.5),
    ],
    (10, 1): [
        ("paused_bench", 73.7, 4, 5, 8, 87.1),
        ("legs_up_bench", 71.6, 4, 6, 7, 86.8),
    ],
    (10, 2): [
        ("bench", 80.0, 1, 3, None, None),
        ("bench", 78.0, 6, 5, 8, 96.9),
    ],
    (10, 3): [
        ("bench", 90.1, 2, 3, 9, 98.3),
        ("bench", 80.9, 5, 4, 8, 98.1),
    ],
    (11, 1): [
        ("legs_up_bench", 74.6, 4, 6, 8.5, 87.0),
        ("bench", 81.4, 4, 6, 7, 98.7),
    ],
    (11, 2): [
        ("bench", 79.9, 1, 3, None, None),
        ("paused_bench", 73.6, 5, 5, 9, 87.0),
    ],
    (11, 3): [
        ("bench", 93.7, 1, 3, 9, 99.4),
        ("paused_bench", 73.9, 4, 5, 8, 87.3),
    ],
    (12, 1): [
        ("paused_bench", 87.3, 1, 1, 10, 87.3),
        ("bench", 82.0, 4, 5, 7, 99.4),
    ],
    (12, 2): [
        ("bench", 82.0, 1, 3, None, None),
        ("legs_up_bench", 70.9, 5, 5, 7, 88.1),
    ],
    (12, 3): [
        ("bench", 100.4, 1, 1, 10, 100.4),
    ],
}

# bench=102.5, paused=92.5, legs-up=97.5; the weeks around both deloads
GOLDEN_FRACTIONAL = {
    (4, 1): [
        ("bench", 102.1, 1, 1, 9.5, 106.7),
        ("paused_bench", 77.2, 5, 5, 7, 95.9),
    ],
    (4, 2): [
        ("bench", 88.1, 1, 3, None, None),
        ("legs_up_bench", 81.1, 5, 5, 7, 100.8),
    ],
    (4, 3): [
        ("bench", 106.7, 1, 1, 10, 106.7),
    ],
    (5, 1): [
        ("bench", 87.5, 4, 2, 7, 106.1),
        ("paused_bench", 77.7, 4, 2, 6, 96.5),
    ],
    (5, 2): [
        ("bench", 87.5, 1, 3, None, None),
        ("legs_up_bench", 80.1, 6, 3, 7, 101.9),
    ],
    (5, 3): [
        ("bench", 98.6, 2, 3, 9, 107.6),
        ("bench", 86.1, 6, 3, 8, 107.0),
    ],
    (8, 1): [
        ("paused_bench", 98.6, 1, 1, 10, 98.6),
        ("bench", 89.3, 4, 5, 7, 108.2),
    ],
    (8, 2): [
        ("bench", 89.3, 1, 3, None, None),
        ("legs_up_bench", 83.6, 5, 5, 7, 103.9),
    ],
    (8, 3): [
        ("bench", 109.3, 1, 1, 10, 109.3),
    ],
    (9, 1): [
        ("bench", 90.2, 4, 4, 7, 109.3),
        ("paused_bench", 81.8, 4, 4, 7, 99.2),
    ],
    (9, 2): [
        ("bench", 90.2, 1, 3, None, None),
        ("bench", 82.5, 8, 4, 7, 110.0),
    ],
    (9, 3): [
        ("legs_up_bench", 94.5, 1, 3, 7, 106.0),
        ("bench", 89.1, 6, 4, 8, 110.7),
    ],
    (12, 1): [
        ("paused_bench", 101.2, 1, 1, 10, 101.2),
        ("bench", 93.2, 4, 5, 7, 113.0),
    ],
    (12, 2): [
        ("bench", 93.2, 1, 3, None, None),
        ("legs_up_bench", 86.6, 5, 5, 7, 107.6),
    ],
    (12, 3): [
        ("bench", 114.1, 1, 1, 10, 114.1),
    ],
}


@pytest.fixture(scope="module")
def program():
    return generate_program(90.0, 80.0, 80.0)


@pytest.fixture(scope="module")
def fractional_program():
    return generate_program(102.5, 92.5, 97.5)


class TestGoldenTable:
    def test_covers_every_session(self):
        assert len(GOLDEN_90_80_80) == 36

    @pytest.mark.parametrize("week,day", sorted(GOLDEN_90_80_80))
    def test_day(self, program, week, day):
        assert _rows(program, week, day) == GOLDEN_90_80_80[(week, day)]

    @pytest.mark.parametrize("week,day", sorted(GOLDEN_FRACTIONAL))
    def test_fractional_maxes(self, fractional_program, week, day):
        assert _rows(fractional_program, week, day) == GOLDEN_FRACTIONAL[(week, day)]

    def test_week5_reads_unrounded_week4_single(self, program):
        trace = next(t for t in trace_program(90.0, 80.0, 80.0) if (t.week, t.day, t.slot_index) == (5, 1, 0))
        assert program[3].days[2].prescriptions[0].estimated_max_kg == 94.0
        assert trace.base_value == pytest.approx(93.986364, abs=1e-6)
