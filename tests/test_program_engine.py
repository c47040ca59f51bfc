"""
Integration tests for program generation.

Scenario values use bench=90, paused=80, legs-up=80 and were computed by
hand from the week-1 coefficients.
"""

import pytest

from bench_program.core.config import DAYS_PER_WEEK, PROGRAM_WEEKS
from bench_program.core.models import SetPrescription
from bench_program.core.planner import (
    EstimatedMaxTable,
    explain_day,
    find_day,
    generate_program,
    trace_program,
)

MAXES = (90.0, 80.0, 80.0)


@pytest.fixture(scope="module")
def program():
    return generate_program(*MAXES)


@pytest.fixture(scope="module")
def traces():
    return trace_program(*MAXES)


def _trace(traces, week, day, slot=0):
    return next(t for t in traces if (t.week, t.day, t.slot_index) == (week, day, slot))


class TestProgramShape:
    """12 weeks × 3 days, 1-2 prescriptions per day."""

    def test_twelve_weeks_in_order(self, program):
        assert len(program) == PROGRAM_WEEKS
        assert [w.week for w in program] == list(range(1, 13))

    def test_three_days_per_week(self, program):
        for week in program:
            assert [d.day for d in week.days] == list(range(1, DAYS_PER_WEEK + 1))

    def test_one_or_two_prescriptions(self, program):
        for week in program:
            for day in week.days:
                assert 1 <= len(day.prescriptions) <= 2

    def test_rpe_and_estimate_paired(self, program):
        for week in program:
            for day in week.days:
                for p in day.prescriptions:
                    assert (p.rpe is None) == (p.estimated_max_kg is None)

    def test_weights_have_one_decimal(self, program):
        for week in program:
            for day in week.days:
                for p in day.prescriptions:
                    assert round(p.weight_kg * 10) == pytest.approx(p.weight_kg * 10)
                    assert p.weight_kg > 0

    def test_accessory_counts(self, program):
        for week in program:
            expected = 6 if week.is_deload else 10
            assert len(week.accessories) == expected


class TestWeekOneScenario:
    """bench=90, paused=80, legs-up=80."""

    def test_day1_bench(self, program):
        p = program[0].day(1).prescriptions[0]
        assert p.exercise == "bench"
        assert p.weight_kg == 74.7
        assert (p.reps, p.sets, p.rpe) == (5, 3, 8)
        assert p.estimated_max_kg == 90.5

    def test_day1_paused(self, program):
        p = program[0].day(1).prescriptions[1]
        assert p.exercise == "paused_bench"
        assert p.weight_kg == 64.0
        assert (p.reps, p.sets, p.rpe) == (5, 3, 7)
        assert p.estimated_max_kg == 79.5

    def test_day2_ramp_uses_unrounded_estimate(self, program):
        """90.5454… * 0.83 = 75.15… → 75.2; ramp singles have no RPE."""
        p = program[0].day(2).prescriptions[0]
        assert p.weight_kg == 75.2
        assert p.is_ramp
        assert p.estimated_max_kg is None

    def test_day2_legs_up(self, program):
        """80 * 0.775 = 62.0; 62 * 10 / 33 + 62 = 80.787…"""
        p = program[0].day(2).prescriptions[1]
        assert p.exercise == "legs_up_bench"
        assert p.weight_kg == 62.0
        assert p.estimated_max_kg == 80.8

    def test_day3_chain(self, program):
        """
        90.5454… * 0.9 = 81.49 → 81.5; 81.5 * 4 / 33 + 81.5 = 91.378…
        91.378… * 0.8 = 73.10 → 73.1; 73.1 * 8 / 33 + 73.1 = 90.821…
        """
        first, second = program[0].day(3).prescriptions
        assert first.weight_kg == 81.5
        assert first.estimated_max_kg == 91.4
        assert second.weight_kg == 73.1
        assert second.estimated_max_kg == 90.8


class TestDeloadSingles:
    """RPE 10 singles take their estimated max from the program data."""

    def test_week4_day3_single(self, program):
        day = program[3].day(3)
        assert len(day.prescriptions) == 1
        p = day.prescriptions[0]
        assert (p.reps, p.sets, p.rpe) == (1, 1, 10)
        assert p.estimated_max_kg == p.weight_kg

    def test_week4_carry_is_unrounded(self, traces):
        t = _trace(traces, 4, 3)
        assert t.estimated_max == t.base_value
        assert t.estimated_max == t.raw_weight

    def test_week5_reads_unrounded_carry(self, traces):
        w4 = _trace(traces, 4, 3)
        w5 = _trace(traces, 5, 1)
        assert w5.base_value == w4.estimated_max

    def test_week8_lifted_single(self, program, traces):
        p = program[7].day(3).prescriptions[0]
        assert p.estimated_max_kg == p.weight_kg
        t = _trace(traces, 8, 3)
        assert t.estimated_max == t.weight

    def test_week9_reads_rounded_lift(self, traces):
        w8 = _trace(traces, 8, 3)
        w9 = _trace(traces, 9, 1)
        assert w9.base_value == w8.weight

    def test_deload_flags(self, program):
        assert [w.week for w in program if w.is_deload] == [4, 8, 12]


class TestAccessories:
    def test_week2_cycle(self, program):
        acc = program[1].accessories
        reps = {a.reps for a in acc}
        assert 12 in reps
        assert 17 in reps
        assert all(a.sets == 3 for a in acc)

    def test_week1_cycle(self, program):
        acc = program[0].accessories
        assert {a.reps for a in acc} == {15, 18, 20}
        assert all(a.sets == 2 for a in acc)

    def test_deload_week(self, program):
        acc = program[3].accessories
        assert len(acc) == 6
        assert all((a.reps, a.sets) == (20, 2) for a in acc)


class TestDeterminism:
    def test_same_inputs_same_program(self):
        assert generate_program(*MAXES) == generate_program(*MAXES)

    def test_fractional_inputs(self):
        program = generate_program(102.5, 92.5, 97.5)
        assert program[0].day(1).prescriptions[0].weight_kg == 85.1  # 102.5 * 0.83 = 85.075

    def test_trace_matches_program(self, program, traces):
        for t in traces:
            p = program[t.week - 1].day(t.day).prescriptions[t.slot_index]
            assert p.weight_kg == t.weight


class TestEstimatedMaxTable:
    def test_seeded_with_inputs(self):
        table = EstimatedMaxTable(100.0, 90.0, 95.0)
        assert table["input.bench"] == 100.0
        assert table["input.paused_bench"] == 90.0
        assert table["input.legs_up_bench"] == 95.0
        assert len(table) == 3

    def test_write_once(self):
        table = EstimatedMaxTable(100.0, 90.0, 95.0)
        table.record("w1d1_bench", 101.2)
        assert "w1d1_bench" in table
        with pytest.raises(ValueError):
            table.record("w1d1_bench", 102.0)

    def test_unknown_key(self):
        table = EstimatedMaxTable(100.0, 90.0, 95.0)
        with pytest.raises(KeyError):
            table["w9d9_bench"]


class TestLookupAndExplain:
    def test_find_day(self, program):
        assert find_day(program, 4, 3) is program[3].days[2]

    @pytest.mark.parametrize("week,day", [(0, 1), (13, 1), (1, 0), (1, 4)])
    def test_find_day_out_of_range(self, program, week, day):
        with pytest.raises(ValueError):
            find_day(program, week, day)

    def test_explain_week1_day1(self):
        text = explain_day(*MAXES, 1, 1)
        assert "Week 1" in text
        assert "74.7" in text
        assert "w1d1_bench" in text
        assert "90.5" in text

    def test_explain_ramp(self):
        text = explain_day(*MAXES, 1, 2)
        assert "Ramp single" in text

    def test_explain_carry(self):
        text = explain_day(*MAXES, 4, 3)
        assert "deload" in text
        assert "carries the base forward" in text

    def test_explain_out_of_range(self):
        with pytest.raises(ValueError):
            explain_day(*MAXES, 13, 1)


class TestTinyMaxes:
    """Maxes small enough that a prescribed weight rounds to 0.0 kg."""

    def test_program_still_generated(self):
        program = generate_program(0.05, 80.0, 80.0)
        first = program[0].days[0].prescriptions[0]
        assert first.weight_kg == 0.0
        assert first.estimated_max_kg == 0.0
        for week in program:
            for day in week.days:
                for p in day.prescriptions:
                    assert p.weight_kg >= 0
                    assert p.estimated_max_kg is None or p.estimated_max_kg >= 0

    def test_other_lifts_unaffected(self, program):
        tiny = generate_program(0.05, 80.0, 80.0)
        assert tiny[0].days[0].prescriptions[1] == program[0].days[0].prescriptions[1]

    def test_zero_weight_prescription_allowed(self):
        assert SetPrescription("bench", 0.0, 5, 3, 8, 0.0).weight_kg == 0.0
        with pytest.raises(ValueError):
            SetPrescription("bench", -0.5, 5, 3, 8, 0.0)
