"""
Tests for the penalty terms of the constraint checker.
"""
from datetime import time

import pytest

from genetic_scheduling import Chromosome, ConstraintChecker, Employee, Gen, Requirement

NURSE_A = Employee("N-1", "nurse")
NURSE_B = Employee("N-2", "nurse")
NURSE_C = Employee("N-3", "nurse")
DOCTOR_A = Employee("D-1", "doctor")

HARD = 0.8
SOFT = 0.3


def make_gen(employees, requirements=(Requirement("nurse", 1),), day=10,
             start=time(6, 0), end=time(14, 0), gen_id=1, year=None):
    return Gen(gen_id, day, start, end, tuple(employees), tuple(requirements), year)


@pytest.fixture
def checker():
    return ConstraintChecker()


def test_valid_schedule_has_no_violations(checker):
    gens = [
        make_gen([NURSE_A, NURSE_B], [Requirement("nurse", 2)]),
        make_gen([NURSE_C, DOCTOR_A], [Requirement("nurse", 1), Requirement("doctor", 1)],
                 start=time(14, 0), end=time(22, 0), gen_id=2),
    ]
    assert checker.check_violations(gens) == 0
    assert Chromosome(gens, checker).fitness == 1.0


def test_role_mismatch_with_matching_count(checker):
    gen = make_gen([NURSE_A, DOCTOR_A], [Requirement("nurse", 2)])
    assert not checker.violates_employee_count(gen)
    assert checker.violates_role_match(gen)
    assert checker.check_violations([gen]) == pytest.approx(HARD)


def test_too_many_of_one_role_is_a_role_mismatch(checker):
    gen = make_gen([NURSE_A, NURSE_B], [Requirement("nurse", 1), Requirement("doctor", 1)])
    assert checker.check_violations([gen]) == pytest.approx(HARD)


def test_missing_employee_breaks_count_and_roles(checker):
    gen = make_gen([NURSE_A], [Requirement("nurse", 2)])
    assert checker.check_violations([gen]) == pytest.approx(2 * HARD)


def test_duplicate_employee_adds_exactly_one_hard_penalty(checker):
    valid = [make_gen([NURSE_A, NURSE_B], [Requirement("nurse", 2)])]
    duplicated = [make_gen([NURSE_A, NURSE_A], [Requirement("nurse", 2)])]

    base = checker.check_violations(valid)
    assert checker.check_violations(duplicated) == pytest.approx(base + HARD)


def test_max_shifts_per_week(checker):
    # one nurse on six consecutive early shifts, enough rest between them
    five_days = [make_gen([NURSE_A], day=d, gen_id=d) for d in range(10, 15)]
    six_days = five_days + [make_gen([NURSE_A], day=15, gen_id=15)]

    assert checker.check_violations(five_days) == 0
    assert checker.check_violations(six_days) == pytest.approx(HARD)


def test_max_shifts_per_week_is_configurable():
    checker = ConstraintChecker(max_shifts_per_week=2)
    gens = [make_gen([NURSE_A], day=d, gen_id=d) for d in range(10, 13)]
    assert checker.check_violations(gens) == pytest.approx(HARD)


def test_same_day_double_booking_counts_each_extra_shift(checker):
    early = make_gen([NURSE_A], start=time(6, 0), end=time(14, 0), gen_id=1)
    late = make_gen([NURSE_A], start=time(14, 0), end=time(22, 0), gen_id=2)
    night = make_gen([NURSE_A], start=time(22, 0), end=time(6, 0), gen_id=3)

    assert checker.check_violations([early, late]) == pytest.approx(SOFT)
    assert checker.check_violations([early, late, night]) == pytest.approx(2 * SOFT)


class TestRestPeriod:
    """An employee needs 11 hours of rest before a shift on the next day."""

    def test_rest_too_short(self, checker):
        late = make_gen([NURSE_A], day=10, start=time(14, 0), end=time(22, 0))
        early = make_gen([NURSE_A], day=11, start=time(8, 0), end=time(16, 0), gen_id=2)
        assert checker.check_violations([late, early]) == pytest.approx(SOFT)

    def test_rest_long_enough(self, checker):
        late = make_gen([NURSE_A], day=10, start=time(14, 0), end=time(22, 0))
        after = make_gen([NURSE_A], day=11, start=time(9, 1), end=time(17, 0), gen_id=2)
        assert checker.check_violations([late, after]) == 0

    def test_exactly_eleven_hours_is_enough(self, checker):
        late = make_gen([NURSE_A], day=10, start=time(14, 0), end=time(22, 0))
        after = make_gen([NURSE_A], day=11, start=time(9, 0), end=time(17, 0), gen_id=2)
        assert checker.check_violations([late, after]) == 0

    def test_other_employee_next_day_is_fine(self, checker):
        late = make_gen([NURSE_A], day=10, start=time(14, 0), end=time(22, 0))
        early = make_gen([NURSE_B], day=11, start=time(8, 0), end=time(16, 0), gen_id=2)
        assert checker.check_violations([late, early]) == 0

    def test_only_consecutive_days_are_compared(self, checker):
        late = make_gen([NURSE_A], day=10, start=time(14, 0), end=time(22, 0))
        early = make_gen([NURSE_A], day=12, start=time(6, 0), end=time(14, 0), gen_id=2)
        assert checker.check_violations([late, early]) == 0

    def test_every_next_day_shift_is_checked(self, checker):
        late = make_gen([NURSE_A], day=10, start=time(14, 0), end=time(22, 0))
        early = make_gen([NURSE_B], day=11, start=time(6, 0), end=time(14, 0), gen_id=2)
        mid = make_gen([NURSE_A], day=11, start=time(8, 0), end=time(16, 0), gen_id=3)
        assert checker.check_violations([late, early, mid]) == pytest.approx(SOFT)

    def test_overnight_shift_ends_next_morning(self, checker):
        night = make_gen([NURSE_A], day=10, start=time(22, 0), end=time(6, 0))
        late = make_gen([NURSE_A], day=11, start=time(14, 0), end=time(22, 0), gen_id=2)
        night_again = make_gen([NURSE_A], day=11, start=time(22, 0), end=time(6, 0), gen_id=3)

        assert checker.is_rest_too_short(night, late)
        assert not checker.is_rest_too_short(night, night_again)

    def test_year_rollover(self, checker):
        late = make_gen([NURSE_A], day=365, start=time(14, 0), end=time(22, 0))
        early = make_gen([NURSE_A], day=1, start=time(6, 0), end=time(14, 0), gen_id=2)
        assert checker.check_violations([late, early]) == pytest.approx(SOFT)

    def test_order_of_gens_does_not_matter(self, checker):
        late = make_gen([NURSE_A], day=10, start=time(14, 0), end=time(22, 0))
        early = make_gen([NURSE_A], day=11, start=time(8, 0), end=time(16, 0), gen_id=2)
        third = make_gen([NURSE_B], day=12, start=time(6, 0), end=time(14, 0), gen_id=3)

        assert checker.check_violations([early, late]) == pytest.approx(SOFT)
        assert checker.check_violations([early, third, late]) == pytest.approx(
            checker.check_violations([late, early, third])
        )

    def test_leap_year_day_365_is_not_followed_by_new_year(self, checker):
        late = make_gen([NURSE_A], day=365, start=time(14, 0), end=time(22, 0), year=2024)
        early = make_gen([NURSE_A], day=1, start=time(6, 0), end=time(14, 0), gen_id=2, year=2025)
        assert checker.check_violations([late, early]) == 0

    def test_leap_year_day_366_rolls_over(self, checker):
        late = make_gen([NURSE_A], day=366, start=time(14, 0), end=time(22, 0), year=2024)
        early = make_gen([NURSE_A], day=1, start=time(6, 0), end=time(14, 0), gen_id=2, year=2025)
        assert checker.check_violations([early, late]) == pytest.approx(SOFT)

    def test_without_year_day_366_in_schedule_breaks_365_rollover(self, checker):
        day_365 = make_gen([NURSE_A], day=365, start=time(14, 0), end=time(22, 0))
        day_366 = make_gen([NURSE_B], day=366, start=time(6, 0), end=time(14, 0), gen_id=2)
        day_1 = make_gen([NURSE_A], day=1, start=time(6, 0), end=time(14, 0), gen_id=3)
        assert checker.check_violations([day_365, day_366, day_1]) == 0

    def test_same_day_of_year_in_different_years_is_not_the_same_day(self, checker):
        this_year = make_gen([NURSE_A], day=10, year=2025)
        next_year = make_gen([NURSE_A], day=10, gen_id=2, year=2026)
        assert checker.check_violations([this_year, next_year]) == 0


def test_fitness_reflects_violations(checker):
    gens = [make_gen([NURSE_A], [Requirement("nurse", 2)])]
    chromosome = Chromosome(gens, checker)

    assert chromosome.violations == pytest.approx(2 * HARD)
    assert chromosome.fitness == pytest.approx(1 / (1 + 2 * HARD))
    assert 0 < chromosome.fitness < 1


def test_checker_does_not_modify_gens(checker):
    gen = make_gen([NURSE_A, NURSE_A], [Requirement("nurse", 2)])
    checker.check_violations([gen])
    assert gen.employees == (NURSE_A, NURSE_A)
