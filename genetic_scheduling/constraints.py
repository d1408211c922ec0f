"""Penalty based constraint checking for candidate schedules."""
from collections import Counter
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from .base import Gen

MINUTES_PER_DAY = 24 * 60

# (year or None, day of year)
DayKey = Tuple[Optional[int], int]


def _minutes(t) -> int:
    return t.hour * 60 + t.minute


class ConstraintChecker:
    """
    Scores a schedule by summing independent penalty terms.

    Hard violations (wrong head count, duplicate employee, wrong role mix,
    weekly cap overrun) cost ``hard_penalty`` each. Soft violations
    (several shifts on one day, too little rest before the next day's
    shift) cost ``soft_penalty`` per occurrence. Zero means every
    constraint is met.
    """

    def __init__(self, hard_penalty: float = 0.8, soft_penalty: float = 0.3,
                 max_shifts_per_week: int = 5, min_rest_hours: int = 11):
        self.hard_penalty = hard_penalty
        self.soft_penalty = soft_penalty
        self.max_shifts_per_week = max_shifts_per_week
        self.min_rest_hours = min_rest_hours

    def check_violations(self, gens: Sequence[Gen]) -> float:
        violations = sum(self._shift_violations(gen) for gen in gens)
        violations += self._max_shifts_per_week_violations(gens)

        days = self._group_by_day(gens)
        violations += sum(self._same_day_violations(day_gens) for day_gens in days.values())
        violations += self._rest_violations(days)
        return violations

    # --------------------------- per shift ----------------------------

    def _shift_violations(self, gen: Gen) -> float:
        penalty = 0.0
        if self.violates_employee_count(gen):
            penalty += self.hard_penalty
        if self.violates_unique_employee(gen):
            penalty += self.hard_penalty
        if self.violates_role_match(gen):
            penalty += self.hard_penalty
        return penalty

    @staticmethod
    def violates_employee_count(gen: Gen) -> bool:
        return len(gen.employees) != gen.required_count

    @staticmethod
    def violates_unique_employee(gen: Gen) -> bool:
        return len(gen.employees) != len(set(gen.employees))

    @staticmethod
    def violates_role_match(gen: Gen) -> bool:
        roles = Counter(emp.role for emp in gen.employees)
        return any(roles[req.role] != req.count for req in gen.requirements)

    # --------------------------- whole schedule -----------------------

    def _max_shifts_per_week_violations(self, gens: Sequence[Gen]) -> float:
        shift_counts = Counter(emp for gen in gens for emp in set(gen.employees))
        over_cap = sum(1 for count in shift_counts.values() if count > self.max_shifts_per_week)
        return over_cap * self.hard_penalty

    @staticmethod
    def _group_by_day(gens: Sequence[Gen]) -> Dict[DayKey, List[Gen]]:
        days: Dict[DayKey, List[Gen]] = {}
        for gen in gens:
            days.setdefault((gen.year, gen.day), []).append(gen)
        return days

    def _same_day_violations(self, day_gens: List[Gen]) -> float:
        # duplicates inside one shift are already charged as hard violations
        counts = Counter(emp for gen in day_gens for emp in set(gen.employees))
        extra = sum(count - 1 for count in counts.values() if count > 1)
        return extra * self.soft_penalty

    def _rest_violations(self, days: Dict[DayKey, List[Gen]]) -> float:
        penalty = 0.0
        for key, current in days.items():
            following = days.get(self._next_day(key, days), ())
            for gen in current:
                for next_gen in following:
                    if not self.is_rest_too_short(gen, next_gen):
                        continue
                    next_staff = set(next_gen.employees)
                    penalty += sum(self.soft_penalty for emp in set(gen.employees) if emp in next_staff)
        return penalty

    @staticmethod
    def _next_day(key: DayKey, days: Dict[DayKey, List[Gen]]) -> DayKey:
        """
        Key of the calendar day after ``key``.

        Without a year, day 366 always rolls over to day 1 and day 365 does
        so unless day 366 is part of the schedule.
        """
        year, day = key
        if year is not None:
            following = date(year, 1, 1) + timedelta(days=day)
            return following.year, following.timetuple().tm_yday
        if day == 366 or (day == 365 and (None, 366) not in days):
            return None, 1
        return None, day + 1

    def is_rest_too_short(self, gen: Gen, next_gen: Gen) -> bool:
        """True if ``next_gen`` (on the following day) starts before the rest period after ``gen`` ends."""
        end = _minutes(gen.end_time)
        if gen.end_time < gen.start_time:
            end += MINUTES_PER_DAY  # overnight shift wraps
        next_start = MINUTES_PER_DAY + _minutes(next_gen.start_time)
        return next_start < end + self.min_rest_hours * 60
