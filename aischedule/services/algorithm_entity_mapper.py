import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from django.utils import timezone

from aischedule.contracts import AggregatedScheduleData
from aischedule.exceptions import EntityNotFound
from aischedule.models import PredefineShift, Role, Shift, User
from genetic_scheduling import Employee, Gen

logger = logging.getLogger(__name__)


def calculate_shift_date(today: date, day_of_year: int) -> date:
    """Date of ``day_of_year`` in this year, or next year if that day already passed."""
    year = today.year if today.timetuple().tm_yday <= day_of_year else today.year + 1
    return date(year, 1, 1) + timedelta(days=day_of_year - 1)


def calculate_shift_end(shift_date: date, predefine_shift: PredefineShift) -> datetime:
    end_date = shift_date + timedelta(days=1) if predefine_shift.crosses_midnight() else shift_date
    return datetime.combine(end_date, predefine_shift.end)


class AlgorithmEntityMapper:
    """Turns the staffed shift slots of a chromosome into unpublished :class:`Shift` rows."""

    def decode_shifts(self, gens: Iterable[Gen], data: AggregatedScheduleData,
                      today: Optional[date] = None) -> List[Shift]:
        today = today or timezone.localdate()
        decoded: List[Shift] = []
        for gen in gens:
            predefine_shift = self.find_predefine_shift(data.predefine_shifts, gen.id)
            shift_date = calculate_shift_date(today, gen.day)
            start = self._aware(datetime.combine(shift_date, predefine_shift.start))
            end = self._aware(calculate_shift_end(shift_date, predefine_shift))
            decoded.extend(self._create_shift(start, end, employee, data) for employee in gen.employees)
        logger.debug("Decoded %d shift records", len(decoded))
        return decoded

    def _create_shift(self, start: datetime, end: datetime, employee: Employee, data: AggregatedScheduleData) -> Shift:
        return Shift(
            start=start,
            end=end,
            user=self.find_user_by_employee_id(data.users, employee.id),
            role=self.find_role_by_name(data.roles, employee.role),
            published=False,
        )

    @staticmethod
    def _aware(value: datetime) -> datetime:
        return timezone.make_aware(value) if timezone.is_naive(value) else value

    @staticmethod
    def find_predefine_shift(predefine_shifts: Iterable[PredefineShift], shift_id: int) -> PredefineShift:
        for predefine_shift in predefine_shifts:
            if predefine_shift.id == shift_id:
                return predefine_shift
        raise EntityNotFound(f"Predefined shift with id {shift_id} not found")

    @staticmethod
    def find_user_by_employee_id(users: Iterable[User], employee_id: str) -> User:
        for user in users:
            if user.employee_id == employee_id:
                return user
        raise EntityNotFound(f"User with employee id {employee_id} not found")

    @staticmethod
    def find_role_by_name(roles: Iterable[Role], role_name: str) -> Role:
        for role in roles:
            if role.name == role_name:
                return role
        raise EntityNotFound(f"Role with name {role_name} not found")
