"""
Schedule Data Encoder

Translates schedule requirements and the current employee pool into the
input of the genetic algorithm (shift slots and employees grouped by role).
"""
import logging
from collections import OrderedDict
from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from django.utils import timezone

from aischedule.contracts import AggregatedScheduleData, ReqRole, ScheduleRequirement
from aischedule.exceptions import EntityNotFound, InvalidRequirementsError
from aischedule.models import PredefineShift, Role, User
from genetic_scheduling import Employee, Gen, Requirement

logger = logging.getLogger(__name__)

# Nobody works more than this many shifts per week
MAX_SHIFTS_PER_WEEK = 5


class ScheduleDataEncoder:
    """
    Builds :class:`AggregatedScheduleData` from a list of requirements.
    """

    def __init__(self, validate_future_dates: bool = True):
        self.validate_future_dates = validate_future_dates

    def prepare_data(self, requirements: Iterable[ScheduleRequirement]) -> AggregatedScheduleData:
        """
        Validate the requirements and encode them for the algorithm.

        Args:
            requirements: One entry per requested day

        Returns:
            AggregatedScheduleData with users, templates, roles, employees and shifts

        Raises:
            InvalidRequirementsError: duplicate or past dates, or too few employees
            EntityNotFound: unknown role or predefined shift id
        """
        requirements = self.validate_and_sort(requirements)
        users = self.find_active_users_without_absence(requirements)
        roles = list(Role.objects.all())
        employees = self.prepare_employees(requirements, users)
        self.verify_user_quantity(requirements, employees, roles)

        predefine_shifts = list(PredefineShift.objects.all())
        shifts = self.prepare_shifts(requirements, predefine_shifts, roles)

        logger.info(
            "Encoded %d requirement days into %d shifts for %d eligible users",
            len(requirements), len(shifts), len(users),
        )
        return AggregatedScheduleData(users, predefine_shifts, roles, employees, shifts)

    # ------------------------ validation ------------------------------

    def validate_and_sort(self, requirements: Iterable[ScheduleRequirement],
                          today: Optional[date] = None) -> List[ScheduleRequirement]:
        ordered = sorted(requirements, key=lambda r: r.date)
        if not ordered:
            raise InvalidRequirementsError("Schedule requirements must not be empty")

        for current, following in zip(ordered, ordered[1:]):
            if current.date == following.date:
                raise InvalidRequirementsError(f"Date {current.date} was given more than once")

        if self.validate_future_dates:
            today = today or timezone.localdate()
            if ordered[0].date <= today:
                raise InvalidRequirementsError(f"Date {ordered[0].date} must be in the future")
        return ordered

    # ------------------------ employees -------------------------------

    @staticmethod
    def find_active_users_without_absence(requirements: List[ScheduleRequirement]) -> List[User]:
        return list(User.objects.active_without_absence_in_range(requirements[0].date, requirements[-1].date))

    def prepare_employees(self, requirements: List[ScheduleRequirement], users: Iterable[User]) -> Dict[str, List[Employee]]:
        valid_roles = self.get_valid_roles(requirements)
        employees: Dict[str, List[Employee]] = {}
        for employee in self.get_unique_employees(users, valid_roles):
            employees.setdefault(employee.role, []).append(employee)
        return employees

    @staticmethod
    def get_valid_roles(requirements: List[ScheduleRequirement]) -> Set[int]:
        return {
            req_role.role_id
            for requirement in requirements
            for req_shift in requirement.shifts
            for req_role in req_shift.roles
        }

    @staticmethod
    def get_unique_employees(users: Iterable[User], valid_roles: Set[int]) -> List[Employee]:
        """One :class:`Employee` per user, for the first of its roles that is requested."""
        employees = []
        for user in users:
            for role in sorted(user.roles.all(), key=lambda r: r.id):
                if role.id in valid_roles:
                    employees.append(Employee(user.employee_id, role.name))
                    break
        return employees

    # ------------------------ capacity --------------------------------

    def verify_user_quantity(self, requirements: List[ScheduleRequirement],
                             employees: Dict[str, List[Employee]], roles: List[Role]) -> None:
        required = self.summarize_required_employees(requirements, roles)
        available = self.calculate_available_employees(requirements, employees)
        for role_name, required_count in required.items():
            available_count = available.get(role_name, 0)
            if available_count < required_count:
                raise InvalidRequirementsError(
                    f"Not enough employees with role {role_name}: shifts to staff {required_count}, "
                    f"shifts that can be staffed {available_count}"
                )

    def summarize_required_employees(self, requirements: List[ScheduleRequirement], roles: List[Role]) -> Dict[str, int]:
        required: Dict[str, int] = OrderedDict()
        for requirement in requirements:
            for req_shift in requirement.shifts:
                for req_role in req_shift.roles:
                    name = self.find_role_name_by_id(roles, req_role.role_id)
                    required[name] = required.get(name, 0) + req_role.quantity
        return required

    @staticmethod
    def find_role_name_by_id(roles: List[Role], role_id: int) -> str:
        for role in roles:
            if role.id == role_id:
                return role.name
        raise EntityNotFound(f"Role with id {role_id} not found")

    @staticmethod
    def shift_multiplier(days: int) -> int:
        """How many shifts one employee may take over ``days`` requirement days."""
        if days < MAX_SHIFTS_PER_WEEK:
            return days
        return MAX_SHIFTS_PER_WEEK * (days // 7 + 1)

    def calculate_available_employees(self, requirements: List[ScheduleRequirement],
                                      employees: Dict[str, List[Employee]]) -> Dict[str, int]:
        multiplier = self.shift_multiplier(len(requirements))
        return {role: len(pool) * multiplier for role, pool in employees.items()}

    # ------------------------ shifts ----------------------------------

    def prepare_shifts(self, requirements: List[ScheduleRequirement], predefine_shifts: List[PredefineShift],
                       roles: List[Role]) -> List[Gen]:
        templates = {ps.id: ps for ps in predefine_shifts}
        shifts = []
        for requirement in requirements:
            day = requirement.date.timetuple().tm_yday
            for req_shift in self.sort_shifts_by_start(requirement, templates):
                template = templates[req_shift.shift_id]
                shifts.append(Gen(
                    id=req_shift.shift_id,
                    day=day,
                    start_time=template.start,
                    end_time=template.end,
                    requirements=self.prepare_requirements(req_shift.roles, roles),
                    year=requirement.date.year,
                ))
        return shifts

    @staticmethod
    def sort_shifts_by_start(requirement: ScheduleRequirement, templates: Dict[int, PredefineShift]):
        for req_shift in requirement.shifts:
            if req_shift.shift_id not in templates:
                raise EntityNotFound(f"Predefined shift with id {req_shift.shift_id} not found")
        return sorted(requirement.shifts, key=lambda rs: templates[rs.shift_id].start)

    def prepare_requirements(self, req_roles: List[ReqRole], roles: List[Role]) -> List[Requirement]:
        return [Requirement(self.find_role_name_by_id(roles, r.role_id), r.quantity) for r in req_roles]
