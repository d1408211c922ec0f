"""Data transfer objects exchanged with callers of the AI schedule service."""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from genetic_scheduling import Employee, Gen

from .exceptions import InvalidRequirementsError


@dataclass(frozen=True)
class ReqRole:
    """How many employees of a role a requested shift needs."""
    role_id: int
    quantity: int

    def __post_init__(self):
        if self.role_id is None or self.role_id <= 0:
            raise InvalidRequirementsError(f"Role id must be a positive number, got {self.role_id}")
        if self.quantity is None or self.quantity <= 0:
            raise InvalidRequirementsError(f"Quantity must be a positive number, got {self.quantity}")

    @classmethod
    def from_dict(cls, data: dict) -> "ReqRole":
        return cls(role_id=int(data["role_id"]), quantity=int(data["quantity"]))


@dataclass(frozen=True)
class ReqShift:
    """A predefined shift to staff on the requirement's date."""
    shift_id: int
    roles: List[ReqRole] = field(default_factory=list)

    def __post_init__(self):
        if self.shift_id is None or self.shift_id <= 0:
            raise InvalidRequirementsError(f"Shift id must be a positive number, got {self.shift_id}")
        if not self.roles:
            raise InvalidRequirementsError(f"Roles of shift {self.shift_id} must not be empty")

    @classmethod
    def from_dict(cls, data: dict) -> "ReqShift":
        return cls(
            shift_id=int(data["shift_id"]),
            roles=[ReqRole.from_dict(r) for r in data.get("roles", [])],
        )


@dataclass(frozen=True)
class ScheduleRequirement:
    """Shifts requested for one calendar day."""
    date: date
    shifts: List[ReqShift] = field(default_factory=list)

    def __post_init__(self):
        if self.date is None:
            raise InvalidRequirementsError("Date must not be empty")
        if not self.shifts:
            raise InvalidRequirementsError(f"Shifts for {self.date} must not be empty")

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduleRequirement":
        raw_date = data["date"]
        return cls(
            date=raw_date if isinstance(raw_date, date) else date.fromisoformat(raw_date),
            shifts=[ReqShift.from_dict(s) for s in data.get("shifts", [])],
        )


@dataclass(frozen=True)
class AggregatedScheduleData:
    """Everything needed to run the algorithm and decode its result."""
    users: list
    predefine_shifts: list
    roles: list
    employees: Dict[str, List[Employee]]
    shifts: List[Gen]


@dataclass(frozen=True)
class AiSchedulerResponse:
    message: str
    success: Optional[bool]

    def to_dict(self) -> dict:
        return {"message": self.message, "success": self.success}


@dataclass(frozen=True)
class GeneratingProgress:
    progress: float
    fitness: float

    def to_dict(self) -> dict:
        return {"progress": self.progress, "fitness": self.fitness}
