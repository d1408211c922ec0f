"""Base classes and interfaces for the genetic shift scheduler."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import time
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .constraints import ConstraintChecker


class NotEnoughEmployeesError(ValueError):
    """Raised when a requirement cannot be staffed from the employee pool."""


@dataclass(frozen=True)
class Employee:
    """Employee as seen by the algorithm: business id plus the role it fills."""
    id: str
    role: str


@dataclass(frozen=True)
class Requirement:
    """Number of employees of one role needed on a shift."""
    role: str
    count: int


@dataclass(frozen=True)
class Gen:
    """
    One shift slot to staff on one day.

    ``id`` points back to the predefined shift template and ``day`` is the
    day of the year, in ``year`` when the caller knows it. Instances are
    immutable; operators build new ones with :meth:`with_employees`.
    """
    id: int
    day: int
    start_time: time
    end_time: time
    employees: Tuple[Employee, ...] = ()
    requirements: Tuple[Requirement, ...] = ()
    year: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, 'employees', tuple(self.employees))
        object.__setattr__(self, 'requirements', tuple(self.requirements))

    @property
    def required_count(self) -> int:
        return sum(req.count for req in self.requirements)

    def with_employees(self, employees: Sequence[Employee]) -> 'Gen':
        return replace(self, employees=tuple(employees))


EmployeesByRole = Dict[str, List[Employee]]


@dataclass(frozen=True)
class Chromosome:
    """One candidate schedule and its fitness, ``1 / (1 + violations)``."""
    gens: Tuple[Gen, ...]
    checker: 'ConstraintChecker' = field(repr=False, compare=False)
    violations: float = field(init=False, compare=False)
    fitness: float = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'gens', tuple(self.gens))
        violations = self.checker.check_violations(self.gens)
        object.__setattr__(self, 'violations', violations)
        object.__setattr__(self, 'fitness', 1 / (1 + violations))

    def get_gens(self) -> List[Gen]:
        return list(self.gens)


class GenerationObserver(ABC):
    """Receives progress reports from a running algorithm."""

    @abstractmethod
    def on_update(self, progress: float, fitness: float) -> None:
        """Called with the progress in percent and the best fitness so far."""
        pass


class Algorithm(ABC):
    """Abstract base class for schedule generating algorithms."""

    @abstractmethod
    def run(self, shifts: Sequence[Gen], employees_by_role: EmployeesByRole, cancel_event=None) -> Chromosome:
        """Staff the given shifts and return the best chromosome found."""
        pass

    @abstractmethod
    def add_observer(self, observer: GenerationObserver) -> None:
        pass

    @abstractmethod
    def notify_observers(self, generation: int, chromosome: Chromosome) -> None:
        pass
