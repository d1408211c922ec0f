"""Genetic shift scheduling algorithm - pure Python implementation independent of Django."""

from .base import (
    Algorithm,
    Chromosome,
    Employee,
    Gen,
    GenerationObserver,
    NotEnoughEmployeesError,
    Requirement,
)
from .constraints import ConstraintChecker
from .genetic_algorithm import GeneticAlgorithm
from .observers import LogGenerationObserver, QueueGenerationObserver

__all__ = [
    'Algorithm',
    'Chromosome',
    'ConstraintChecker',
    'Employee',
    'Gen',
    'GenerationObserver',
    'GeneticAlgorithm',
    'LogGenerationObserver',
    'NotEnoughEmployeesError',
    'QueueGenerationObserver',
    'Requirement',
]
