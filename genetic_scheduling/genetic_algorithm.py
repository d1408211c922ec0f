from __future__ import annotations

import logging
import random
import time
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .base import (
    Algorithm,
    Chromosome,
    EmployeesByRole,
    Employee,
    Gen,
    GenerationObserver,
    NotEnoughEmployeesError,
    Requirement,
)
from .constraints import ConstraintChecker

logger = logging.getLogger(__name__)


# ───────────────────────────── helpers ────────────────────────────────


def _fitness_vector(population: Sequence[Chromosome]) -> np.ndarray:
    return np.fromiter((c.fitness for c in population), dtype=np.float64, count=len(population))


def _best_index(population: Sequence[Chromosome]) -> int:
    # argmax returns the first maximum, so ties go to the earlier candidate
    return int(np.argmax(_fitness_vector(population)))


# ─────────────────────────── main class ───────────────────────────────


class GeneticAlgorithm(Algorithm):
    """
    Generational GA with tournament selection, single point crossover,
    per-gene re-sampling mutation and one elite slot.

    The engine keeps no state between runs; create one instance per
    concurrent run.
    """

    # --------------------------- meta ---------------------------------

    @property
    def name(self) -> str:
        return "Genetic Algorithm"

    def __init__(
            self,
            population_size: int = 50,
            tournament_size: int = 10,
            max_generations: int = 100_000,
            mutation_rate: float = 0.02,
            crossover_rate: float = 0.6,
            constraint_checker: Optional[ConstraintChecker] = None,
            random_source: Optional[random.Random] = None,
            report_interval: int = 100,
            observers: Optional[Iterable[GenerationObserver]] = None,
    ) -> None:
        if population_size < 1:
            raise ValueError("population_size must be positive")
        if tournament_size < 1:
            raise ValueError("tournament_size must be positive")
        if max_generations < 0:
            raise ValueError("max_generations must not be negative")
        if report_interval < 1:
            raise ValueError("report_interval must be positive")

        self.population_size = population_size
        self.tournament_size = tournament_size
        self.max_generations = max_generations
        self.mutation_rate = mutation_rate
        self.crossover_rate = crossover_rate
        self.constraint_checker = constraint_checker or ConstraintChecker()
        self.random = random_source or random.Random()
        self.report_interval = report_interval
        self.observers: List[GenerationObserver] = list(observers or [])

    # --------------------------- run ----------------------------------

    def run(self, shifts: Sequence[Gen], employees_by_role: EmployeesByRole, cancel_event=None) -> Chromosome:
        """
        Evolve schedules for ``shifts`` until one violates nothing or the
        generation limit is reached.

        Args:
            shifts: Shift slots to staff, in chronological order
            employees_by_role: Employee pool per role name
            cancel_event: Optional ``threading.Event``; when set the run stops
                at the next generation and returns the best schedule so far

        Returns:
            The fittest chromosome seen during the whole run

        Raises:
            NotEnoughEmployeesError: if a requirement cannot be sampled from the pool
        """
        t0 = time.time()
        logger.info(
            "Starting %s run: %d shifts, population=%d, max_generations=%d",
            self.name, len(shifts), self.population_size, self.max_generations,
        )

        population = self._initialize_population(shifts, employees_by_role)
        best = population[_best_index(population)]

        generation = 0
        reported = False
        while generation < self.max_generations and best.fitness < 1.0:
            if cancel_event is not None and cancel_event.is_set():
                logger.warning("GA run cancelled at generation %d", generation)
                break
            generation += 1
            population = self._evolve_population(population, employees_by_role)
            best = self._update_best(population, best)

            reported = self._should_report(generation, best)
            if reported:
                self._log_statistics(generation, population, best)
                self.notify_observers(generation, best)

        if not reported:
            self.notify_observers(generation, best)

        logger.info(
            "GA run finished after %d generations in %.2fs, best fitness %.4f",
            generation, time.time() - t0, best.fitness,
        )
        return best

    # ------------------------ observers -------------------------------

    def add_observer(self, observer: GenerationObserver) -> None:
        self.observers.append(observer)

    def notify_observers(self, generation: int, chromosome: Chromosome) -> None:
        progress = generation / self.max_generations * 100 if self.max_generations else 100.0
        for observer in self.observers:
            observer.on_update(progress, chromosome.fitness)

    def _should_report(self, generation: int, best: Chromosome) -> bool:
        return (
            generation % self.report_interval == 0
            or best.fitness == 1.0
            or generation >= self.max_generations
        )

    def _log_statistics(self, generation: int, population: Sequence[Chromosome], best: Chromosome) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            fitness = _fitness_vector(population)
            logger.debug(
                "Generation %d: best=%.4f population best=%.4f mean=%.4f",
                generation, best.fitness, fitness.max(), fitness.mean(),
            )

    # ---------------------- population --------------------------------

    def _initialize_population(self, shifts: Sequence[Gen], employees_by_role: EmployeesByRole) -> List[Chromosome]:
        return [self._random_chromosome(shifts, employees_by_role) for _ in range(self.population_size)]

    def _random_chromosome(self, shifts: Sequence[Gen], employees_by_role: EmployeesByRole) -> Chromosome:
        gens = [
            shift.with_employees(self._select_random_employees(shift.requirements, employees_by_role))
            for shift in shifts
        ]
        return Chromosome(gens, self.constraint_checker)

    def _evolve_population(self, population: List[Chromosome], employees_by_role: EmployeesByRole) -> List[Chromosome]:
        new_population = [population[_best_index(population)]]
        while len(new_population) < self.population_size:
            parent1 = self._tournament(population)
            parent2 = self._tournament(population)
            child = self._crossover(parent1, parent2)
            new_population.append(self._mutate(child, employees_by_role))
        return new_population

    @staticmethod
    def _update_best(population: Sequence[Chromosome], best: Chromosome) -> Chromosome:
        candidate = population[_best_index(population)]
        return candidate if candidate.fitness > best.fitness else best

    # ------------------------ GA operators ----------------------------

    def _tournament(self, population: Sequence[Chromosome]) -> Chromosome:
        contenders = [population[self.random.randrange(len(population))] for _ in range(self.tournament_size)]
        return contenders[_best_index(contenders)]

    def _crossover(self, parent1: Chromosome, parent2: Chromosome) -> Chromosome:
        size = len(parent1.gens)
        if size < 2 or self.random.random() >= self.crossover_rate:
            return parent1
        cut = self.random.randint(1, size - 1)
        return Chromosome(parent1.gens[:cut] + parent2.gens[cut:], self.constraint_checker)

    def _mutate(self, chromosome: Chromosome, employees_by_role: EmployeesByRole) -> Chromosome:
        gens = list(chromosome.gens)
        mutated = False
        for i, gen in enumerate(gens):
            if self.random.random() >= self.mutation_rate:
                continue
            gens[i] = gen.with_employees(self._select_random_employees(gen.requirements, employees_by_role))
            mutated = True
        if not mutated:
            return chromosome
        return Chromosome(gens, self.constraint_checker)

    # ------------------------ sampling --------------------------------

    def _select_random_employees(self, requirements: Sequence[Requirement],
                                 employees_by_role: EmployeesByRole) -> List[Employee]:
        selected: List[Employee] = []
        for req in requirements:
            pool = employees_by_role.get(req.role)
            if not pool:
                raise NotEnoughEmployeesError(f"No employees with role {req.role}")
            if len(pool) < req.count:
                raise NotEnoughEmployeesError(
                    f"Not enough employees with role {req.role}: required {req.count}, available {len(pool)}"
                )
            selected.extend(self.random.sample(pool, req.count))
        return selected
