"""
AI Schedule Service

Runs the genetic algorithm for a set of schedule requirements, stores the
resulting shifts as unpublished drafts and lets the last draft be revoked.
"""
import logging
import random
import threading
from typing import Callable, Iterable, List, Optional

from django.conf import settings
from django.db import transaction

from aischedule.contracts import AggregatedScheduleData, AiSchedulerResponse, ScheduleRequirement
from aischedule.exceptions import ScheduleGenerationError
from aischedule.models import Shift, User
from aischedule.services.algorithm_entity_mapper import AlgorithmEntityMapper
from aischedule.services.notification_service import AiSchedulerNotificationType, NotificationService
from aischedule.services.progress import CacheProgressObserver
from aischedule.services.schedule_data_encoder import ScheduleDataEncoder
from genetic_scheduling import Algorithm, Gen, GeneticAlgorithm, LogGenerationObserver, NotEnoughEmployeesError

logger = logging.getLogger(__name__)

AlgorithmFactory = Callable[[User], Algorithm]


class AiScheduleService:
    """
    Generates draft schedules with the genetic algorithm.

    The ids of the last successfully generated shifts are kept so the draft
    can be revoked; every successful generation replaces them.
    """

    def __init__(
            self,
            encoder: Optional[ScheduleDataEncoder] = None,
            mapper: Optional[AlgorithmEntityMapper] = None,
            notification_service: Optional[NotificationService] = None,
            algorithm_factory: Optional[AlgorithmFactory] = None,
            fitness_threshold: Optional[float] = None,
    ):
        self.encoder = encoder or ScheduleDataEncoder()
        self.mapper = mapper or AlgorithmEntityMapper()
        self.notification_service = notification_service or NotificationService()
        self.algorithm_factory = algorithm_factory or self.default_algorithm
        self.fitness_threshold = (
            fitness_threshold if fitness_threshold is not None else settings.AI_SCHEDULE['FITNESS_THRESHOLD']
        )
        self._lock = threading.Lock()
        self._last_generated_shift_ids: Optional[List[int]] = None

    @staticmethod
    def default_algorithm(receiver: User, seed: Optional[int] = None, **overrides) -> Algorithm:
        """Algorithm configured from ``settings.AI_SCHEDULE`` reporting to the log and the receiver's progress."""
        config = {**settings.AI_SCHEDULE, **{k.upper(): v for k, v in overrides.items()}}
        return GeneticAlgorithm(
            population_size=config['POPULATION_SIZE'],
            tournament_size=config['TOURNAMENT_SIZE'],
            max_generations=config['MAX_GENERATIONS'],
            mutation_rate=config['MUTATION_RATE'],
            crossover_rate=config['CROSSOVER_RATE'],
            random_source=random.Random(seed),
            report_interval=config['REPORT_INTERVAL'],
            observers=[
                LogGenerationObserver(),
                CacheProgressObserver(receiver.id, config['PROGRESS_TIMEOUT']),
            ],
        )

    @property
    def last_generated_shift_ids(self) -> Optional[List[int]]:
        with self._lock:
            return list(self._last_generated_shift_ids) if self._last_generated_shift_ids else None

    # --------------------------- generate -----------------------------

    def generate_schedule(self, requirements: Iterable[ScheduleRequirement], receiver: User,
                          cancel_event=None) -> AiSchedulerResponse:
        """
        Generate and store a draft schedule.

        Invalid requirements propagate as exceptions. A run that cannot
        staff the shifts or ends below the fitness threshold is reported to
        the receiver and answered with an unsuccessful response.
        """
        data = self.encoder.prepare_data(requirements)

        try:
            gens = self.run_algorithm(data, receiver, cancel_event)
        except (NotEnoughEmployeesError, ScheduleGenerationError) as e:
            logger.warning("Schedule generation for user %s failed: %s", receiver.id, e)
            return self._failed_response(receiver)

        decoded = self.mapper.decode_shifts(gens, data)
        shift_ids = self._save_shifts(decoded)
        with self._lock:
            self._last_generated_shift_ids = shift_ids
        logger.info("Generated %d shifts for user %s", len(shift_ids), receiver.id)
        return self._successful_response(receiver)

    def run_algorithm(self, data: AggregatedScheduleData, receiver: User, cancel_event=None) -> List[Gen]:
        algorithm = self.algorithm_factory(receiver)
        chromosome = algorithm.run(data.shifts, data.employees, cancel_event=cancel_event)
        if chromosome.fitness < self.fitness_threshold:
            raise ScheduleGenerationError(
                f"Best fitness {chromosome.fitness:.4f} is below the threshold {self.fitness_threshold}"
            )
        return chromosome.get_gens()

    @staticmethod
    def _save_shifts(shifts: List[Shift]) -> List[int]:
        with transaction.atomic():
            for shift in shifts:
                shift.save()
        return [shift.id for shift in shifts]

    def _failed_response(self, receiver: User) -> AiSchedulerResponse:
        self.notification_service.send_ai_scheduler_notification(receiver, AiSchedulerNotificationType.FAILURE)
        return AiSchedulerResponse("Schedule generation failed, please try again", False)

    def _successful_response(self, receiver: User) -> AiSchedulerResponse:
        self.notification_service.send_ai_scheduler_notification(receiver, AiSchedulerNotificationType.SUCCESS)
        return AiSchedulerResponse("Schedule generated successfully", True)

    # --------------------------- revoke -------------------------------

    def revoke_schedule(self) -> AiSchedulerResponse:
        """Delete the still unpublished shifts of the last generated schedule."""
        with self._lock:
            if not self._last_generated_shift_ids:
                return AiSchedulerResponse("There is no schedule to revoke", None)

            with transaction.atomic():
                deleted, _ = Shift.objects.filter(
                    id__in=self._last_generated_shift_ids,
                    published=False,
                ).delete()
            self._last_generated_shift_ids = None

        logger.info("Revoked %d generated shifts", deleted)
        return AiSchedulerResponse("The last generated schedule was revoked", None)
