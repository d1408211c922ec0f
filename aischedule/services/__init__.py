from .ai_schedule_service import AiScheduleService
from .algorithm_entity_mapper import AlgorithmEntityMapper
from .notification_service import AiSchedulerNotificationType, NotificationService
from .progress import CacheProgressObserver, get_progress
from .schedule_data_encoder import ScheduleDataEncoder

__all__ = [
    'AiScheduleService',
    'AiSchedulerNotificationType',
    'AlgorithmEntityMapper',
    'CacheProgressObserver',
    'NotificationService',
    'ScheduleDataEncoder',
    'get_progress',
]
