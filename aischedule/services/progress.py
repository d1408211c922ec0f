"""Live generation progress published through the Django cache."""
from typing import Optional

from django.conf import settings
from django.core.cache import cache

from aischedule.contracts import GeneratingProgress
from genetic_scheduling import GenerationObserver

PROGRESS_KEY = "aischedule:progress:{receiver_id}"


def progress_key(receiver_id: int) -> str:
    return PROGRESS_KEY.format(receiver_id=receiver_id)


def get_progress(receiver_id: int) -> Optional[GeneratingProgress]:
    """Latest progress reported for the generation started by ``receiver_id``."""
    data = cache.get(progress_key(receiver_id))
    return GeneratingProgress(**data) if data else None


class CacheProgressObserver(GenerationObserver):
    """Stores the latest progress of a run for the user who started it."""

    def __init__(self, receiver_id: int, timeout: Optional[int] = None):
        self.receiver_id = receiver_id
        self.timeout = timeout if timeout is not None else settings.AI_SCHEDULE['PROGRESS_TIMEOUT']

    def on_update(self, progress: float, fitness: float) -> None:
        cache.set(progress_key(self.receiver_id), GeneratingProgress(progress, fitness).to_dict(), self.timeout)
