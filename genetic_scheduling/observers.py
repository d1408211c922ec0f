"""Generation observers shipped with the algorithm package."""
import logging
import queue
from typing import Optional, Tuple

from .base import GenerationObserver

logger = logging.getLogger(__name__)


class LogGenerationObserver(GenerationObserver):
    """Writes every progress report to the log."""

    def __init__(self, level: int = logging.DEBUG):
        self.level = level

    def on_update(self, progress: float, fitness: float) -> None:
        logger.log(self.level, "Progress: %.2f%%, fitness: %.4f", progress, fitness)


class QueueGenerationObserver(GenerationObserver):
    """
    Hands progress reports to a consumer through a bounded queue.

    The algorithm never waits on the consumer: when the queue is full the
    oldest report is dropped to make room for the newest one.
    """

    def __init__(self, maxsize: int = 100, progress_queue: Optional[queue.Queue] = None):
        self.queue: queue.Queue = progress_queue if progress_queue is not None else queue.Queue(maxsize=maxsize)
        self.dropped = 0

    def on_update(self, progress: float, fitness: float) -> None:
        item = (progress, fitness)
        while True:
            try:
                self.queue.put_nowait(item)
                return
            except queue.Full:
                try:
                    self.queue.get_nowait()
                    self.dropped += 1
                except queue.Empty:
                    pass

    def drain(self) -> list:
        """Return all queued ``(progress, fitness)`` reports, oldest first."""
        items = []
        while True:
            try:
                items.append(self.queue.get_nowait())
            except queue.Empty:
                return items

    def latest(self) -> Optional[Tuple[float, float]]:
        items = self.drain()
        return items[-1] if items else None
