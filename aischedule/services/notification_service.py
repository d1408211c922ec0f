import logging
from enum import Enum

from aischedule.models import Notification, User

logger = logging.getLogger(__name__)


class AiSchedulerNotificationType(Enum):
    SUCCESS = ("Schedule generated", "The schedule was generated successfully and is waiting to be published.")
    FAILURE = ("Schedule generation failed", "The schedule could not be generated, please try again.")

    def __init__(self, title: str, message: str):
        self.title = title
        self.message = message


class NotificationService:
    """Stores notifications addressed to a single user."""

    def create(self, user: User, title: str, message: str) -> Notification:
        notification = Notification.objects.create(user=user, title=title, message=message)
        logger.info("Notification %s sent to user %s: %s", notification.id, user.id, title)
        return notification

    def send_ai_scheduler_notification(self, user: User, notification_type: AiSchedulerNotificationType) -> Notification:
        return self.create(user, notification_type.title, notification_type.message)
