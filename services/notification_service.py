import logging
from typing import List

from models.session_models import Notification, Severity

logger = logging.getLogger(__name__)


class NotificationSink:
    """Collects user-facing status messages until the client drains them."""

    def __init__(self):
        self._pending: List[Notification] = []

    def notify(self, title: str, description: str, severity: Severity = Severity.NORMAL) -> Notification:
        notification = Notification(title=title, description=description, severity=severity)
        self._pending.append(notification)
        if severity == Severity.ERROR:
            logger.warning("%s: %s", title, description)
        else:
            logger.info("%s: %s", title, description)
        return notification

    def drain(self) -> List[Notification]:
        pending, self._pending = self._pending, []
        return pending
