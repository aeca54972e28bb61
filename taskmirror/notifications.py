"""Notification sinks receiving user-facing outcome messages."""

import logging
from collections import deque
from typing import Deque, List, Protocol

from taskmirror.models.notification import Notification, Severity

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Fire-and-forget receiver of outcome messages."""

    def notify(self, notification: Notification) -> None:
        ...


class LoggingNotifier:
    """Writes notifications to the log (default sink)."""

    def notify(self, notification: Notification) -> None:
        if notification.severity == Severity.DESTRUCTIVE:
            logger.warning(f"{notification.title}: {notification.description}")
        else:
            logger.info(f"{notification.title}: {notification.description}")


class BufferedNotifier:
    """Keeps the most recent notifications for a UI to drain."""

    def __init__(self, maxlen: int = 100):
        self._items: Deque[Notification] = deque(maxlen=maxlen)

    @property
    def notifications(self) -> List[Notification]:
        return list(self._items)

    @property
    def last(self):
        return self._items[-1] if self._items else None

    def notify(self, notification: Notification) -> None:
        self._items.append(notification)

    def drain(self) -> List[Notification]:
        items = list(self._items)
        self._items.clear()
        return items
