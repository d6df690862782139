"""
Cart notification channel.

Operations describe their user-visible outcome as a Notification; a Notifier
delivers it. Delivery is fire-and-forget: the cart never waits on it.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Protocol

from storefront.logging import get_logger

logger = get_logger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str

    @classmethod
    def success(cls, message: str) -> "Notification":
        return cls(NotificationLevel.SUCCESS, message)

    @classmethod
    def error(cls, message: str) -> "Notification":
        return cls(NotificationLevel.ERROR, message)


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


class LoggingNotifier:
    """Default channel: writes each notification to the log."""

    def notify(self, notification: Notification) -> None:
        if notification.level is NotificationLevel.ERROR:
            logger.warning(f"Cart notification: {notification.message}")
        else:
            logger.info(f"Cart notification: {notification.message}")


class RecordingNotifier:
    """Keeps every notification in memory, newest last."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def messages(self) -> List[str]:
        return [n.message for n in self.notifications]

    def clear(self) -> None:
        self.notifications.clear()
