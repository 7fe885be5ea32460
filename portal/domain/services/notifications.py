"""User-facing notification sinks.

Components that need to tell the user something receive a ``Notifier`` as an
argument. There is no process-wide registry to reach for.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol

import structlog

logger = structlog.get_logger()

NotificationLevel = Literal["success", "error", "warning", "info"]


@dataclass(slots=True, frozen=True)
class Notification:
    message: str
    level: NotificationLevel = "info"


class Notifier(Protocol):
    def notify(self, message: str, level: NotificationLevel = "info") -> None: ...


class LogNotifier:
    """Writes notifications to the structured log."""

    def notify(self, message: str, level: NotificationLevel = "info") -> None:
        if level == "error":
            logger.error("user_notification", message=message, kind=level)
        elif level == "warning":
            logger.warning("user_notification", message=message, kind=level)
        else:
            logger.info("user_notification", message=message, kind=level)


@dataclass(slots=True)
class CollectingNotifier:
    """Buffers notifications so a caller can hand them back to the client."""

    notifications: list[Notification] = field(default_factory=list)

    def notify(self, message: str, level: NotificationLevel = "info") -> None:
        self.notifications.append(Notification(message=message, level=level))

    @property
    def messages(self) -> list[str]:
        return [item.message for item in self.notifications]
