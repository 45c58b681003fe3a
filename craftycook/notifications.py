import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Deque, List

from .config import NOTIFICATION_HISTORY

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    level: str
    message: str
    created_at: datetime = field(default_factory=datetime.now)


class Notifier:
    """Stand-in for the web client's toasts: keeps a short history and logs every message."""

    def __init__(self, history: int = NOTIFICATION_HISTORY) -> None:
        self.history: Deque[Notification] = deque(maxlen=history)
        self._listeners: List[Callable[[Notification], None]] = []

    def subscribe(self, listener: Callable[[Notification], None]) -> None:
        self._listeners.append(listener)

    def _emit(self, level: str, message: str) -> Notification:
        note = Notification(level=level, message=message)
        self.history.append(note)
        logger.log(logging.ERROR if level == "error" else logging.INFO, "[%s] %s", level, message)
        for listener in list(self._listeners):
            listener(note)
        return note

    def success(self, message: str) -> Notification:
        return self._emit("success", message)

    def error(self, message: str) -> Notification:
        return self._emit("error", message)

    @property
    def last(self):
        return self.history[-1] if self.history else None

    def messages(self, level: str = "") -> List[str]:
        return [n.message for n in self.history if not level or n.level == level]

    def clear(self) -> None:
        self.history.clear()
