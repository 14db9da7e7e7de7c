"""Domain entities describing the in-app notification feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class NotificationEntry:
    """One item shown under the notification bell."""

    icon: str
    message: str
    timestamp: datetime
    unread: bool = True
    document_id: str | None = None


@dataclass
class NotificationState:
    """Feed owned by a single notification engine.

    ``entries`` is ordered newest first and never grows beyond ``capacity``.
    """

    capacity: int = 20
    entries: list[NotificationEntry] = field(default_factory=list)
    unread_count: int = 0
    panel_open: bool = False

    def prepend(self, entry: NotificationEntry) -> None:
        """Insert ``entry`` at the front, evicting the oldest entries."""

        self.entries.insert(0, entry)
        if len(self.entries) > self.capacity:
            del self.entries[self.capacity:]
        if entry.unread:
            self.unread_count += 1

    def append(self, entry: NotificationEntry) -> bool:
        """Add ``entry`` at the tail when there is room left."""

        if len(self.entries) >= self.capacity:
            return False
        self.entries.append(entry)
        return True

    def clear(self) -> None:
        self.entries.clear()
        self.unread_count = 0


__all__ = ["NotificationEntry", "NotificationState"]
