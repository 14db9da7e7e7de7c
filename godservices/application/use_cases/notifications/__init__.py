"""Public helpers for the in-app notification feed."""

from .classification import (
    ClassifiedEvent,
    classify_booking,
    classify_event,
    is_relevant,
    owner_field,
)
from .engine import NotificationEngine, NotificationView, init_notifications
from .formatting import badge_label, time_ago
from .messages import (
    FALLBACK_MESSAGE,
    STATUS_MESSAGES,
    StatusMessage,
    compose_message,
    describe_creation,
    describe_status,
    humanize_category,
)

__all__ = [
    "ClassifiedEvent",
    "classify_booking",
    "classify_event",
    "is_relevant",
    "owner_field",
    "NotificationEngine",
    "NotificationView",
    "init_notifications",
    "badge_label",
    "time_ago",
    "FALLBACK_MESSAGE",
    "STATUS_MESSAGES",
    "StatusMessage",
    "compose_message",
    "describe_creation",
    "describe_status",
    "humanize_category",
]
