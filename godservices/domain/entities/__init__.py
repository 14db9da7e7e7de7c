"""Domain entities exposed by the application."""

from .booking import (
    BOOKING_STATUSES,
    BOOKING_STATUS_ACCEPTED,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_COMPLETED,
    BOOKING_STATUS_IN_PROGRESS,
    BOOKING_STATUS_PENDING,
    EVENT_KIND_CREATE,
    EVENT_KIND_OTHER,
    EVENT_KIND_UPDATE,
    BookingChangeEvent,
    resolve_event_kind,
)
from .notification import NotificationEntry, NotificationState
from .realtime_event import RealtimeEvent
from .user import ROLES, ROLE_ADMIN, ROLE_CUSTOMER, ROLE_WORKER, User

__all__ = [
    "BOOKING_STATUSES",
    "BOOKING_STATUS_ACCEPTED",
    "BOOKING_STATUS_CANCELLED",
    "BOOKING_STATUS_COMPLETED",
    "BOOKING_STATUS_IN_PROGRESS",
    "BOOKING_STATUS_PENDING",
    "EVENT_KIND_CREATE",
    "EVENT_KIND_OTHER",
    "EVENT_KIND_UPDATE",
    "BookingChangeEvent",
    "resolve_event_kind",
    "NotificationEntry",
    "NotificationState",
    "RealtimeEvent",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_CUSTOMER",
    "ROLE_WORKER",
    "User",
]
