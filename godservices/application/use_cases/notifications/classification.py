"""Turn realtime booking changes into notification messages."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import NamedTuple

from godservices.domain.entities import (
    EVENT_KIND_CREATE,
    EVENT_KIND_UPDATE,
    ROLE_CUSTOMER,
    ROLE_WORKER,
    BookingChangeEvent,
    RealtimeEvent,
)

from .messages import compose_message, describe_creation, describe_status

logger = logging.getLogger(__name__)

SUPPORTED_ROLES = (ROLE_CUSTOMER, ROLE_WORKER)


class ClassifiedEvent(NamedTuple):
    icon: str
    message: str
    document_id: str


def owner_field(role: str) -> str:
    """Return the booking attribute that links a document to ``role``."""

    if role == ROLE_CUSTOMER:
        return "customerId"
    if role == ROLE_WORKER:
        return "workerId"
    raise ValueError(f"Notifications are not available for role {role!r}")


def is_relevant(booking: BookingChangeEvent, *, user_id: str, role: str) -> bool:
    """Return whether ``booking`` belongs to ``user_id`` from the ``role`` view."""

    if role == ROLE_CUSTOMER:
        return booking.customer_id == user_id
    if role == ROLE_WORKER:
        return booking.worker_id == user_id
    return False


def classify_booking(
    booking: BookingChangeEvent, *, user_id: str, role: str
) -> ClassifiedEvent | None:
    """Return the notification for ``booking`` or ``None`` when it is ignored."""

    if not is_relevant(booking, user_id=user_id, role=role):
        return None

    if booking.kind == EVENT_KIND_CREATE:
        template = describe_creation(role)
    elif booking.kind == EVENT_KIND_UPDATE:
        template = describe_status(booking.status)
    else:
        return None

    return ClassifiedEvent(
        icon=template.icon,
        message=compose_message(template.text, booking.service_category),
        document_id=booking.document_id,
    )


def classify_event(
    event: RealtimeEvent, *, user_id: str, role: str
) -> ClassifiedEvent | None:
    """Classify a raw realtime ``event`` for the given viewer."""

    if not isinstance(event.payload, Mapping):
        logger.debug("Discarding realtime event without document payload: %s", event.events)
        return None

    booking = BookingChangeEvent.from_document(event.payload, event.events)
    return classify_booking(booking, user_id=user_id, role=role)


__all__ = [
    "SUPPORTED_ROLES",
    "ClassifiedEvent",
    "classify_booking",
    "classify_event",
    "is_relevant",
    "owner_field",
]
