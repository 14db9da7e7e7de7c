"""Domain entity representing a change pushed for a booking document."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping

from godservices.utils import parse_timestamp

BOOKING_STATUS_PENDING = "pending"
BOOKING_STATUS_ACCEPTED = "accepted"
BOOKING_STATUS_IN_PROGRESS = "in-progress"
BOOKING_STATUS_COMPLETED = "completed"
BOOKING_STATUS_CANCELLED = "cancelled"

BOOKING_STATUSES = (
    BOOKING_STATUS_PENDING,
    BOOKING_STATUS_ACCEPTED,
    BOOKING_STATUS_IN_PROGRESS,
    BOOKING_STATUS_COMPLETED,
    BOOKING_STATUS_CANCELLED,
)

EVENT_KIND_CREATE = "create"
EVENT_KIND_UPDATE = "update"
EVENT_KIND_OTHER = "other"


def resolve_event_kind(events: Iterable[str]) -> str:
    """Infer whether the realtime ``events`` labels describe a create or update.

    A create label wins over an update label when both are present.
    """

    labels = [label for label in events if isinstance(label, str)]
    if any(".create" in label for label in labels):
        return EVENT_KIND_CREATE
    if any(".update" in label for label in labels):
        return EVENT_KIND_UPDATE
    return EVENT_KIND_OTHER


@dataclass(frozen=True)
class BookingChangeEvent:
    """Read-only projection of a booking document and how it changed."""

    document_id: str
    customer_id: str
    worker_id: str
    status: str
    service_category: str
    updated_at: datetime | None
    kind: str = EVENT_KIND_OTHER

    @classmethod
    def from_document(
        cls, document: Mapping[str, Any], events: Iterable[str] = ()
    ) -> "BookingChangeEvent":
        """Build an event from an Appwrite document payload."""

        return cls(
            document_id=_as_text(document.get("$id")),
            customer_id=_as_text(document.get("customerId")),
            worker_id=_as_text(document.get("workerId")),
            status=_as_text(document.get("status")),
            service_category=_as_text(document.get("serviceCategory")),
            updated_at=parse_timestamp(document.get("$updatedAt")),
            kind=resolve_event_kind(events),
        )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


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
]
