"""Icon and text templates used to describe booking changes."""

from __future__ import annotations

from typing import NamedTuple

from godservices.domain.entities import (
    BOOKING_STATUS_ACCEPTED,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_COMPLETED,
    BOOKING_STATUS_IN_PROGRESS,
    BOOKING_STATUS_PENDING,
    ROLE_WORKER,
)


class StatusMessage(NamedTuple):
    icon: str
    text: str


STATUS_MESSAGES: dict[str, StatusMessage] = {
    BOOKING_STATUS_PENDING: StatusMessage("🕐", "New booking request received"),
    BOOKING_STATUS_ACCEPTED: StatusMessage("✅", "Booking has been accepted"),
    BOOKING_STATUS_COMPLETED: StatusMessage("🎉", "Job has been completed"),
    BOOKING_STATUS_CANCELLED: StatusMessage("❌", "Booking has been cancelled"),
    BOOKING_STATUS_IN_PROGRESS: StatusMessage("🔧", "Job is in progress"),
}
FALLBACK_MESSAGE = StatusMessage("📋", "Booking updated")

WORKER_CREATED_MESSAGE = StatusMessage("📥", "New job request")
CUSTOMER_CREATED_MESSAGE = StatusMessage("📤", "Booking created")


def describe_status(status: str) -> StatusMessage:
    """Return the icon/text pair for ``status`` or the generic fallback."""

    return STATUS_MESSAGES.get(status, FALLBACK_MESSAGE)


def describe_creation(role: str) -> StatusMessage:
    """Return the icon/text pair announcing a new booking to ``role``."""

    if role == ROLE_WORKER:
        return WORKER_CREATED_MESSAGE
    return CUSTOMER_CREATED_MESSAGE


def humanize_category(category: str) -> str:
    """``home-cleaning`` -> ``home cleaning``."""

    return category.replace("-", " ")


def compose_message(text: str, category: str) -> str:
    return f"{text} — {humanize_category(category)}"


__all__ = [
    "CUSTOMER_CREATED_MESSAGE",
    "FALLBACK_MESSAGE",
    "STATUS_MESSAGES",
    "StatusMessage",
    "WORKER_CREATED_MESSAGE",
    "compose_message",
    "describe_creation",
    "describe_status",
    "humanize_category",
]
