"""Tests for turning booking changes into notification messages."""

from __future__ import annotations

import pytest

from fakes import booking_event
from godservices.application.use_cases.notifications import (
    FALLBACK_MESSAGE,
    classify_event,
    describe_status,
    humanize_category,
    is_relevant,
    owner_field,
)
from godservices.domain.entities import BookingChangeEvent, RealtimeEvent, resolve_event_kind


def test_relevance_uses_the_field_matching_the_role() -> None:
    booking = BookingChangeEvent.from_document(
        {"customerId": "C9", "workerId": "W1", "serviceCategory": "plumbing"}
    )

    assert is_relevant(booking, user_id="W1", role="customer") is False
    assert is_relevant(booking, user_id="W1", role="worker") is True


def test_worker_id_event_is_discarded_for_customer_role() -> None:
    event = booking_event("create", customer_id="C9", worker_id="W1")

    assert classify_event(event, user_id="W1", role="customer") is None
    assert classify_event(event, user_id="W1", role="worker") is not None


def test_accepted_status_message() -> None:
    message = describe_status("accepted")

    assert message.icon == "✅"
    assert "accepted" in message.text


def test_unknown_status_falls_back_to_generic_message() -> None:
    assert describe_status("on-hold") == FALLBACK_MESSAGE
    assert describe_status("on-hold").icon == "📋"
    assert describe_status("on-hold").text == "Booking updated"


@pytest.mark.parametrize(
    ("role", "user_id", "icon", "message"),
    [
        ("worker", "W1", "📥", "New job request — deep cleaning"),
        ("customer", "C1", "📤", "Booking created — deep cleaning"),
    ],
)
def test_create_message_depends_on_role(role: str, user_id: str, icon: str, message: str) -> None:
    event = booking_event("create", category="deep-cleaning")

    classified = classify_event(event, user_id=user_id, role=role)

    assert classified is not None
    assert classified.icon == icon
    assert classified.message == message
    assert classified.document_id == "doc-1"


@pytest.mark.parametrize(
    ("status", "icon", "text"),
    [
        ("pending", "🕐", "New booking request received"),
        ("accepted", "✅", "Booking has been accepted"),
        ("in-progress", "🔧", "Job is in progress"),
        ("completed", "🎉", "Job has been completed"),
        ("cancelled", "❌", "Booking has been cancelled"),
        ("archived", "📋", "Booking updated"),
    ],
)
def test_update_message_follows_status_table(status: str, icon: str, text: str) -> None:
    event = booking_event("update", status=status, category="ac-repair")

    classified = classify_event(event, user_id="C1", role="customer")

    assert classified is not None
    assert classified.icon == icon
    assert classified.message == f"{text} — ac repair"


def test_create_wins_over_update_label() -> None:
    assert resolve_event_kind(["documents.x.update", "documents.x.create"]) == "create"


def test_delete_events_are_ignored() -> None:
    event = booking_event("delete")

    assert classify_event(event, user_id="W1", role="worker") is None


def test_event_without_document_payload_is_ignored() -> None:
    event = RealtimeEvent(events=("documents.x.create",), payload=None)

    assert classify_event(event, user_id="W1", role="worker") is None


def test_missing_category_does_not_break_classification() -> None:
    event = RealtimeEvent(
        events=("databases.db.collections.bookings.documents.d.update",),
        payload={"workerId": "W1", "status": "accepted"},
    )

    classified = classify_event(event, user_id="W1", role="worker")

    assert classified is not None
    assert classified.message == "Booking has been accepted — "


def test_humanize_category_replaces_every_hyphen() -> None:
    assert humanize_category("home-deep-cleaning") == "home deep cleaning"


def test_owner_field_rejects_unsupported_roles() -> None:
    assert owner_field("customer") == "customerId"
    assert owner_field("worker") == "workerId"
    with pytest.raises(ValueError):
        owner_field("admin")
