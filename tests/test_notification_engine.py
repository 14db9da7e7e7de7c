"""Tests for the per-page notification engine."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from fakes import FakeEventSource, FakeHistory, RecordingView, booking_event, settle
from godservices.application.use_cases.notifications import (
    NotificationEngine,
    init_notifications,
)

CHANNEL = "databases.test-db.collections.bookings.documents"
FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _engine(role: str = "worker", user_id: str = "W1", **kwargs) -> NotificationEngine:
    kwargs.setdefault("history", FakeHistory())
    kwargs.setdefault("events", FakeEventSource())
    kwargs.setdefault("view", RecordingView())
    return NotificationEngine(user_id, role, channel=CHANNEL, clock=lambda: FIXED_NOW, **kwargs)


@pytest.mark.parametrize("calls", [0, 1, 5, 19, 20, 21, 30])
def test_feed_is_bounded_and_newest_first(calls: int) -> None:
    engine = _engine()

    for index in range(calls):
        engine.add_notification("🔔", f"message {index}")

    assert len(engine.state.entries) == min(calls, 20)
    if calls:
        assert engine.state.entries[0].message == f"message {calls - 1}"
        assert engine.state.entries[-1].message == f"message {max(calls - 20, 0)}"


def test_unread_count_tracks_additions_until_panel_opens() -> None:
    engine = _engine()
    for index in range(12):
        engine.add_notification("🔔", f"message {index}")

    assert engine.state.unread_count == 12
    assert engine.badge == "9+"

    assert engine.toggle_panel() is True
    assert engine.state.unread_count == 0
    assert engine.badge is None


def test_opening_panel_keeps_entry_flags() -> None:
    engine = _engine()
    engine.add_notification("🔔", "hello")

    engine.toggle_panel()

    assert engine.state.entries[0].unread is True


def test_added_entry_is_rendered_and_alerted_when_panel_closed() -> None:
    view = RecordingView()
    engine = _engine(view=view)

    entry = engine.add_notification("📥", "New job request — plumbing")

    assert entry.unread is True
    assert entry.timestamp == FIXED_NOW
    assert view.entries == [entry]
    assert view.badge == "1"
    assert view.alerts == [("📥 New job request — plumbing", "info")]


def test_no_alert_while_panel_is_open() -> None:
    view = RecordingView()
    engine = _engine(view=view)
    engine.toggle_panel()

    engine.add_notification("📥", "New job request — plumbing")

    assert view.alerts == []
    assert engine.state.unread_count == 1


def test_clicking_outside_closes_the_panel() -> None:
    view = RecordingView()
    engine = _engine(view=view)
    engine.toggle_panel()

    engine.handle_document_click(inside_panel=True)
    assert engine.state.panel_open is True

    engine.handle_document_click(inside_panel=False, on_bell=True)
    assert engine.state.panel_open is True

    engine.handle_document_click(inside_panel=False)
    assert engine.state.panel_open is False
    assert view.panel_open is False


def test_bell_toggles_the_panel_closed_again() -> None:
    engine = _engine()

    engine.toggle_panel()
    assert engine.toggle_panel() is False


def test_clear_all_empties_feed() -> None:
    view = RecordingView()
    engine = _engine(view=view)
    engine.add_notification("🔔", "one")
    engine.add_notification("🔔", "two")

    engine.clear_all()

    assert engine.state.entries == []
    assert engine.state.unread_count == 0
    assert view.entries == []
    assert view.badge is None


def test_unsupported_role_is_rejected() -> None:
    with pytest.raises(ValueError):
        _engine(role="admin")


def test_engines_do_not_share_state() -> None:
    first = _engine()
    second = _engine()

    first.add_notification("🔔", "only for the first")

    assert len(first.state.entries) == 1
    assert second.state.entries == []


@pytest.mark.anyio
async def test_worker_scenario_history_then_live_create() -> None:
    history = FakeHistory(
        [
            {
                "$id": "b1",
                "status": "pending",
                "serviceCategory": "home-cleaning",
                "workerId": "U1",
                "$updatedAt": "2024-05-01T11:00:00.000+00:00",
            }
        ]
    )
    events = FakeEventSource()
    view = RecordingView()

    engine = await init_notifications(
        "U1", "worker", history=history, events=events, channel=CHANNEL, view=view
    )
    try:
        assert history.calls == [{"field": "workerId", "user_id": "U1", "limit": 5}]
        assert len(view.entries) == 1
        initial = view.entries[0]
        assert initial.icon == "🕐"
        assert initial.message == "New booking request received — home cleaning"
        assert initial.unread is False
        assert engine.state.unread_count == 0

        events.push(booking_event("create", worker_id="U1", category="plumbing"))
        await settle(lambda: engine.state.unread_count == 1)

        assert engine.state.unread_count == 1
        latest = engine.state.entries[0]
        assert latest.unread is True
        assert latest.icon == "📥"
        assert latest.message == "New job request — plumbing"
        assert engine.state.entries[1] == initial
        assert events.channels == [CHANNEL]
    finally:
        await engine.close()


@pytest.mark.anyio
async def test_mount_happens_before_history() -> None:
    view = RecordingView()
    engine = await init_notifications(
        "C1",
        "customer",
        history=FakeHistory([{"customerId": "C1", "status": "accepted", "serviceCategory": "x"}]),
        events=FakeEventSource(),
        channel=CHANNEL,
        view=view,
    )
    try:
        assert view.calls[0] == ("mount", None)
        assert view.calls[-1] == ("render", 1)
    finally:
        await engine.close()


@pytest.mark.anyio
async def test_live_events_arrive_while_history_loads() -> None:
    history = FakeHistory(
        [{"workerId": "W1", "status": "completed", "serviceCategory": "painting"}],
        gated=True,
    )
    events = FakeEventSource()
    engine = _engine(history=history, events=events)
    starting = asyncio.create_task(engine.start())
    try:
        await settle(lambda: history.calls)
        assert events.channels == [CHANNEL]

        events.push(booking_event("create", worker_id="W1", category="plumbing"))
        await settle(lambda: engine.state.entries)
        assert [entry.message for entry in engine.state.entries] == [
            "New job request — plumbing"
        ]
        assert not starting.done()

        history.release()
        await starting

        assert [entry.message for entry in engine.state.entries] == [
            "New job request — plumbing",
            "Job has been completed — painting",
        ]
        assert engine.state.unread_count == 1
    finally:
        history.release()
        await starting
        await engine.close()


@pytest.mark.anyio
async def test_history_failure_leaves_empty_feed(caplog: pytest.LogCaptureFixture) -> None:
    events = FakeEventSource()
    engine = await init_notifications(
        "W1",
        "worker",
        history=FakeHistory(error=RuntimeError("network down")),
        events=events,
        channel=CHANNEL,
        view=RecordingView(),
    )
    try:
        assert engine.state.entries == []
        assert "Could not load existing notifications" in caplog.text
        assert events.channels == [CHANNEL]
    finally:
        await engine.close()


@pytest.mark.anyio
async def test_subscription_failure_is_not_fatal(caplog: pytest.LogCaptureFixture) -> None:
    engine = await init_notifications(
        "W1",
        "worker",
        history=FakeHistory(),
        events=FakeEventSource(error=ConnectionError("refused")),
        channel=CHANNEL,
        view=RecordingView(),
    )

    assert "Could not subscribe to real-time updates" in caplog.text
    await engine.close()


@pytest.mark.anyio
async def test_irrelevant_and_unknown_events_are_ignored() -> None:
    events = FakeEventSource(
        [
            booking_event("create", worker_id="someone-else"),
            booking_event("delete", worker_id="W1"),
            booking_event("update", worker_id="W1", status="completed", category="painting"),
        ]
    )
    engine = await init_notifications(
        "W1", "worker", history=FakeHistory(), events=events, channel=CHANNEL, view=RecordingView()
    )
    try:
        await settle(lambda: engine.state.entries)
        assert [entry.message for entry in engine.state.entries] == [
            "Job has been completed — painting"
        ]
    finally:
        await engine.close()


@pytest.mark.anyio
async def test_duplicate_deliveries_are_kept() -> None:
    event = booking_event("update", worker_id="W1", status="accepted")
    events = FakeEventSource([event, event])
    engine = await init_notifications(
        "W1", "worker", history=FakeHistory(), events=events, channel=CHANNEL, view=RecordingView()
    )
    try:
        await settle(lambda: len(engine.state.entries) == 2)
        assert len(engine.state.entries) == 2
        assert engine.state.unread_count == 2
    finally:
        await engine.close()


@pytest.mark.anyio
async def test_history_respects_capacity() -> None:
    documents = [
        {"workerId": "W1", "status": "pending", "serviceCategory": f"job-{index}"}
        for index in range(5)
    ]
    engine = _engine(history=FakeHistory(documents), capacity=3)

    await engine.load_history()

    assert len(engine.state.entries) == 3
