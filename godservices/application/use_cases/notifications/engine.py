"""Per-page notification feed driven by booking history and realtime events."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Mapping, Sequence
from datetime import datetime
from typing import Any

from godservices.domain.entities import (
    BookingChangeEvent,
    NotificationEntry,
    NotificationState,
    RealtimeEvent,
)
from godservices.utils import utc_now

from .classification import SUPPORTED_ROLES, classify_event, owner_field
from .formatting import badge_label
from .messages import compose_message, describe_status

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 20
DEFAULT_HISTORY_LIMIT = 5


class NotificationView:
    """Rendering surface for the bell, badge, panel and alerts.

    The base class renders nothing; concrete views override the hooks they
    can display.
    """

    def mount(self) -> None:
        """Build the bell and panel. Called once per engine start."""

    def render_entries(self, entries: Sequence[NotificationEntry]) -> None:
        """Redraw the full notification list."""

    def render_badge(self, label: str | None) -> None:
        """Show ``label`` on the badge, hiding it when ``None``."""

    def set_panel_open(self, is_open: bool) -> None:
        """Show or hide the dropdown panel."""

    def show_alert(self, message: str, level: str = "info") -> None:
        """Surface a transient alert outside the panel."""


class NotificationEngine:
    """Maintain the bounded notification feed for one user and role.

    ``history`` must expose ``async list_recent(*, field, user_id, limit)``
    returning booking documents, and ``events`` must expose
    ``subscribe(channel)`` returning an async iterator of
    :class:`RealtimeEvent`.
    """

    def __init__(
        self,
        user_id: str,
        role: str,
        *,
        history: Any,
        events: Any,
        channel: str,
        view: NotificationView | None = None,
        capacity: int = DEFAULT_CAPACITY,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if role not in SUPPORTED_ROLES:
            raise ValueError(f"Notifications are not available for role {role!r}")
        self.user_id = user_id
        self.role = role
        self.state = NotificationState(capacity=capacity)
        self._history = history
        self._events = events
        self._channel = channel
        self._view = view or NotificationView()
        self._history_limit = history_limit
        self._clock = clock
        self._mounted = False
        self._consumer: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Mount the UI, open the live subscription and load recent bookings.

        The subscription is opened before the history query is awaited, so
        changes made while history loads still reach the feed. History
        entries are appended behind them.
        """

        self.mount()
        self.subscribe()
        await self.load_history()

    def mount(self) -> None:
        if self._mounted:
            return
        self._view.mount()
        self._mounted = True
        self._refresh_badge()
        self._view.set_panel_open(self.state.panel_open)
        self._render()

    async def load_history(self) -> None:
        """Append the most recently updated bookings as read entries."""

        try:
            documents = await self._history.list_recent(
                field=owner_field(self.role),
                user_id=self.user_id,
                limit=self._history_limit,
            )
        except Exception as exc:
            logger.warning("Could not load existing notifications: %s", exc)
            return

        for document in documents:
            if not isinstance(document, Mapping):
                continue
            booking = BookingChangeEvent.from_document(document)
            template = describe_status(booking.status)
            entry = NotificationEntry(
                icon=template.icon,
                message=compose_message(template.text, booking.service_category),
                timestamp=booking.updated_at or self._clock(),
                unread=False,
                document_id=booking.document_id or None,
            )
            if not self.state.append(entry):
                break
        self._render()

    def subscribe(self) -> None:
        """Start consuming the booking channel in a background task."""

        if self._consumer is not None and not self._consumer.done():
            return
        try:
            stream = self._events.subscribe(self._channel)
        except Exception as exc:
            logger.warning("Could not subscribe to real-time updates: %s", exc)
            return
        self._consumer = asyncio.create_task(self._consume(stream))

    async def _consume(self, stream: AsyncIterator[RealtimeEvent]) -> None:
        try:
            async for event in stream:
                self.handle_event(event)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("Real-time updates stopped: %s", exc)

    def handle_event(self, event: RealtimeEvent) -> NotificationEntry | None:
        """Apply one realtime ``event``; returns the entry it produced, if any."""

        classified = classify_event(event, user_id=self.user_id, role=self.role)
        if classified is None:
            return None
        return self.add_notification(
            classified.icon, classified.message, document_id=classified.document_id or None
        )

    def add_notification(
        self, icon: str, message: str, *, document_id: str | None = None
    ) -> NotificationEntry:
        """Prepend an unread entry, re-render and alert when the panel is closed."""

        entry = NotificationEntry(
            icon=icon,
            message=message,
            timestamp=self._clock(),
            unread=True,
            document_id=document_id,
        )
        self.state.prepend(entry)
        self._refresh_badge()
        self._render()
        if not self.state.panel_open:
            self._view.show_alert(f"{icon} {message}", "info")
        return entry

    def toggle_panel(self) -> bool:
        """Bell click: flip the panel; opening it resets the unread counter."""

        self.state.panel_open = not self.state.panel_open
        self._view.set_panel_open(self.state.panel_open)
        if self.state.panel_open:
            self.state.unread_count = 0
            self._refresh_badge()
        return self.state.panel_open

    def handle_document_click(self, *, inside_panel: bool, on_bell: bool = False) -> None:
        """Close the open panel when the user clicks anywhere else."""

        if self.state.panel_open and not inside_panel and not on_bell:
            self.state.panel_open = False
            self._view.set_panel_open(False)

    def clear_all(self) -> None:
        self.state.clear()
        self._refresh_badge()
        self._render()

    @property
    def badge(self) -> str | None:
        return badge_label(self.state.unread_count)

    async def close(self) -> None:
        """Stop the live subscription."""

        consumer, self._consumer = self._consumer, None
        if consumer is None or consumer.done():
            return
        consumer.cancel()
        try:
            await consumer
        except asyncio.CancelledError:
            pass

    def _refresh_badge(self) -> None:
        self._view.render_badge(self.badge)

    def _render(self) -> None:
        self._view.render_entries(list(self.state.entries))


async def init_notifications(
    user_id: str,
    role: str,
    *,
    history: Any,
    events: Any,
    channel: str,
    view: NotificationView | None = None,
    capacity: int = DEFAULT_CAPACITY,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
    clock: Callable[[], datetime] = utc_now,
) -> NotificationEngine:
    """Create and start a :class:`NotificationEngine` for ``user_id``."""

    engine = NotificationEngine(
        user_id,
        role,
        history=history,
        events=events,
        channel=channel,
        view=view,
        capacity=capacity,
        history_limit=history_limit,
        clock=clock,
    )
    await engine.start()
    return engine


__all__ = [
    "DEFAULT_CAPACITY",
    "DEFAULT_HISTORY_LIMIT",
    "NotificationEngine",
    "NotificationView",
    "init_notifications",
]
