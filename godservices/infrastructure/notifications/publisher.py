"""Push notification UI updates to a page over its websocket."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable, Sequence
from contextlib import suppress
from typing import Any

from godservices.application.use_cases.notifications import NotificationView, badge_label
from godservices.domain.entities import NotificationEntry, NotificationState
from godservices.infrastructure.rendering import NotificationRenderer

logger = logging.getLogger(__name__)


class WebSocketNotificationView(NotificationView):
    """Serialize view updates and deliver them to one page in order.

    Updates are queued synchronously by the engine and written by a single
    writer task, so the page sees them in the order they happened.
    """

    def __init__(
        self,
        send: Callable[[dict[str, Any]], Awaitable[None]],
        *,
        renderer: NotificationRenderer | None = None,
        alert_display_seconds: float = 4.0,
        alert_fade_seconds: float = 0.3,
        queue_size: int = 100,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._send = send
        self._renderer = renderer or NotificationRenderer()
        self._alert_display_seconds = alert_display_seconds
        self._alert_fade_seconds = alert_fade_seconds
        self._sleep = sleep
        self._queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=queue_size)
        self._writer: asyncio.Task[None] | None = None
        self._timers: set[asyncio.Task[None]] = set()
        self._closed = False

    def start(self) -> None:
        if self._writer is None:
            self._writer = asyncio.create_task(self._drain())

    async def aclose(self) -> None:
        self._closed = True
        tasks = list(self._timers)
        if self._writer is not None:
            tasks.append(self._writer)
            self._writer = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            with suppress(asyncio.CancelledError):
                await task
        self._timers.clear()

    async def flush(self) -> None:
        """Wait until every queued update has been written."""

        await self._queue.join()

    def mount(self) -> None:
        self.publish("mount", {"html": self._renderer.render_container()})

    def render_entries(self, entries: Sequence[NotificationEntry]) -> None:
        self.publish(
            "render",
            {
                "html": self._renderer.render_entries(entries),
                "entries": [serialize_entry(entry) for entry in entries],
            },
        )

    def render_badge(self, label: str | None) -> None:
        self.publish("badge", {"label": label, "hidden": label is None})

    def set_panel_open(self, is_open: bool) -> None:
        self.publish("panel", {"open": is_open})

    def show_alert(self, message: str, level: str = "info") -> None:
        alert_id = f"alert-{uuid.uuid4().hex[:12]}"
        self.publish(
            "alert",
            {
                "id": alert_id,
                "level": level,
                "message": message,
                "html": self._renderer.render_alert(message, level=level, alert_id=alert_id),
            },
        )
        if self._closed:
            return
        timer = asyncio.create_task(self._expire_alert(alert_id))
        self._timers.add(timer)
        timer.add_done_callback(self._timers.discard)

    def show_loading(self, message: str = "Loading...") -> None:
        self.publish(
            "loading",
            {"visible": True, "html": self._renderer.render_loading(message)},
        )

    def hide_loading(self) -> None:
        self.publish("loading", {"visible": False})

    async def _expire_alert(self, alert_id: str) -> None:
        await self._sleep(self._alert_display_seconds)
        self.publish("alert.fade", {"id": alert_id})
        await self._sleep(self._alert_fade_seconds)
        self.publish("alert.remove", {"id": alert_id})

    def publish(self, message_type: str, data: dict[str, Any]) -> None:
        if self._closed:
            return
        try:
            self._queue.put_nowait({"type": message_type, "data": data})
        except asyncio.QueueFull:
            logger.warning("Dropping %s update: page is not reading", message_type)

    async def _drain(self) -> None:
        while True:
            message = await self._queue.get()
            try:
                await self._send(message)
            except Exception as exc:
                logger.debug("Notification socket closed while sending: %s", exc)
                self._closed = True
                return
            finally:
                self._queue.task_done()


def serialize_entry(entry: NotificationEntry) -> dict[str, Any]:
    """Return the JSON representation of ``entry``."""

    return {
        "icon": entry.icon,
        "message": entry.message,
        "timestamp": entry.timestamp.isoformat(),
        "unread": entry.unread,
        "document_id": entry.document_id,
    }


def serialize_state(state: NotificationState) -> dict[str, Any]:
    """Return the full feed snapshot sent when a page connects."""

    return {
        "entries": [serialize_entry(entry) for entry in state.entries],
        "unread_count": state.unread_count,
        "badge": badge_label(state.unread_count),
        "panel_open": state.panel_open,
    }


__all__ = ["WebSocketNotificationView", "serialize_entry", "serialize_state"]
