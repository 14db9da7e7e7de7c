"""Client for the Appwrite realtime websocket.

One :class:`RealtimeSubscription` owns one websocket connection. Frames are
parsed by a reader task and handed to the consumer through a bounded queue,
so events are delivered in arrival order and a slow consumer pushes back on
the socket instead of growing memory.

Frames (JSON):

  {"type": "connected", "data": {"channels": [...], "user": {...} | null}}
  {"type": "event",     "data": {"events": [...], "channels": [...],
                                 "timestamp": ..., "payload": {...}}}
  {"type": "error",     "data": {"code": 1008, "message": "..."}}
  {"type": "response",  "data": {"to": "authentication", "success": true}}
  {"type": "pong"}
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import suppress
from typing import Any
from urllib.parse import urlencode

import websockets

from godservices.config import Settings, get_settings
from godservices.domain.entities import RealtimeEvent

logger = logging.getLogger(__name__)

_RECONNECT_DELAYS = (2, 4, 8, 16, 30)   # backoff steps in seconds, last one repeats
_OPEN_TIMEOUT = 10
_CLOSED = object()


def build_realtime_url(endpoint: str, project_id: str, channels: Sequence[str]) -> str:
    """Return the websocket URL subscribing ``project_id`` to ``channels``."""

    params = [("project", project_id)] + [("channels[]", channel) for channel in channels]
    return f"{endpoint.rstrip('/')}/realtime?{urlencode(params)}"


class RealtimeSubscription:
    """Async iterator of :class:`RealtimeEvent` for a set of channels."""

    def __init__(
        self,
        url: str,
        *,
        session: str | None = None,
        queue_size: int = 100,
        ping_interval: float = 20.0,
        reconnect_delays: Sequence[float] = _RECONNECT_DELAYS,
        max_attempts: int | None = None,
        connect: Callable[..., Any] | None = None,
        sleep: Callable[[float], Any] = asyncio.sleep,
    ) -> None:
        self.url = url
        self._session = session
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=queue_size)
        self._ping_interval = ping_interval
        self._reconnect_delays = tuple(reconnect_delays) or (0,)
        self._max_attempts = max_attempts
        self._connect = connect or websockets.connect
        self._sleep = sleep
        self._reader: asyncio.Task[None] | None = None
        self._running = True
        self._finished = False
        self.connected = asyncio.Event()

    def __aiter__(self) -> AsyncIterator[RealtimeEvent]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[RealtimeEvent]:
        if self._reader is None:
            self._reader = asyncio.create_task(self._run())
        try:
            while True:
                if self._finished and self._queue.empty():
                    return
                item = await self._queue.get()
                if item is _CLOSED:
                    return
                yield item
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        """Stop reading and close the connection."""

        self._running = False
        reader, self._reader = self._reader, None
        if reader is not None and not reader.done():
            reader.cancel()
            with suppress(asyncio.CancelledError):
                await reader
        self._signal_closed()

    def _signal_closed(self) -> None:
        self._finished = True
        try:
            self._queue.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            # Pending events are still delivered; the consumer stops once
            # it has drained them.
            logger.debug("Realtime queue full at close; draining before stopping")

    async def _run(self) -> None:
        failures = 0
        while self._running:
            try:
                async with self._connect(self.url, open_timeout=_OPEN_TIMEOUT) as ws:
                    failures = 0
                    await self._listen(ws)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.warning("Realtime connection to %s failed: %s", self.url, exc)
            finally:
                self.connected.clear()

            if not self._running:
                break
            failures += 1
            if self._max_attempts is not None and failures >= self._max_attempts:
                logger.warning(
                    "Giving up on realtime connection after %s attempts", failures
                )
                break
            delay = self._reconnect_delays[min(failures - 1, len(self._reconnect_delays) - 1)]
            logger.info("Reconnecting to realtime service in %ss", delay)
            await self._sleep(delay)

        self._running = False
        self._signal_closed()

    async def _listen(self, ws: Any) -> None:
        pinger = asyncio.create_task(self._ping_loop(ws))
        try:
            async for raw in ws:
                await self._handle_frame(ws, raw)
        finally:
            pinger.cancel()
            with suppress(asyncio.CancelledError):
                await pinger

    async def _ping_loop(self, ws: Any) -> None:
        while True:
            await asyncio.sleep(self._ping_interval)
            try:
                await ws.send(json.dumps({"type": "ping"}))
            except Exception as exc:
                logger.debug("Realtime ping failed: %s", exc)
                return

    async def _handle_frame(self, ws: Any, raw: str | bytes) -> None:
        try:
            message = json.loads(raw)
        except ValueError:
            logger.debug("Ignoring non-JSON realtime frame")
            return
        if not isinstance(message, dict):
            return

        frame_type = message.get("type")
        data = message.get("data")
        if not isinstance(data, dict):
            data = {}

        if frame_type == "event":
            await self._queue.put(RealtimeEvent.from_message(data))
        elif frame_type == "connected":
            self.connected.set()
            if self._session and not data.get("user"):
                await ws.send(
                    json.dumps({"type": "authentication", "data": {"session": self._session}})
                )
        elif frame_type == "error":
            logger.warning(
                "Realtime error %s: %s", data.get("code"), data.get("message")
            )
        elif frame_type == "response":
            if data.get("to") == "authentication" and not data.get("success"):
                logger.warning("Realtime authentication was rejected")


class AppwriteRealtime:
    """Factory for subscriptions against the configured Appwrite project."""

    def __init__(self, settings: Settings | None = None, **options: Any) -> None:
        self.settings = settings or get_settings()
        self._options = options

    def subscribe(self, channel: str) -> RealtimeSubscription:
        settings = self.settings
        url = build_realtime_url(
            settings.realtime_endpoint, settings.appwrite_project_id, [channel]
        )
        options = {
            "session": settings.appwrite_session,
            "queue_size": settings.realtime_queue_size,
            "ping_interval": settings.realtime_ping_interval,
        }
        options.update(self._options)
        return RealtimeSubscription(url, **options)


__all__ = ["AppwriteRealtime", "RealtimeSubscription", "build_realtime_url"]
