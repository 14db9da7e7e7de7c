"""Websocket handler hosting one notification engine per open page."""

from __future__ import annotations

import logging

import anyio
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from godservices.application.use_cases.notifications import NotificationEngine
from godservices.application.use_cases.notifications.classification import SUPPORTED_ROLES
from godservices.application.use_cases.sessions import resolve_session
from godservices.config import Settings, get_settings
from godservices.infrastructure.appwrite import BookingHistoryGateway
from godservices.infrastructure.notifications import (
    AppwriteRealtime,
    WebSocketNotificationView,
    notification_manager,
    serialize_state,
)
from godservices.interfaces.api.dependencies import (
    GatewayFactory,
    get_event_source,
    get_gateway_factory,
)
from godservices.interfaces.api.schemas import NotificationClientMessage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.websocket("/ws")
async def notifications_websocket(
    websocket: WebSocket,
    gateway_factory: GatewayFactory = Depends(get_gateway_factory),
    events: AppwriteRealtime = Depends(get_event_source),
    settings: Settings = Depends(get_settings),
) -> None:
    """Stream the notification feed of the authenticated user to one page."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    gateway = gateway_factory(token)
    try:
        user = await anyio.to_thread.run_sync(resolve_session, gateway)
    except Exception:
        logger.exception("Could not resolve the notification session")
        await websocket.close(code=1011)
        return
    if user is None or user.role not in SUPPORTED_ROLES:
        await websocket.close(code=1008)
        return

    await notification_manager.connect(user.id, websocket)
    view = WebSocketNotificationView(
        websocket.send_json,
        alert_display_seconds=settings.alert_display_seconds,
        alert_fade_seconds=settings.alert_fade_seconds,
    )
    view.start()
    engine = NotificationEngine(
        user.id,
        user.role,
        history=BookingHistoryGateway(gateway),
        events=events,
        channel=settings.bookings_channel,
        view=view,
        capacity=settings.notification_capacity,
        history_limit=settings.notification_history_limit,
    )
    try:
        await engine.start()
        view.publish("init", serialize_state(engine.state))
        while True:
            try:
                raw = await websocket.receive_json()
                message = NotificationClientMessage.model_validate(raw)
            except (ValueError, ValidationError):
                continue

            if message.type == "ping":
                view.publish("pong", {})
            elif message.type == "bell":
                engine.toggle_panel()
            elif message.type == "document-click":
                engine.handle_document_click(
                    inside_panel=message.inside_panel, on_bell=message.on_bell
                )
            elif message.type == "clear":
                engine.clear_all()
    except WebSocketDisconnect:
        pass
    finally:
        await engine.close()
        await view.aclose()
        notification_manager.disconnect(user.id, websocket)
