"""Realtime notification helpers for the infrastructure layer."""

from .manager import NotificationConnectionManager, notification_manager
from .publisher import WebSocketNotificationView, serialize_entry, serialize_state
from .realtime import AppwriteRealtime, RealtimeSubscription, build_realtime_url

__all__ = [
    "NotificationConnectionManager",
    "notification_manager",
    "WebSocketNotificationView",
    "serialize_entry",
    "serialize_state",
    "AppwriteRealtime",
    "RealtimeSubscription",
    "build_realtime_url",
]
