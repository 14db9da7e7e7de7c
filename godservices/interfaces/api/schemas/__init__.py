"""Pydantic schemas exposed by the API layer."""

from .notification import NotificationClientMessage
from .session import LogoutResponse, SessionRead, ThemeRead

__all__ = [
    "NotificationClientMessage",
    "LogoutResponse",
    "SessionRead",
    "ThemeRead",
]
