"""Pydantic models describing notification websocket payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class NotificationClientMessage(BaseModel):
    """Message sent by the page over the notification websocket."""

    type: Literal["ping", "bell", "document-click", "clear"]
    inside_panel: bool = False
    on_bell: bool = False


__all__ = ["NotificationClientMessage"]
