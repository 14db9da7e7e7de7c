"""Domain entity for messages pushed by the realtime service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from godservices.utils import parse_timestamp


@dataclass(frozen=True)
class RealtimeEvent:
    """A document change delivered on one or more subscribed channels."""

    events: tuple[str, ...]
    channels: tuple[str, ...] = ()
    timestamp: datetime | None = None
    payload: Any = field(default_factory=dict)

    @classmethod
    def from_message(cls, data: Mapping[str, Any]) -> "RealtimeEvent":
        """Build an event from the ``data`` member of an ``event`` frame."""

        return cls(
            events=_as_labels(data.get("events")),
            channels=_as_labels(data.get("channels")),
            timestamp=parse_timestamp(data.get("timestamp")),
            payload=data.get("payload"),
        )


def _as_labels(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(item for item in value if isinstance(item, str))


__all__ = ["RealtimeEvent"]
