"""HTML fragments for the notification bell, alerts and loading overlay."""

from __future__ import annotations

import pathlib
from collections.abc import Callable, Sequence
from datetime import datetime

from jinja2 import Environment, FileSystemLoader, select_autoescape

from godservices.application.use_cases.notifications import time_ago
from godservices.domain.entities import NotificationEntry
from godservices.utils import utc_now

_TEMPLATES = pathlib.Path(__file__).parent.parent / "templates"


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["time_ago"] = time_ago
    return env


_env = _build_environment()


class NotificationRenderer:
    """Render notification markup with the page's CSS class names."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock

    def render_container(
        self,
        entries: Sequence[NotificationEntry] = (),
        *,
        badge: str | None = None,
        panel_open: bool = False,
    ) -> str:
        return _env.get_template("notifications/container.html").render(
            entries=entries, badge=badge, panel_open=panel_open, now=self._clock()
        )

    def render_entries(self, entries: Sequence[NotificationEntry]) -> str:
        return _env.get_template("notifications/list.html").render(
            entries=entries, now=self._clock()
        )

    def render_alert(self, message: str, *, level: str = "info", alert_id: str) -> str:
        return _env.get_template("notifications/alert.html").render(
            message=message, level=level, alert_id=alert_id
        )

    def render_loading(self, message: str = "Loading...") -> str:
        return _env.get_template("notifications/loading.html").render(message=message)


__all__ = ["NotificationRenderer"]
