"""Aggregate application use cases."""

from .bulk_import import ImportSummary, import_jobs
from .notifications import NotificationEngine, init_notifications
from .sessions import dashboard_for_role, resolve_session
from .theme import ThemeController

__all__ = [
    "ImportSummary",
    "import_jobs",
    "NotificationEngine",
    "init_notifications",
    "dashboard_for_role",
    "resolve_session",
    "ThemeController",
]
