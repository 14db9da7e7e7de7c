"""Session helpers: who is signed in and where they land."""

from __future__ import annotations

import logging
from typing import Any

from godservices.domain.entities import ROLE_ADMIN, ROLE_CUSTOMER, ROLE_WORKER, User

logger = logging.getLogger(__name__)

DASHBOARDS = {
    ROLE_CUSTOMER: "/customer/dashboard.html",
    ROLE_WORKER: "/worker/dashboard.html",
    ROLE_ADMIN: "/admin/dashboard.html",
}
LOGOUT_REDIRECT = "/index.html"


def dashboard_for_role(role: str | None) -> str | None:
    """Return the dashboard path for ``role`` or ``None`` for unknown roles."""

    dashboard = DASHBOARDS.get(role or "")
    if dashboard is None:
        logger.error("Invalid role: %s", role)
    return dashboard


def resolve_session(gateway: Any) -> User | None:
    """Return the signed-in user with its role resolved, or ``None``.

    ``gateway`` is an :class:`~godservices.infrastructure.appwrite.AppwriteGateway`
    created for the caller's credentials.
    """

    user = gateway.get_current_user()
    if user is None:
        return None
    user.role = gateway.get_user_role(user.id)
    return user


__all__ = ["DASHBOARDS", "LOGOUT_REDIRECT", "dashboard_for_role", "resolve_session"]
