"""Endpoints describing and ending the Appwrite session."""

from __future__ import annotations

import anyio
from fastapi import APIRouter, Depends

from godservices.application.use_cases.sessions import LOGOUT_REDIRECT, dashboard_for_role
from godservices.domain.entities import User
from godservices.infrastructure.appwrite import AppwriteGateway
from godservices.infrastructure.notifications import notification_manager
from godservices.interfaces.api.dependencies import get_appwrite_gateway, get_current_user
from godservices.interfaces.api.schemas import LogoutResponse, SessionRead

router = APIRouter(prefix="/session", tags=["session"])


@router.get("", response_model=SessionRead)
def read_session(current_user: User = Depends(get_current_user)) -> SessionRead:
    """Return the signed-in account, its role and its dashboard."""

    return SessionRead(
        id=current_user.id,
        name=current_user.name,
        email=current_user.email,
        role=current_user.role,
        dashboard=dashboard_for_role(current_user.role) if current_user.role else None,
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    current_user: User = Depends(get_current_user),
    gateway: AppwriteGateway = Depends(get_appwrite_gateway),
) -> LogoutResponse:
    """End the session and disconnect the user's notification feeds."""

    ok = await anyio.to_thread.run_sync(gateway.logout)
    if ok:
        await notification_manager.close_user(current_user.id)
    return LogoutResponse(ok=ok, redirect=LOGOUT_REDIRECT)
