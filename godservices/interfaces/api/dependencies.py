"""FastAPI dependency utilities."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from functools import lru_cache

from fastapi import Cookie, Depends, Header, HTTPException, Response, status

from godservices.application.use_cases.sessions import resolve_session
from godservices.application.use_cases.theme import ThemeController
from godservices.config import Settings, get_settings
from godservices.domain.entities import User
from godservices.infrastructure.appwrite import AppwriteGateway, create_gateway
from godservices.infrastructure.notifications import AppwriteRealtime
from godservices.infrastructure.preferences import JsonPreferenceStore

GatewayFactory = Callable[[str | None], AppwriteGateway]

THEME_CLIENT_COOKIE = "god-services-client"
THEME_CLIENT_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def get_gateway_factory(settings: Settings = Depends(get_settings)) -> GatewayFactory:
    """Return a callable building an Appwrite gateway for a user JWT."""

    def factory(jwt: str | None) -> AppwriteGateway:
        return create_gateway(settings, jwt=jwt)

    return factory


def get_event_source(settings: Settings = Depends(get_settings)) -> AppwriteRealtime:
    """Return the realtime subscription factory used by notification engines."""

    return AppwriteRealtime(settings)


def get_appwrite_gateway(
    x_appwrite_jwt: str | None = Header(default=None),
    factory: GatewayFactory = Depends(get_gateway_factory),
) -> AppwriteGateway:
    """Return a gateway acting with the caller's Appwrite JWT."""

    if not x_appwrite_jwt:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing session token",
        )
    return factory(x_appwrite_jwt)


def get_current_user(gateway: AppwriteGateway = Depends(get_appwrite_gateway)) -> User:
    """Return the signed-in user with its role."""

    user = resolve_session(gateway)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No active session",
        )
    return user


def get_optional_user(
    x_appwrite_jwt: str | None = Header(default=None),
    factory: GatewayFactory = Depends(get_gateway_factory),
) -> User | None:
    """Return the signed-in user when a session token was sent."""

    if not x_appwrite_jwt:
        return None
    return resolve_session(factory(x_appwrite_jwt))


@lru_cache
def _preference_store(path: str) -> JsonPreferenceStore:
    return JsonPreferenceStore(path)


def get_preference_store(settings: Settings = Depends(get_settings)) -> JsonPreferenceStore:
    """Return the preference store shared by every request."""

    return _preference_store(settings.preferences_path)


def get_theme_controller(
    response: Response,
    store: JsonPreferenceStore = Depends(get_preference_store),
    current_user: User | None = Depends(get_optional_user),
    client_id: str | None = Cookie(default=None, alias=THEME_CLIENT_COOKIE),
) -> ThemeController:
    """Return the theme of the signed-in user, or of this browser otherwise.

    Anonymous browsers are told apart by a long-lived client cookie issued on
    their first request.
    """

    if current_user is not None:
        return ThemeController(store, owner=f"user:{current_user.id}")
    if not client_id:
        client_id = uuid.uuid4().hex
        response.set_cookie(
            THEME_CLIENT_COOKIE,
            client_id,
            max_age=THEME_CLIENT_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
        )
    return ThemeController(store, owner=f"client:{client_id}")
