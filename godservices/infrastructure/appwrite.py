"""Appwrite SDK initialization and helpers shared across the application."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import anyio
from appwrite.client import Client
from appwrite.exception import AppwriteException
from appwrite.id import ID
from appwrite.query import Query
from appwrite.services.account import Account
from appwrite.services.databases import Databases

from godservices.config import Settings, get_settings
from godservices.domain.entities import User

logger = logging.getLogger(__name__)


def create_client(
    settings: Settings | None = None,
    *,
    jwt: str | None = None,
    api_key: str | None = None,
) -> Client:
    """Return an Appwrite client bound to the configured project.

    ``jwt`` acts on behalf of a signed-in user; ``api_key`` grants server
    access and is only used by maintenance scripts.
    """

    settings = settings or get_settings()
    client = Client()
    client.set_endpoint(settings.appwrite_endpoint)
    client.set_project(settings.appwrite_project_id)
    if jwt:
        client.set_jwt(jwt)
    if api_key:
        client.set_key(api_key)
    return client


def _as_mapping(value: Any) -> dict[str, Any]:
    """Normalize an SDK response into a plain dictionary."""

    if isinstance(value, Mapping):
        return dict(value)
    for attribute in ("to_dict", "model_dump"):
        converter = getattr(value, attribute, None)
        if callable(converter):
            converted = converter()
            if isinstance(converted, Mapping):
                return dict(converted)
    raise TypeError(f"Unexpected Appwrite response type: {type(value).__name__}")


class AppwriteGateway:
    """Account and document operations used by the booking client."""

    def __init__(self, client: Client, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.client = client
        self.account = Account(client)
        self.databases = Databases(client)

    def list_documents(
        self, collection_id: str, queries: Sequence[str] | None = None
    ) -> list[dict[str, Any]]:
        response = _as_mapping(
            self.databases.list_documents(
                self.settings.appwrite_database_id,
                collection_id,
                queries=list(queries or []),
            )
        )
        return [_as_mapping(document) for document in response.get("documents", [])]

    def create_document(
        self, collection_id: str, data: Mapping[str, Any], document_id: str | None = None
    ) -> dict[str, Any]:
        return _as_mapping(
            self.databases.create_document(
                self.settings.appwrite_database_id,
                collection_id,
                document_id or ID.unique(),
                dict(data),
            )
        )

    def list_recent_bookings(
        self, *, field: str, user_id: str, limit: int
    ) -> list[dict[str, Any]]:
        """Return the ``limit`` most recently updated bookings owned by ``user_id``."""

        return self.list_documents(
            self.settings.collection_bookings,
            [
                Query.equal(field, user_id),
                Query.order_desc("$updatedAt"),
                Query.limit(limit),
            ],
        )

    def get_current_user(self) -> User | None:
        """Return the account behind the current session, or ``None``."""

        try:
            account = _as_mapping(self.account.get())
        except AppwriteException as exc:
            logger.error("No active session: %s", exc)
            return None
        return User(
            id=str(account.get("$id", "")),
            name=str(account.get("name", "")),
            email=str(account.get("email", "")),
        )

    def is_authenticated(self) -> bool:
        return self.get_current_user() is not None

    def get_user_role(self, user_id: str) -> str | None:
        """Look up the role stored for ``user_id`` in the users collection."""

        try:
            documents = self.list_documents(
                self.settings.collection_users, [Query.equal("userId", user_id)]
            )
        except AppwriteException as exc:
            logger.error("Error fetching user role: %s", exc)
            return None
        if not documents:
            return None
        role = documents[0].get("role")
        return str(role) if role else None

    def logout(self) -> bool:
        """End the current session."""

        try:
            self.account.delete_session("current")
        except AppwriteException as exc:
            logger.error("Logout error: %s", exc)
            return False
        return True


class BookingHistoryGateway:
    """Async adapter used by the notification engine to query booking history."""

    def __init__(self, gateway: AppwriteGateway) -> None:
        self._gateway = gateway

    async def list_recent(
        self, *, field: str, user_id: str, limit: int
    ) -> list[dict[str, Any]]:
        return await anyio.to_thread.run_sync(
            lambda: self._gateway.list_recent_bookings(
                field=field, user_id=user_id, limit=limit
            )
        )


def create_gateway(
    settings: Settings | None = None,
    *,
    jwt: str | None = None,
    api_key: str | None = None,
) -> AppwriteGateway:
    """Build an :class:`AppwriteGateway` for the given credentials."""

    settings = settings or get_settings()
    return AppwriteGateway(create_client(settings, jwt=jwt, api_key=api_key), settings)


__all__ = [
    "AppwriteException",
    "AppwriteGateway",
    "BookingHistoryGateway",
    "create_client",
    "create_gateway",
]
