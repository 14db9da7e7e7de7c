"""Domain entity describing the signed-in account."""

from __future__ import annotations

from dataclasses import dataclass

ROLE_CUSTOMER = "customer"
ROLE_WORKER = "worker"
ROLE_ADMIN = "admin"

ROLES = (ROLE_CUSTOMER, ROLE_WORKER, ROLE_ADMIN)


@dataclass
class User:
    """Account returned by the session provider together with its role."""

    id: str
    name: str
    email: str
    role: str | None = None


__all__ = ["ROLES", "ROLE_ADMIN", "ROLE_CUSTOMER", "ROLE_WORKER", "User"]
