"""Pydantic models for session and preference endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SessionRead(BaseModel):
    """The signed-in account and where its dashboard lives."""

    id: str
    name: str
    email: str
    role: str | None = None
    dashboard: str | None = Field(default=None, description="Dashboard path for the role")


class LogoutResponse(BaseModel):
    ok: bool
    redirect: str


class ThemeRead(BaseModel):
    """Active theme and the toggle icon to display."""

    theme: str
    show_sun_icon: bool
    show_moon_icon: bool


__all__ = ["LogoutResponse", "SessionRead", "ThemeRead"]
