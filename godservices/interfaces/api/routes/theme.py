"""Light/dark theme preference endpoints."""

from __future__ import annotations

import anyio
from fastapi import APIRouter, Depends

from godservices.application.use_cases.theme import ThemeController, ThemeState
from godservices.domain.entities import User
from godservices.infrastructure.notifications import notification_manager
from godservices.interfaces.api.dependencies import get_optional_user, get_theme_controller
from godservices.interfaces.api.schemas import ThemeRead

router = APIRouter(prefix="/theme", tags=["theme"])


def _theme_to_schema(state: ThemeState) -> ThemeRead:
    return ThemeRead(
        theme=state.theme,
        show_sun_icon=state.show_sun_icon,
        show_moon_icon=state.show_moon_icon,
    )


@router.get("", response_model=ThemeRead)
def read_theme(controller: ThemeController = Depends(get_theme_controller)) -> ThemeRead:
    """Return the saved theme (dark by default)."""

    return _theme_to_schema(controller.init_theme())


@router.post("/toggle", response_model=ThemeRead)
async def toggle_theme(
    controller: ThemeController = Depends(get_theme_controller),
    current_user: User | None = Depends(get_optional_user),
) -> ThemeRead:
    """Flip between dark and light and tell the user's other open pages."""

    state = await anyio.to_thread.run_sync(controller.toggle_theme)
    if current_user is not None:
        await notification_manager.send_to_user(
            current_user.id, {"type": "theme", "data": {"theme": state.theme}}
        )
    return _theme_to_schema(state)
