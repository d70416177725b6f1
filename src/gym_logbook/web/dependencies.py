"""Shared FastAPI dependencies."""

from fastapi import Depends, Header, Request

from ..config import Settings
from ..models.user import User
from ..services.users import UserService


def app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


async def require_owner(
    x_user_id: int | None = Header(default=None),
    settings: Settings = Depends(app_settings),
) -> User:
    """The acting user from ``X-User-Id``, who must be an owner."""
    return await UserService(settings).require_owner(x_user_id)


async def require_user(user_id: int, settings: Settings) -> User:
    """Load the user a request is about, 404 if absent."""
    return await UserService(settings).get(user_id)
