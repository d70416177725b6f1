"""User account routes."""

from fastapi import APIRouter, Depends

from ...config import Settings
from ...models.user import User, UserRole
from ...services.users import UserService
from ..dependencies import app_settings, require_owner
from ..schemas import LoginRequest, UserCreate, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/login")
async def login(body: LoginRequest, settings: Settings = Depends(app_settings)):
    """Check a name/password pair and return the account."""
    user = await UserService(settings).authenticate(body.name, body.password)
    return user.to_dict()


@router.get("")
async def list_users(role: UserRole | None = None, settings: Settings = Depends(app_settings)):
    """List accounts, optionally only one role."""
    users = await UserService(settings).list_all(role)
    return [u.to_dict() for u in users]


@router.post("", status_code=201)
async def create_user(
    body: UserCreate,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    """Create an account."""
    user = await UserService(settings).create(
        body.name, body.password, role=body.role, avatar_color=body.avatar_color
    )
    return user.to_dict()


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    body: UserUpdate,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    """Edit an account."""
    user = await UserService(settings).update(
        user_id,
        name=body.name,
        password=body.password,
        role=body.role,
        avatar_color=body.avatar_color,
    )
    return user.to_dict()


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    """Delete an account and all of its data."""
    await UserService(settings).delete(user_id)
    return {"status": "deleted", "id": user_id}
