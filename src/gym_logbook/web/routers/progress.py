"""User progress routes."""

from fastapi import APIRouter, Depends

from ...config import Settings
from ...models.user import User
from ...services.progression import ProgressionService
from ...services.sessions import SessionTracker
from ..dependencies import app_settings, require_owner, require_user
from ..schemas import SetDayRequest, UserRef

router = APIRouter(prefix="/user-progress", tags=["progress"])


@router.get("")
async def get_progress(user_id: int, settings: Settings = Depends(app_settings)):
    """Current day for a user, created at day 1 on first access."""
    await require_user(user_id, settings)
    progress = await ProgressionService(settings).get_or_create(user_id)
    return progress.to_dict()


@router.get("/today")
async def todays_plan(user_id: int, settings: Settings = Depends(app_settings)):
    """The current day's exercises and what has been done so far."""
    await require_user(user_id, settings)
    plan = await SessionTracker(settings).todays_plan(user_id)
    return plan.to_dict()


@router.post("")
async def advance(body: UserRef, settings: Settings = Depends(app_settings)):
    """Advance to the next day of the plan."""
    await require_user(body.user_id, settings)
    progress = await ProgressionService(settings).advance(body.user_id)
    return progress.to_dict()


@router.post("/set-day")
async def set_day(
    body: SetDayRequest,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    await require_user(body.user_id, settings)
    progress = await ProgressionService(settings).set_day(body.user_id, body.day_number)
    return progress.to_dict()


@router.post("/reset")
async def reset(
    body: UserRef,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    await require_user(body.user_id, settings)
    progress = await ProgressionService(settings).reset(body.user_id)
    return progress.to_dict()
