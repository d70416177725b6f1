"""Workout session routes."""

from fastapi import APIRouter, Depends

from ...config import Settings
from ...services.sessions import SessionTracker
from ..dependencies import app_settings, require_user
from ..schemas import SessionMark

router = APIRouter(prefix="/workout-sessions", tags=["sessions"])


@router.get("")
async def list_sessions(
    user_id: int,
    day_number: int | None = None,
    settings: Settings = Depends(app_settings),
):
    """A user's sessions, newest first."""
    sessions = await SessionTracker(settings).list_sessions(user_id, day_number)
    return [s.to_dict() for s in sessions]


@router.post("")
async def mark_exercise(body: SessionMark, settings: Settings = Depends(app_settings)):
    """Tick an exercise on or off; finishing the day advances the plan."""
    await require_user(body.user_id, settings)
    update = await SessionTracker(settings).record(
        body.user_id,
        body.exercise_id,
        completed=body.completed,
        day_number=body.day_number,
    )
    return update.to_dict()
