"""Workout sequence routes."""

from fastapi import APIRouter, Depends

from ...config import Settings
from ...models.user import User
from ...services.sequence import SequenceService
from ..dependencies import app_settings, require_owner
from ..schemas import ReorderRequest, SequenceEntryCreate

router = APIRouter(prefix="/workout-sequence", tags=["sequence"])


@router.get("")
async def get_sequence(
    user_id: int,
    day_number: int | None = None,
    settings: Settings = Depends(app_settings),
):
    """A user's plan, ordered by day then position."""
    entries = await SequenceService(settings).get_sequence(user_id, day_number)
    return [e.to_dict() for e in entries]


@router.get("/days")
async def get_days(user_id: int, settings: Settings = Depends(app_settings)):
    """A user's plan grouped by day."""
    service = SequenceService(settings)
    days = await service.get_days(user_id)
    return {
        "max_day": max((d.day_number for d in days), default=0),
        "days": [d.to_dict() for d in days],
    }


@router.post("", status_code=201)
async def add_entry(
    body: SequenceEntryCreate,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    """Append an exercise to the end of a day."""
    entry = await SequenceService(settings).add_entry(
        body.user_id, body.exercise_id, body.day_number
    )
    return entry.to_dict()


@router.post("/reorder")
async def reorder(
    body: ReorderRequest,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    """Rewrite one day's order in a single transaction."""
    entries = await SequenceService(settings).reorder(
        body.user_id, body.day_number, body.entry_ids
    )
    return [e.to_dict() for e in entries]


@router.delete("")
async def remove_entry(
    id: int,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    await SequenceService(settings).remove_entry(id)
    return {"status": "deleted", "id": id}
