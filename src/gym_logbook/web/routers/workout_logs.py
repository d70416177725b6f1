"""Workout log routes."""

from datetime import date

from fastapi import APIRouter, Depends

from ...config import Settings
from ...services.workout_logs import WorkoutLogService
from ..dependencies import app_settings, require_user
from ..schemas import WorkoutLogCreate, WorkoutLogUpdate

router = APIRouter(prefix="/workout-logs", tags=["workout-logs"])


@router.get("")
async def list_logs(
    user_id: int,
    exercise_id: int | None = None,
    date: date | None = None,
    settings: Settings = Depends(app_settings),
):
    logs = await WorkoutLogService(settings).list_for_user(user_id, exercise_id, date)
    return [log.to_dict() for log in logs]


@router.post("")
async def log_exercise(body: WorkoutLogCreate, settings: Settings = Depends(app_settings)):
    """Create or replace the log for (user, exercise, date)."""
    await require_user(body.user_id, settings)
    log = await WorkoutLogService(settings).log_exercise(
        body.user_id,
        body.exercise_id,
        body.actual_sets,
        body.actual_reps,
        weight=body.weight,
        log_date=body.date,
        sets_data=[s.model_dump() for s in body.sets_data] if body.sets_data else None,
    )
    return log.to_dict()


@router.put("")
async def update_log(body: WorkoutLogUpdate, settings: Settings = Depends(app_settings)):
    log = await WorkoutLogService(settings).update(
        body.id,
        actual_sets=body.actual_sets,
        actual_reps=body.actual_reps,
        weight=body.weight,
        sets_data=[s.model_dump() for s in body.sets_data] if body.sets_data is not None else None,
    )
    return log.to_dict()


@router.delete("")
async def delete_log(id: int, settings: Settings = Depends(app_settings)):
    await WorkoutLogService(settings).delete(id)
    return {"status": "deleted", "id": id}
