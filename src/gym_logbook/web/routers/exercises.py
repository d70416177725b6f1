"""Exercise library routes."""

from fastapi import APIRouter, Depends

from ...config import Settings
from ...errors import ValidationError
from ...models.user import User
from ...services.exercises import ExerciseService
from ...utils.exercise_utils import asset_for_exercise, classify
from ..dependencies import app_settings, require_owner
from ..schemas import ExerciseCreate, ExerciseUpdate

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("")
async def list_exercises(
    user_id: int | None = None,
    category: str | None = None,
    settings: Settings = Depends(app_settings),
):
    """All exercises, or those visible to one user, optionally one category."""
    exercises = await ExerciseService(settings).list_all(user_id, category)
    return [e.to_dict() for e in exercises]


@router.get("/classify")
async def classify_name(name: str):
    """Suggest a category and bundled image for an exercise name."""
    if not name.strip():
        raise ValidationError("name is required")
    category = classify(name)
    return {
        "name": name,
        "category": category.value if category else None,
        "gif_url": asset_for_exercise(name),
    }


@router.get("/{exercise_id}")
async def get_exercise(exercise_id: int, settings: Settings = Depends(app_settings)):
    exercise = await ExerciseService(settings).get(exercise_id)
    return exercise.to_dict()


@router.post("", status_code=201)
async def create_exercise(
    body: ExerciseCreate,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    """Add an exercise; category is inferred from the name if omitted."""
    exercise = await ExerciseService(settings).create(**body.model_dump())
    return exercise.to_dict()


@router.put("/{exercise_id}")
async def update_exercise(
    exercise_id: int,
    body: ExerciseUpdate,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    exercise = await ExerciseService(settings).update(exercise_id, **body.model_dump())
    return exercise.to_dict()


@router.delete("/{exercise_id}")
async def delete_exercise(
    exercise_id: int,
    owner: User = Depends(require_owner),
    settings: Settings = Depends(app_settings),
):
    """Delete an exercise; it is removed from every sequence too."""
    await ExerciseService(settings).delete(exercise_id)
    return {"status": "deleted", "id": exercise_id}
