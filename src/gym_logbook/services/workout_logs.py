"""Per-exercise workout logging."""

import logging
from datetime import date

from ..config import Settings, get_settings
from ..db.repositories import ExerciseRepository, WorkoutLogRepository
from ..errors import NotFoundError, ValidationError
from ..models.workout_log import SetData, WorkoutLog

logger = logging.getLogger(__name__)


def parse_sets_data(raw) -> list[SetData]:
    """Validate and convert a JSON list of set dicts."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError("sets_data must be an array")
    try:
        return [SetData.from_dict(item) for item in raw]
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid sets_data entry: {e}")


def _require_count(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError(f"{name} must be a number")
    if value < 0:
        raise ValidationError(f"{name} must not be negative")
    return int(value)


def _require_weight(value) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError("weight must be a number")
    if value < 0:
        raise ValidationError("weight must not be negative")
    return float(value)


class WorkoutLogService:
    """Upsert-by-date logging of sets, reps and weight."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        db_path = self.settings.db_path
        self.logs = WorkoutLogRepository(db_path)
        self.exercises = ExerciseRepository(db_path)

    async def log_exercise(
        self,
        user_id: int,
        exercise_id: int,
        actual_sets,
        actual_reps,
        weight: float | None = None,
        log_date: date | None = None,
        sets_data=None,
    ) -> WorkoutLog:
        """Record what was done for an exercise on a date.

        Replaces the existing log for the same (user, exercise, date).
        """
        actual_sets = _require_count("actual_sets", actual_sets)
        actual_reps = _require_count("actual_reps", actual_reps)
        weight = _require_weight(weight)
        sets = parse_sets_data(sets_data)

        if await self.exercises.get(exercise_id) is None:
            raise NotFoundError("Exercise", exercise_id)

        log_date = log_date or date.today()
        existing = await self.logs.find(user_id, exercise_id, log_date)

        if existing:
            existing.actual_sets = actual_sets
            existing.actual_reps = actual_reps
            existing.weight = weight
            existing.sets_data = sets
            await self.logs.update(existing)
            logger.info("Updated log %s for user %s", existing.id, user_id)
            return existing

        log = WorkoutLog(
            user_id=user_id,
            exercise_id=exercise_id,
            actual_sets=actual_sets,
            actual_reps=actual_reps,
            weight=weight,
            date=log_date,
            sets_data=sets,
        )
        log.id = await self.logs.create(log)
        logger.info("Logged exercise %s for user %s on %s", exercise_id, user_id, log_date)
        return log

    async def get(self, log_id: int) -> WorkoutLog:
        log = await self.logs.get(log_id)
        if log is None:
            raise NotFoundError("Workout log", log_id)
        return log

    async def update(
        self,
        log_id: int,
        actual_sets=None,
        actual_reps=None,
        weight: float | None = None,
        sets_data=None,
    ) -> WorkoutLog:
        """Change selected fields of an existing log."""
        log = await self.get(log_id)

        if actual_sets is not None:
            log.actual_sets = _require_count("actual_sets", actual_sets)
        if actual_reps is not None:
            log.actual_reps = _require_count("actual_reps", actual_reps)
        if weight is not None:
            log.weight = _require_weight(weight)
        if sets_data is not None:
            log.sets_data = parse_sets_data(sets_data)

        await self.logs.update(log)
        return log

    async def delete(self, log_id: int) -> None:
        if not await self.logs.delete(log_id):
            raise NotFoundError("Workout log", log_id)

    async def list_for_user(
        self,
        user_id: int,
        exercise_id: int | None = None,
        log_date: date | None = None,
    ) -> list[WorkoutLog]:
        return await self.logs.list_for_user(user_id, exercise_id, log_date)
