"""Exercise library management."""

import logging

from ..config import Settings, get_settings
from ..db.repositories import ExerciseRepository, UserRepository
from ..errors import NotFoundError, ValidationError
from ..models.exercise import Exercise, ExerciseCategory
from ..utils.exercise_utils import Classifier, asset_for_exercise, classify

logger = logging.getLogger(__name__)


def _parse_category(value) -> ExerciseCategory:
    try:
        return ExerciseCategory.parse(value)
    except ValueError:
        raise ValidationError(f"Unknown category {value!r}")


class ExerciseService:
    """Owner CRUD over exercises, with name-based defaults."""

    def __init__(self, settings: Settings | None = None, classifier: Classifier | None = None):
        self.settings = settings or get_settings()
        db_path = self.settings.db_path
        self.exercises = ExerciseRepository(db_path)
        self.users = UserRepository(db_path)
        self.classifier = classifier

    async def list_all(self, user_id: int | None = None, category=None) -> list[Exercise]:
        """All exercises, or only those visible to ``user_id``, optionally in one category."""
        wanted = _parse_category(category) if category is not None else None

        if user_id is None:
            if wanted is not None:
                return await self.exercises.get_by_category(wanted)
            return await self.exercises.list_all()

        visible = await self.exercises.list_for_user(user_id)
        if wanted is not None:
            visible = [e for e in visible if e.category == wanted]
        return visible

    async def get(self, exercise_id: int) -> Exercise:
        exercise = await self.exercises.get(exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise", exercise_id)
        return exercise

    async def create(
        self,
        name: str,
        category=None,
        target_sets: int = 3,
        target_reps: int = 12,
        target_weight: float = 0.0,
        gif_url: str | None = None,
        created_for_user_id: int | None = None,
    ) -> Exercise:
        """Add an exercise.

        Without a category the name is classified; without an image the
        bundled asset for the name is used when there is one.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("name is required")

        if category is None:
            resolved = classify(name, self.classifier)
            if resolved is None:
                raise ValidationError(f"Could not infer a category for {name!r}")
        else:
            resolved = _parse_category(category)

        if target_sets < 1 or target_reps < 1 or target_weight < 0:
            raise ValidationError("Targets must be positive")

        if created_for_user_id is not None and await self.users.get(created_for_user_id) is None:
            raise NotFoundError("User", created_for_user_id)

        exercise = Exercise(
            name=name,
            category=resolved,
            target_sets=target_sets,
            target_reps=target_reps,
            target_weight=target_weight,
            gif_url=gif_url if gif_url is not None else (asset_for_exercise(name) or ""),
            created_for_user_id=created_for_user_id,
        )
        exercise.id = await self.exercises.create(exercise)

        logger.info("Created exercise %r (%s)", name, resolved.value)
        return exercise

    async def update(self, exercise_id: int, **changes) -> Exercise:
        """Apply the given field changes; ``None`` values are ignored."""
        exercise = await self.get(exercise_id)

        for key, value in changes.items():
            if value is None:
                continue
            if key == "category":
                value = _parse_category(value)
            elif key == "name":
                value = value.strip()
                if not value:
                    raise ValidationError("name must not be empty")
            elif not hasattr(exercise, key):
                raise ValidationError(f"Unknown field {key!r}")
            setattr(exercise, key, value)

        await self.exercises.update(exercise)
        return exercise

    async def delete(self, exercise_id: int) -> None:
        """Delete an exercise and drop it from every plan."""
        if not await self.exercises.delete(exercise_id):
            raise NotFoundError("Exercise", exercise_id)
        logger.info("Deleted exercise %s", exercise_id)
