"""Per-user workout sequence management."""

import logging

from ..config import Settings, get_settings
from ..db.repositories import ExerciseRepository, SequenceRepository, UserRepository
from ..errors import NotFoundError, ValidationError
from ..models.exercise import Exercise
from ..models.sequence import SequenceDay, SequenceEntry, group_by_day, next_sort_order
from .progression import ProgressionService

logger = logging.getLogger(__name__)


class SequenceService:
    """Read and edit the ordered (day, exercise) plan of each user."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        db_path = self.settings.db_path
        self.sequences = SequenceRepository(db_path)
        self.exercises = ExerciseRepository(db_path)
        self.users = UserRepository(db_path)

    async def get_sequence(
        self, user_id: int, day_number: int | None = None
    ) -> list[SequenceEntry]:
        """Entries ordered by day then sort order, each with its exercise."""
        return await self.sequences.list_for_user(user_id, day_number)

    async def get_days(self, user_id: int) -> list[SequenceDay]:
        """The plan grouped by day."""
        return group_by_day(await self.sequences.list_for_user(user_id))

    async def max_day(self, user_id: int) -> int:
        return await self.sequences.max_day(user_id)

    async def exercises_for_day(self, user_id: int, day_number: int) -> list[Exercise]:
        entries = await self.sequences.list_for_user(user_id, day_number)
        return [entry.exercise for entry in entries if entry.exercise]

    async def scheduled_ids(self, user_id: int, day_number: int) -> list[int]:
        return await self.sequences.exercise_ids_for_day(user_id, day_number)

    async def add_entry(self, user_id: int, exercise_id: int, day_number: int) -> SequenceEntry:
        """Append an exercise to the end of a day.

        Args:
            user_id: Owner of the plan
            exercise_id: Exercise to schedule
            day_number: Day to append to (1-based)

        Returns:
            The stored entry, with its exercise attached

        Raises:
            ValidationError: If day_number is below 1 or the exercise is
                scoped to a different user
            NotFoundError: If the user or exercise does not exist
        """
        if day_number < 1:
            raise ValidationError("day_number must be at least 1")

        if await self.users.get(user_id) is None:
            raise NotFoundError("User", user_id)

        exercise = await self.exercises.get(exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise", exercise_id)
        if not exercise.is_visible_to(user_id):
            raise ValidationError(
                f"Exercise {exercise_id} belongs to another user"
            )

        current_max = await self.sequences.max_sort_order(user_id, day_number)
        entry = SequenceEntry(
            user_id=user_id,
            exercise_id=exercise_id,
            day_number=day_number,
            sort_order=next_sort_order(current_max),
        )
        entry.id = await self.sequences.add(entry)
        entry.exercise = exercise

        logger.info(
            "Added %s to day %d for user %s (position %d)",
            exercise.name, day_number, user_id, entry.sort_order,
        )
        return entry

    async def remove_entry(self, entry_id: int) -> None:
        """Remove an entry from its day.

        Remaining sort orders keep their gaps; ``reorder`` compacts them.
        A user left on a day that is now empty moves to the next scheduled day.
        """
        entry = await self.sequences.get(entry_id)
        if entry is None or not await self.sequences.delete(entry_id):
            raise NotFoundError("Sequence entry", entry_id)
        logger.info(
            "Removed sequence entry %s (user %s day %d)",
            entry_id, entry.user_id, entry.day_number,
        )
        await ProgressionService(self.settings).settle(entry.user_id)

    async def reorder(
        self, user_id: int, day_number: int, entry_ids: list[int]
    ) -> list[SequenceEntry]:
        """Apply a new order to one day's entries, all or nothing.

        Returns:
            The day's entries as re-read after the write
        """
        await self.sequences.reorder(user_id, day_number, entry_ids)
        logger.info("Reordered day %d for user %s", day_number, user_id)
        return await self.sequences.list_for_user(user_id, day_number)
