"""Day-advancement engine for the rolling workout plan.

Both advancement triggers (a session covering its day, and check-out under
the ``always`` policy) go through ``ProgressionService.advance``; the day
arithmetic itself lives in ``models.progress``.

Whenever progress is read it is first settled onto a day that has exercises
scheduled, so editing a plan (removing its last day, deleting an exercise,
leaving gaps in the day numbers) never strands a user on an empty day.
"""

import logging
from datetime import date

from ..config import Settings, get_settings
from ..db.repositories import ProgressRepository, SequenceRepository
from ..errors import ValidationError
from ..models.progress import UserProgress, settle_day

logger = logging.getLogger(__name__)


class ProgressionService:
    """Owns every write to a user's progress row."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        db_path = self.settings.db_path
        self.progress = ProgressRepository(db_path)
        self.sequences = SequenceRepository(db_path)

    async def _settle(self, progress: UserProgress, scheduled: list[int]) -> UserProgress:
        day = settle_day(progress.current_day_number, scheduled)
        if day != progress.current_day_number:
            logger.info(
                "User %s moved from day %d to day %d after a plan change",
                progress.user_id, progress.current_day_number, day,
            )
            progress.set_day(day)
            await self.progress.update(progress)
        return progress

    async def get_or_create(self, user_id: int) -> UserProgress:
        """Return the user's progress, starting at day 1 if they have none."""
        progress = await self.progress.get_or_create(user_id)
        return await self._settle(progress, await self.sequences.scheduled_days(user_id))

    async def settle(self, user_id: int) -> UserProgress | None:
        """Re-settle an existing progress row after the user's plan changed.

        Returns None for users who have never had progress.
        """
        progress = await self.progress.get(user_id)
        if progress is None:
            return None
        return await self._settle(progress, await self.sequences.scheduled_days(user_id))

    async def advance(self, user_id: int, today: date | None = None) -> UserProgress:
        """Move the user to the next day of their plan.

        Wraps to the first day after the last one and skips day numbers with
        nothing scheduled. With an empty plan nothing is written and the
        current progress is returned as-is.
        """
        progress = await self.progress.get_or_create(user_id)
        scheduled = await self.sequences.scheduled_days(user_id)

        if not scheduled:
            logger.info("User %s has no sequence; not advancing", user_id)
            return progress

        max_day = scheduled[-1]
        previous = progress.current_day_number
        progress.advance(max_day, today, scheduled)
        await self.progress.update(progress)

        logger.info(
            "User %s advanced from day %d to day %d of %d (total %d)",
            user_id, previous, progress.current_day_number, max_day,
            progress.total_workouts_completed,
        )
        return progress

    async def set_day(self, user_id: int, day_number: int) -> UserProgress:
        """Owner override of the current day.

        Raises:
            ValidationError: If day_number is outside ``[1, max_day]``, has
                nothing scheduled, or is below 1 when the user has no
                sequence yet
        """
        scheduled = await self.sequences.scheduled_days(user_id)
        max_day = scheduled[-1] if scheduled else 0
        if day_number < 1 or (max_day and day_number > max_day):
            bound = f"1-{max_day}" if max_day else "at least 1"
            raise ValidationError(f"day_number must be {bound}, got {day_number}")
        if scheduled and day_number not in scheduled:
            raise ValidationError(f"Day {day_number} has no exercises scheduled")

        progress = await self.progress.get_or_create(user_id)
        progress.set_day(day_number)
        await self.progress.update(progress)

        logger.info("User %s set to day %d", user_id, day_number)
        return progress

    async def reset(self, user_id: int) -> UserProgress:
        """Back to the first day with the workout counter cleared."""
        progress = await self.progress.get_or_create(user_id)
        progress.reset()
        await self.progress.update(progress)

        logger.info("User %s progress reset", user_id)
        return await self._settle(progress, await self.sequences.scheduled_days(user_id))
