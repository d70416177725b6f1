"""Gym check-in / check-out flow."""

import logging
from dataclasses import dataclass
from datetime import datetime

from ..config import Settings, get_settings
from ..db.repositories import CheckInRepository
from ..errors import ValidationError
from ..models.check_in import CheckIn, CheckoutAdvance
from ..models.progress import UserProgress
from .sessions import SessionTracker

logger = logging.getLogger(__name__)


@dataclass
class CheckOutResult:
    check_in: CheckIn
    progress: UserProgress
    advanced: bool

    def to_dict(self) -> dict:
        return {
            "check_in": self.check_in.to_dict(),
            "progress": self.progress.to_dict(),
            "advanced": self.advanced,
        }


class AttendanceService:
    """Records gym visits and applies the check-out advancement policy."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.check_ins = CheckInRepository(self.settings.db_path)
        self.tracker = SessionTracker(self.settings)

    async def check_in(self, user_id: int, now: datetime | None = None) -> CheckIn:
        """Start a visit, or return the one already open."""
        existing = await self.check_ins.get_open(user_id)
        if existing:
            return existing

        check_in = CheckIn(user_id=user_id, check_in_time=now or datetime.now())
        check_in.id = await self.check_ins.create(check_in)
        logger.info("User %s checked in", user_id)
        return check_in

    async def open_check_in(self, user_id: int) -> CheckIn | None:
        return await self.check_ins.get_open(user_id)

    async def check_out(self, user_id: int, now: datetime | None = None) -> CheckOutResult:
        """End the open visit.

        Under the ``always`` policy this also closes the current day's open
        session and advances the plan, however much was logged.

        Raises:
            ValidationError: If the user is not checked in
        """
        now = now or datetime.now()
        check_in = await self.check_ins.get_open(user_id)
        if check_in is None:
            raise ValidationError(f"User {user_id} is not checked in")

        minutes = check_in.close(now)
        if not await self.check_ins.close(check_in):
            raise ValidationError(f"Check-in {check_in.id} was already closed")
        logger.info("User %s checked out after %d minutes", user_id, minutes)

        progression = self.tracker.progression
        progress = await progression.get_or_create(user_id)

        if self.settings.checkout_advance == CheckoutAdvance.NEVER:
            return CheckOutResult(check_in=check_in, progress=progress, advanced=False)

        before = progress.total_workouts_completed
        await self.tracker.close_open_sessions(user_id, progress.current_day_number, now)
        progress = await progression.advance(user_id, now.date())

        return CheckOutResult(
            check_in=check_in,
            progress=progress,
            advanced=progress.total_workouts_completed > before,
        )

    async def history(self, user_id: int) -> list[CheckIn]:
        """A user's visits, oldest first."""
        return await self.check_ins.list_for_user(user_id)
