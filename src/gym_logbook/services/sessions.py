"""Session tracking: which of today's exercises a user has finished."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from ..config import Settings, get_settings
from ..db.repositories import SequenceRepository, SessionRepository
from ..models.exercise import Exercise
from ..models.progress import UserProgress
from ..models.session import DayState, WorkoutSession, day_state
from .progression import ProgressionService

logger = logging.getLogger(__name__)


@dataclass
class SessionUpdate:
    """Outcome of logging one exercise against the current day."""

    session: WorkoutSession
    progress: UserProgress
    advanced: bool

    def to_dict(self) -> dict:
        return {
            "session": self.session.to_dict(),
            "progress": self.progress.to_dict(),
            "advanced": self.advanced,
        }


@dataclass
class TodaysPlan:
    """What the home page shows: the current day and what is left of it."""

    progress: UserProgress
    max_day: int
    exercises: list[Exercise] = field(default_factory=list)
    completed_ids: list[int] = field(default_factory=list)
    state: DayState = DayState.IDLE

    @property
    def day_number(self) -> int:
        return self.progress.current_day_number

    @property
    def remaining(self) -> list[Exercise]:
        return [e for e in self.exercises if e.id not in self.completed_ids]

    def to_dict(self) -> dict:
        return {
            "day_number": self.day_number,
            "max_day": self.max_day,
            "state": self.state.value,
            "progress": self.progress.to_dict(),
            "exercises": [e.to_dict() for e in self.exercises],
            "completed_ids": list(self.completed_ids),
        }


class SessionTracker:
    """Tracks per-day attempts and fires advancement when a day is covered."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        db_path = self.settings.db_path
        self.sessions = SessionRepository(db_path)
        self.sequences = SequenceRepository(db_path)
        self.progression = ProgressionService(self.settings)

    def _started_since(self, now: datetime | None) -> datetime | None:
        if not self.settings.session_same_day_only:
            return None
        now = now or datetime.now()
        return now.replace(hour=0, minute=0, second=0, microsecond=0)

    async def find_open_session(
        self, user_id: int, day_number: int, now: datetime | None = None
    ) -> WorkoutSession | None:
        """Most recent incomplete session for the day, if any."""
        return await self.sessions.find_open(
            user_id, day_number, self._started_since(now)
        )

    async def list_sessions(
        self, user_id: int, day_number: int | None = None
    ) -> list[WorkoutSession]:
        return await self.sessions.list_for_user(user_id, day_number)

    async def mark_exercise_complete(
        self,
        user_id: int,
        day_number: int,
        exercise_id: int,
        completed: bool = True,
        now: datetime | None = None,
    ) -> WorkoutSession:
        """Add or remove an exercise from the day's open session.

        Opens a session on first use. Marking an already-marked exercise
        (or unmarking one that isn't) changes nothing.
        """
        session = await self.find_open_session(user_id, day_number, now)

        if session is None:
            session = WorkoutSession(
                user_id=user_id,
                day_number=day_number,
                started_at=now or datetime.now(),
            )
            session.mark(exercise_id, completed)
            session.id = await self.sessions.create(session)
            logger.info(
                "Started session %s for user %s day %d", session.id, user_id, day_number
            )
            return session

        if session.mark(exercise_id, completed):
            await self.sessions.update_completed(session.id, session.exercises_completed)
        return session

    async def check_and_close_if_done(
        self, user_id: int, day_number: int, now: datetime | None = None
    ) -> bool:
        """Close the open session and advance if the day is covered.

        Safe to call repeatedly: only the call that actually flips the
        session to complete advances progress.

        Returns:
            True if this call closed the session and advanced the user
        """
        session = await self.find_open_session(user_id, day_number, now)
        if session is None:
            return False

        scheduled = await self.sequences.exercise_ids_for_day(user_id, day_number)
        if not session.covers(scheduled, self.settings.completion_rule):
            return False

        if not await self.sessions.close(session.id, now or datetime.now()):
            logger.debug("Session %s was already closed", session.id)
            return False

        logger.info(
            "Session %s complete for user %s day %d", session.id, user_id, day_number
        )
        await self.progression.advance(user_id, (now or datetime.now()).date())
        return True

    async def record(
        self,
        user_id: int,
        exercise_id: int,
        completed: bool = True,
        day_number: int | None = None,
        now: datetime | None = None,
    ) -> SessionUpdate:
        """Mark an exercise and advance the day if that finished it.

        ``day_number`` defaults to the user's current day.
        """
        if day_number is None:
            progress = await self.progression.get_or_create(user_id)
            day_number = progress.current_day_number

        session = await self.mark_exercise_complete(
            user_id, day_number, exercise_id, completed, now
        )

        advanced = False
        if completed:
            advanced = await self.check_and_close_if_done(user_id, day_number, now)
            if advanced:
                session = await self.sessions.get(session.id)

        progress = await self.progression.get_or_create(user_id)
        return SessionUpdate(session=session, progress=progress, advanced=advanced)

    async def close_open_sessions(
        self, user_id: int, day_number: int, now: datetime | None = None
    ) -> int:
        """Close every open session for the day without advancing."""
        closed = await self.sessions.close_open(user_id, day_number, now or datetime.now())
        if closed:
            logger.info(
                "Closed %d open session(s) for user %s day %d", closed, user_id, day_number
            )
        return closed

    async def todays_plan(self, user_id: int, now: datetime | None = None) -> TodaysPlan:
        """Current day, its exercises, and what has been ticked off so far."""
        progress = await self.progression.get_or_create(user_id)
        day = progress.current_day_number

        entries = await self.sequences.list_for_user(user_id, day)
        session = await self.find_open_session(user_id, day, now)

        return TodaysPlan(
            progress=progress,
            max_day=await self.sequences.max_day(user_id),
            exercises=[entry.exercise for entry in entries if entry.exercise],
            completed_ids=list(session.exercises_completed) if session else [],
            state=day_state(session),
        )
