"""Workout session (one attempt at a day) model."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class CompletionRule(str, Enum):
    """How a session decides the day's exercises are done."""

    COUNT = "count"  # |completed| >= |scheduled|
    IDENTITY = "identity"  # every scheduled exercise id is in completed


class DayState(str, Enum):
    """States of the day-advancement state machine."""

    IDLE = "idle"  # No open session for the current day
    IN_PROGRESS = "in_progress"  # Open session, partially logged
    COMPLETE = "complete"  # Transient; advancement follows immediately


def is_day_complete(
    completed: list[int],
    scheduled: list[int],
    rule: CompletionRule = CompletionRule.COUNT,
) -> bool:
    """Check whether the logged exercises cover the day's schedule.

    A day with nothing scheduled never completes.
    """
    if not scheduled:
        return False
    if rule == CompletionRule.IDENTITY:
        return set(scheduled).issubset(completed)
    return len(set(completed)) >= len(scheduled)


@dataclass
class WorkoutSession:
    """One attempt at completing a given day's exercise list."""

    user_id: int
    day_number: int
    exercises_completed: list[int] = field(default_factory=list)
    is_complete: bool = False
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: datetime | None = None
    id: int | None = None

    def mark(self, exercise_id: int, completed: bool) -> bool:
        """Add or remove an exercise from the completed set.

        Returns:
            True if the set changed
        """
        if completed:
            if exercise_id in self.exercises_completed:
                return False
            self.exercises_completed.append(exercise_id)
            return True

        if exercise_id not in self.exercises_completed:
            return False
        self.exercises_completed = [
            eid for eid in self.exercises_completed if eid != exercise_id
        ]
        return True

    def covers(self, scheduled: list[int], rule: CompletionRule) -> bool:
        return is_day_complete(self.exercises_completed, scheduled, rule)

    @property
    def state(self) -> DayState:
        return DayState.COMPLETE if self.is_complete else DayState.IN_PROGRESS

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "day_number": self.day_number,
            "exercises_completed": list(self.exercises_completed),
            "is_complete": self.is_complete,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "WorkoutSession":
        """Create from dictionary."""
        completed_at = None
        if data.get("completed_at"):
            completed_at = datetime.fromisoformat(data["completed_at"])

        return cls(
            id=id if id is not None else data.get("id"),
            user_id=data["user_id"],
            day_number=data["day_number"],
            exercises_completed=list(data.get("exercises_completed") or []),
            is_complete=bool(data.get("is_complete", False)),
            started_at=datetime.fromisoformat(data["started_at"]),
            completed_at=completed_at,
        )


def day_state(session: WorkoutSession | None) -> DayState:
    """Current state for a user's day given its most recent open session."""
    if session is None:
        return DayState.IDLE
    return session.state
