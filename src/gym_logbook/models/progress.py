"""Rolling day-sequence progress model."""

from dataclasses import dataclass
from datetime import date, datetime


def next_day(current_day: int, max_day: int) -> int:
    """Return the day that follows ``current_day`` in a plan of ``max_day`` days.

    Day numbering is cyclic: after the last day the plan starts over at 1.
    An empty plan (``max_day == 0``) always yields 1.

    Args:
        current_day: The day the user is on (1-based)
        max_day: Highest day_number in the user's sequence

    Returns:
        The next day number, in ``[1, max_day]`` (or 1 for an empty plan)
    """
    if max_day <= 0:
        return 1
    if current_day >= max_day:
        return 1
    return current_day + 1


def settle_day(day: int, scheduled_days: list[int]) -> int:
    """Return the first day from ``day`` onwards that has exercises scheduled.

    Days past the end of the plan wrap around to its first scheduled day, so
    a plan that shrank or skips day numbers never leaves a user on an empty
    day. With no sequence at all ``day`` is returned unchanged.

    Args:
        day: Candidate day number (1-based)
        scheduled_days: Day numbers that have at least one entry

    Returns:
        A day number from ``scheduled_days``, or ``day`` if it is empty
    """
    if not scheduled_days:
        return day
    days = sorted(scheduled_days)
    for candidate in days:
        if candidate >= day:
            return candidate
    return days[0]


@dataclass
class UserProgress:
    """Tracks which day of the rolling plan a user is on.

    One row per user. ``current_day_number`` stays within
    ``[1, max_day]`` once a sequence exists.
    """

    user_id: int
    current_day_number: int = 1
    total_workouts_completed: int = 0
    last_workout_date: date | None = None
    id: int | None = None
    updated_at: datetime | None = None

    def advance(
        self,
        max_day: int,
        today: date | None = None,
        scheduled_days: list[int] | None = None,
    ) -> int:
        """Move to the next day, wrapping after the last one.

        Stamps the workout date and bumps the completed counter.

        Args:
            max_day: Highest day_number in the user's sequence
            today: Date to record as the last workout (defaults to today)
            scheduled_days: Days that have exercises; empty days in between
                are skipped

        Returns:
            The new current day number
        """
        day = next_day(self.current_day_number, max_day)
        if scheduled_days:
            day = settle_day(day, scheduled_days)
        self.current_day_number = day
        self.last_workout_date = today or date.today()
        self.total_workouts_completed += 1
        return self.current_day_number

    def set_day(self, day_number: int) -> None:
        """Jump to a specific day."""
        self.current_day_number = day_number

    def reset(self) -> None:
        """Back to day 1 with no history."""
        self.current_day_number = 1
        self.total_workouts_completed = 0
        self.last_workout_date = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "current_day_number": self.current_day_number,
            "total_workouts_completed": self.total_workouts_completed,
            "last_workout_date": (
                self.last_workout_date.isoformat() if self.last_workout_date else None
            ),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "UserProgress":
        """Create from dictionary."""
        last_workout_date = None
        if data.get("last_workout_date"):
            last_workout_date = date.fromisoformat(data["last_workout_date"])

        updated_at = None
        if data.get("updated_at"):
            updated_at = datetime.fromisoformat(data["updated_at"])

        return cls(
            id=id,
            user_id=data["user_id"],
            current_day_number=data.get("current_day_number", 1),
            total_workouts_completed=data.get("total_workouts_completed", 0),
            last_workout_date=last_workout_date,
            updated_at=updated_at,
        )

    def get_position_display(self) -> str:
        """Get a human-readable position string."""
        return f"Day {self.current_day_number}"
