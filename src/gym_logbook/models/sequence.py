"""Workout sequence (per-user multi-day plan) models."""

from dataclasses import dataclass, field
from itertools import groupby

from .exercise import Exercise


@dataclass
class SequenceEntry:
    """One exercise slot in a user's plan."""

    user_id: int
    exercise_id: int
    day_number: int  # 1-based position in the cyclic plan
    sort_order: int = 0  # 0-based position within the day
    id: int | None = None
    exercise: Exercise | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "exercise_id": self.exercise_id,
            "day_number": self.day_number,
            "sort_order": self.sort_order,
            "exercise": self.exercise.to_dict() if self.exercise else None,
        }


@dataclass
class SequenceDay:
    """All entries scheduled for one day, in sort order."""

    day_number: int
    entries: list[SequenceEntry] = field(default_factory=list)

    @property
    def exercise_ids(self) -> list[int]:
        return [entry.exercise_id for entry in self.entries]

    @property
    def exercises(self) -> list[Exercise]:
        return [entry.exercise for entry in self.entries if entry.exercise]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "day_number": self.day_number,
            "entries": [entry.to_dict() for entry in self.entries],
        }


def group_by_day(entries: list[SequenceEntry]) -> list[SequenceDay]:
    """Group entries by day_number, days ascending, entries by sort_order."""
    ordered = sorted(entries, key=lambda e: (e.day_number, e.sort_order))
    return [
        SequenceDay(day_number=day, entries=list(day_entries))
        for day, day_entries in groupby(ordered, key=lambda e: e.day_number)
    ]


def max_day(entries: list[SequenceEntry]) -> int:
    """Highest day_number in the plan, or 0 when the plan is empty."""
    return max((e.day_number for e in entries), default=0)


def next_sort_order(existing_max: int | None) -> int:
    """Sort order for an entry appended to a day.

    An empty day starts at 0; otherwise one past the current maximum.
    """
    if existing_max is None:
        return 0
    return existing_max + 1
