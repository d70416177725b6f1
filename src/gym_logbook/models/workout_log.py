"""Workout log (per exercise, per date) models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class SetPerformance(str, Enum):
    """How a logged set compares to its target."""

    NOT_STARTED = "not_started"
    EXCEEDED = "exceeded"  # Met or beat both weight and reps
    PARTIAL = "partial"  # Met one of weight/reps
    BELOW = "below"


@dataclass
class SetData:
    """A single tracked set."""

    set_number: int
    target_weight: float
    target_reps: int
    actual_weight: float = 0.0
    actual_reps: int = 0
    completed: bool = False

    @property
    def volume(self) -> float:
        return self.actual_weight * self.actual_reps

    @property
    def performance(self) -> SetPerformance:
        if self.actual_weight == 0 and self.actual_reps == 0:
            return SetPerformance.NOT_STARTED

        weight_met = self.actual_weight >= self.target_weight
        reps_met = self.actual_reps >= self.target_reps
        if weight_met and reps_met:
            return SetPerformance.EXCEEDED
        if not weight_met and not reps_met:
            return SetPerformance.BELOW
        return SetPerformance.PARTIAL

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "set_number": self.set_number,
            "target_weight": self.target_weight,
            "target_reps": self.target_reps,
            "actual_weight": self.actual_weight,
            "actual_reps": self.actual_reps,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SetData":
        """Create from dictionary."""
        return cls(
            set_number=int(data["set_number"]),
            target_weight=float(data.get("target_weight") or 0),
            target_reps=int(data.get("target_reps") or 0),
            actual_weight=float(data.get("actual_weight") or 0),
            actual_reps=int(data.get("actual_reps") or 0),
            completed=bool(data.get("completed", False)),
        )


def default_sets(target_sets: int, target_reps: int, target_weight: float) -> list[SetData]:
    """Blank per-set tracker rows for an exercise's targets."""
    return [
        SetData(set_number=i + 1, target_weight=target_weight, target_reps=target_reps)
        for i in range(target_sets)
    ]


@dataclass
class WorkoutLog:
    """What a user actually did for one exercise on one date."""

    user_id: int
    exercise_id: int
    actual_sets: int
    actual_reps: int
    weight: float = 0.0
    date: date = field(default_factory=date.today)
    sets_data: list[SetData] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None

    @property
    def total_reps(self) -> int:
        """Sets x reps, as the analytics charts count it."""
        return self.actual_sets * self.actual_reps

    @property
    def volume(self) -> float:
        return self.actual_sets * self.actual_reps * (self.weight or 0)

    @property
    def completed_sets(self) -> int:
        return sum(1 for s in self.sets_data if s.completed)

    @property
    def all_sets_completed(self) -> bool:
        return bool(self.sets_data) and all(s.completed for s in self.sets_data)

    def completion_percentage(self) -> float:
        """Share of tracked sets marked completed (0-100)."""
        if not self.sets_data:
            return 0.0
        return self.completed_sets / len(self.sets_data) * 100

    def average_completed_weight(self) -> float:
        done = [s for s in self.sets_data if s.completed]
        if not done:
            return 0.0
        return sum(s.actual_weight for s in done) / len(done)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "exercise_id": self.exercise_id,
            "date": self.date.isoformat(),
            "actual_sets": self.actual_sets,
            "actual_reps": self.actual_reps,
            "weight": self.weight,
            "sets_data": [s.to_dict() for s in self.sets_data],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "WorkoutLog":
        """Create from dictionary."""
        created_at = None
        if data.get("created_at"):
            created_at = datetime.fromisoformat(data["created_at"])

        log_date = data.get("date")
        if isinstance(log_date, str):
            log_date = date.fromisoformat(log_date)

        return cls(
            id=id if id is not None else data.get("id"),
            user_id=data["user_id"],
            exercise_id=data["exercise_id"],
            actual_sets=data["actual_sets"],
            actual_reps=data["actual_reps"],
            weight=data.get("weight") or 0.0,
            date=log_date or date.today(),
            sets_data=[SetData.from_dict(s) for s in data.get("sets_data") or []],
            created_at=created_at,
        )
