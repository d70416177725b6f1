"""Database layer for gym-logbook."""

from .engine import get_db_path, init_db, seed_exercises
from .repositories import (
    CheckInRepository,
    ExerciseRepository,
    ProgressRepository,
    SequenceRepository,
    SessionRepository,
    UserRepository,
    WorkoutLogRepository,
)

__all__ = [
    "CheckInRepository",
    "ExerciseRepository",
    "get_db_path",
    "init_db",
    "ProgressRepository",
    "seed_exercises",
    "SequenceRepository",
    "SessionRepository",
    "UserRepository",
    "WorkoutLogRepository",
]
