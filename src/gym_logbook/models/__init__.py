"""Data models for gym-logbook."""

from .check_in import CheckIn, CheckoutAdvance
from .exercise import Exercise, ExerciseCategory
from .progress import UserProgress, next_day, settle_day
from .sequence import SequenceDay, SequenceEntry
from .session import CompletionRule, DayState, WorkoutSession
from .user import User, UserRole
from .workout_log import SetData, WorkoutLog

__all__ = [
    "CheckIn",
    "CheckoutAdvance",
    "CompletionRule",
    "DayState",
    "Exercise",
    "ExerciseCategory",
    "next_day",
    "SequenceDay",
    "SequenceEntry",
    "SetData",
    "settle_day",
    "User",
    "UserProgress",
    "UserRole",
    "WorkoutLog",
    "WorkoutSession",
]
