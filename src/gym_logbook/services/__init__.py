"""Business logic for gym-logbook."""

from .analytics import AnalyticsService
from .attendance import AttendanceService, CheckOutResult
from .exercises import ExerciseService
from .progression import ProgressionService
from .sequence import SequenceService
from .sessions import SessionTracker, SessionUpdate, TodaysPlan
from .users import UserService
from .workout_logs import WorkoutLogService

__all__ = [
    "AnalyticsService",
    "AttendanceService",
    "CheckOutResult",
    "ExerciseService",
    "ProgressionService",
    "SequenceService",
    "SessionTracker",
    "SessionUpdate",
    "TodaysPlan",
    "UserService",
    "WorkoutLogService",
]
