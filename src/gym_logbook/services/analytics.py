"""Training analytics: streaks, consistency heatmap, charts and progress.

The module-level functions are pure and take already-loaded rows;
``AnalyticsService`` loads the rows and calls them.
"""

import math
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from datetime import date, timedelta

from ..config import Settings, get_settings
from ..db.repositories import (
    CheckInRepository,
    ExerciseRepository,
    UserRepository,
    WorkoutLogRepository,
)
from ..errors import ValidationError
from ..models.check_in import CheckIn
from ..models.exercise import Exercise, ExerciseCategory
from ..models.user import User, UserRole
from ..models.workout_log import WorkoutLog

# Chart window sizes, in days
PERIOD_DAYS = {"week": 7, "month": 30}

# Longest streak we bother counting back
MAX_STREAK_DAYS = 365


class HeatLevel:
    NONE = 0
    LOGGED = 2  # Exercises logged, no check-in
    CHECKED_IN = 3  # Check-in, nothing logged
    FULL = 4  # Both


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class CategoryProgress:
    category: str
    total_workouts: int
    first_workout_date: date
    last_workout_date: date
    avg_volume_start: int
    avg_volume_end: int
    growth_percentage: int
    logs: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["first_workout_date"] = self.first_workout_date.isoformat()
        data["last_workout_date"] = self.last_workout_date.isoformat()
        return data


@dataclass
class HeatmapCell:
    date: date
    day: int  # 0-6 within the week column
    level: int

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "day": self.day, "level": self.level}


@dataclass
class ChartPoint:
    date: date
    label: str
    actual: int
    target: int

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "label": self.label,
            "actual": self.actual,
            "target": self.target,
        }


@dataclass
class UserStats:
    total_workouts: int
    total_duration: int
    avg_duration: int
    total_exercises: int
    total_reps: int
    streak: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GymStats:
    total_users: int
    total_workouts: int
    total_duration: int
    total_reps: int
    today_check_ins: int
    users: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def _average_volume(entries: list[dict]) -> float:
    return sum(e["volume"] for e in entries) / len(entries)


def category_progress(
    logs: list[WorkoutLog], exercises: dict[int, Exercise]
) -> dict[str, CategoryProgress]:
    """Volume growth per category, from the first to the latest workout date.

    Volume is sets x reps x weight, averaged over the logs of a single date.
    Logs for exercises that no longer exist are skipped.
    """
    by_category: dict[str, list[dict]] = {}

    for log in logs:
        exercise = exercises.get(log.exercise_id)
        if exercise is None:
            continue
        by_category.setdefault(exercise.category.value, []).append({
            "date": log.date,
            "exercise_id": log.exercise_id,
            "exercise_name": exercise.name,
            "actual_sets": log.actual_sets,
            "actual_reps": log.actual_reps,
            "weight": log.weight or 0,
            "target_sets": exercise.target_sets,
            "target_reps": exercise.target_reps,
            "target_weight": exercise.target_weight or 0,
            "volume": log.volume,
        })

    result = {}
    for category, entries in by_category.items():
        entries.sort(key=lambda e: e["date"])
        first_date = entries[0]["date"]
        last_date = entries[-1]["date"]

        first_volume = _average_volume([e for e in entries if e["date"] == first_date])
        last_volume = _average_volume([e for e in entries if e["date"] == last_date])
        growth = (last_volume - first_volume) / first_volume * 100 if first_volume > 0 else 0

        result[category] = CategoryProgress(
            category=category,
            total_workouts=len({e["date"] for e in entries}),
            first_workout_date=first_date,
            last_workout_date=last_date,
            avg_volume_start=round_half_up(first_volume),
            avg_volume_end=round_half_up(last_volume),
            growth_percentage=round_half_up(growth),
            logs=[{**e, "date": e["date"].isoformat()} for e in entries],
        )

    return result


def current_streak(log_dates: Iterable[date], today: date) -> int:
    """Consecutive days with a logged exercise, counting back from today.

    A day without logs yet today does not break a streak that ran
    through yesterday.
    """
    dates = set(log_dates)
    streak = 0
    for offset in range(MAX_STREAK_DAYS):
        day = today - timedelta(days=offset)
        if day in dates:
            streak += 1
        elif offset > 0:
            break
    return streak


def consistency_grid(
    log_dates: Iterable[date],
    check_in_dates: Iterable[date],
    today: date,
    weeks: int = 12,
) -> list[list[HeatmapCell]]:
    """GitHub-style activity grid: ``weeks`` columns of 7 days ending today."""
    logged = set(log_dates)
    checked_in = set(check_in_dates)

    grid = []
    for week in range(weeks):
        column = []
        for day in range(7):
            cell_date = today - timedelta(days=(weeks - 1 - week) * 7 + (6 - day))
            has_log = cell_date in logged
            has_check_in = cell_date in checked_in

            if has_check_in and has_log:
                level = HeatLevel.FULL
            elif has_check_in:
                level = HeatLevel.CHECKED_IN
            elif has_log:
                level = HeatLevel.LOGGED
            else:
                level = HeatLevel.NONE

            column.append(HeatmapCell(date=cell_date, day=day, level=level))
        grid.append(column)
    return grid


def period_chart(
    logs: list[WorkoutLog],
    exercises: dict[int, Exercise],
    today: date,
    period: str = "week",
) -> list[ChartPoint]:
    """Daily actual vs target reps over the last week or month."""
    if period not in PERIOD_DAYS:
        raise ValidationError(f"period must be one of {', '.join(PERIOD_DAYS)}")

    by_date: dict[date, list[WorkoutLog]] = {}
    for log in logs:
        by_date.setdefault(log.date, []).append(log)

    points = []
    for offset in range(PERIOD_DAYS[period] - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_logs = by_date.get(day, [])

        target = 0
        for log in day_logs:
            exercise = exercises.get(log.exercise_id)
            if exercise:
                target += exercise.target_sets * exercise.target_reps

        points.append(ChartPoint(
            date=day,
            label=f"{day:%b} {day.day}",
            actual=sum(log.total_reps for log in day_logs),
            target=target,
        ))
    return points


def user_stats(logs: list[WorkoutLog], check_ins: list[CheckIn], today: date) -> UserStats:
    total_workouts = len(check_ins)
    total_duration = sum(ci.duration_minutes or 0 for ci in check_ins)
    return UserStats(
        total_workouts=total_workouts,
        total_duration=total_duration,
        avg_duration=round_half_up(total_duration / total_workouts) if total_workouts else 0,
        total_exercises=len(logs),
        total_reps=sum(log.total_reps for log in logs),
        streak=current_streak((log.date for log in logs), today),
    )


def gym_stats(
    users: list[User], logs: list[WorkoutLog], check_ins: list[CheckIn], today: date
) -> GymStats:
    """Gym-wide totals plus a per-member breakdown."""
    members = [u for u in users if u.role == UserRole.USER]

    per_user = []
    for user in members:
        stats = user_stats(
            [log for log in logs if log.user_id == user.id],
            [ci for ci in check_ins if ci.user_id == user.id],
            today,
        )
        per_user.append({"user": user.to_dict(), **stats.to_dict()})

    return GymStats(
        total_users=len(members),
        total_workouts=len(check_ins),
        total_duration=sum(ci.duration_minutes or 0 for ci in check_ins),
        total_reps=sum(log.total_reps for log in logs),
        today_check_ins=sum(1 for ci in check_ins if ci.check_in_time.date() == today),
        users=per_user,
    )


class AnalyticsService:
    """Loads rows for a user (or the whole gym) and summarizes them."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        db_path = self.settings.db_path
        self.logs = WorkoutLogRepository(db_path)
        self.check_ins = CheckInRepository(db_path)
        self.exercises = ExerciseRepository(db_path)
        self.users = UserRepository(db_path)

    async def _exercise_map(self) -> dict[int, Exercise]:
        return {e.id: e for e in await self.exercises.list_all()}

    async def category_progress(
        self, user_id: int, category: str | None = None
    ) -> dict[str, CategoryProgress] | CategoryProgress | None:
        """All categories, or just one (None if it has no logs)."""
        progress = category_progress(
            await self.logs.list_for_user(user_id), await self._exercise_map()
        )
        if category is None:
            return progress
        try:
            key = ExerciseCategory.parse(category).value
        except ValueError:
            raise ValidationError(f"Unknown category {category!r}")
        return progress.get(key)

    async def summary(self, user_id: int, today: date | None = None) -> UserStats:
        return user_stats(
            await self.logs.list_for_user(user_id),
            await self.check_ins.list_for_user(user_id),
            today or date.today(),
        )

    async def heatmap(
        self, user_id: int, today: date | None = None, weeks: int = 12
    ) -> list[list[HeatmapCell]]:
        if weeks < 1:
            raise ValidationError("weeks must be at least 1")
        logs = await self.logs.list_for_user(user_id)
        check_ins = await self.check_ins.list_for_user(user_id)
        return consistency_grid(
            (log.date for log in logs),
            (ci.check_in_time.date() for ci in check_ins),
            today or date.today(),
            weeks,
        )

    async def chart(
        self, user_id: int, period: str = "week", today: date | None = None
    ) -> list[ChartPoint]:
        return period_chart(
            await self.logs.list_for_user(user_id),
            await self._exercise_map(),
            today or date.today(),
            period,
        )

    async def gym(self, today: date | None = None) -> GymStats:
        return gym_stats(
            await self.users.list_all(),
            await self.logs.list_all(),
            await self.check_ins.list_recent(),
            today or date.today(),
        )
