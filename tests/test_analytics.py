"""Tests for analytics."""

from datetime import date, datetime, timedelta

import pytest

from gym_logbook.errors import ValidationError
from gym_logbook.models.check_in import CheckIn
from gym_logbook.models.exercise import Exercise, ExerciseCategory
from gym_logbook.models.user import User, UserRole
from gym_logbook.models.workout_log import WorkoutLog
from gym_logbook.services.analytics import (
    AnalyticsService,
    HeatLevel,
    category_progress,
    consistency_grid,
    current_streak,
    gym_stats,
    period_chart,
    round_half_up,
    user_stats,
)
from gym_logbook.services.attendance import AttendanceService
from gym_logbook.services.workout_logs import WorkoutLogService

TODAY = date(2024, 6, 15)


def _log(exercise_id, day, sets=3, reps=10, weight=0.0, user_id=1):
    return WorkoutLog(
        user_id=user_id,
        exercise_id=exercise_id,
        actual_sets=sets,
        actual_reps=reps,
        weight=weight,
        date=day,
    )


@pytest.fixture
def library():
    return {
        1: Exercise(id=1, name="Squat", category=ExerciseCategory.LEG, target_sets=3, target_reps=8),
        2: Exercise(id=2, name="Leg Press", category=ExerciseCategory.LEG, target_sets=3, target_reps=10),
        3: Exercise(id=3, name="Bench Press", category=ExerciseCategory.CHEST, target_sets=4, target_reps=10),
    }


class TestRoundHalfUp:

    def test_rounds_halves_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-0.5) == 0
        assert round_half_up(2.49) == 2


class TestCategoryProgress:

    def test_growth_between_first_and_last_dates(self, library):
        logs = [
            _log(1, date(2024, 6, 1), weight=50),  # volume 1500
            _log(2, date(2024, 6, 1), weight=100),  # volume 3000
            _log(1, date(2024, 6, 8), weight=60),  # volume 1800
            _log(1, date(2024, 6, 10), weight=80),  # volume 2400
        ]
        result = category_progress(logs, library)

        leg = result["leg"]
        assert leg.total_workouts == 3
        assert leg.first_workout_date == date(2024, 6, 1)
        assert leg.last_workout_date == date(2024, 6, 10)
        assert leg.avg_volume_start == 2250
        assert leg.avg_volume_end == 2400
        assert leg.growth_percentage == 7  # 6.67 rounded
        assert len(leg.logs) == 4
        assert "chest" not in result

    def test_zero_start_volume_reports_no_growth(self, library):
        logs = [_log(3, date(2024, 6, 1)), _log(3, date(2024, 6, 2), weight=20)]
        assert category_progress(logs, library)["chest"].growth_percentage == 0

    def test_skips_logs_for_deleted_exercises(self, library):
        assert category_progress([_log(42, TODAY)], library) == {}


class TestStreak:

    def test_counts_back_from_today(self):
        dates = [TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=2)]
        assert current_streak(dates, TODAY) == 3

    def test_today_missing_does_not_break(self):
        dates = [TODAY - timedelta(days=1), TODAY - timedelta(days=2)]
        assert current_streak(dates, TODAY) == 2

    def test_gap_breaks(self):
        dates = [TODAY, TODAY - timedelta(days=2)]
        assert current_streak(dates, TODAY) == 1

    def test_no_logs(self):
        assert current_streak([], TODAY) == 0


class TestConsistencyGrid:

    def test_shape_and_last_cell(self):
        grid = consistency_grid([], [], TODAY)

        assert len(grid) == 12
        assert all(len(week) == 7 for week in grid)
        assert grid[-1][-1].date == TODAY
        assert grid[0][0].date == TODAY - timedelta(days=83)

    def test_levels(self):
        yesterday = TODAY - timedelta(days=1)
        two_ago = TODAY - timedelta(days=2)
        grid = consistency_grid(
            log_dates=[TODAY, two_ago],
            check_in_dates=[TODAY, yesterday],
            today=TODAY,
            weeks=1,
        )
        levels = {cell.date: cell.level for cell in grid[0]}

        assert levels[TODAY] == HeatLevel.FULL
        assert levels[yesterday] == HeatLevel.CHECKED_IN
        assert levels[two_ago] == HeatLevel.LOGGED
        assert levels[TODAY - timedelta(days=3)] == HeatLevel.NONE


class TestPeriodChart:

    def test_week(self, library):
        logs = [_log(1, TODAY, sets=3, reps=8), _log(3, TODAY, sets=4, reps=9)]
        points = period_chart(logs, library, TODAY, "week")

        assert len(points) == 7
        assert points[-1].date == TODAY
        assert points[-1].label == "Jun 15"
        assert points[-1].actual == 24 + 36
        assert points[-1].target == 24 + 40
        assert points[0].actual == 0

    def test_month(self, library):
        assert len(period_chart([], library, TODAY, "month")) == 30

    def test_unknown_period(self, library):
        with pytest.raises(ValidationError):
            period_chart([], library, TODAY, "year")


class TestStats:

    def test_user_stats(self):
        check_ins = [
            CheckIn(user_id=1, check_in_time=datetime(2024, 6, 14, 18), duration_minutes=45),
            CheckIn(user_id=1, check_in_time=datetime(2024, 6, 15, 18), duration_minutes=60),
            CheckIn(user_id=1, check_in_time=datetime(2024, 6, 15, 20)),
        ]
        logs = [_log(1, TODAY), _log(2, TODAY - timedelta(days=1), sets=2, reps=5)]

        stats = user_stats(logs, check_ins, TODAY)

        assert stats.total_workouts == 3
        assert stats.total_duration == 105
        assert stats.avg_duration == 35
        assert stats.total_exercises == 2
        assert stats.total_reps == 40
        assert stats.streak == 2

    def test_gym_stats(self):
        users = [
            User(id=1, name="Owner", role=UserRole.OWNER),
            User(id=2, name="Alex"),
            User(id=3, name="Sam"),
        ]
        check_ins = [
            CheckIn(user_id=2, check_in_time=datetime(2024, 6, 15, 7), duration_minutes=30),
            CheckIn(user_id=3, check_in_time=datetime(2024, 6, 14, 7), duration_minutes=50),
        ]
        logs = [_log(1, TODAY, user_id=2)]

        stats = gym_stats(users, logs, check_ins, TODAY)

        assert stats.total_users == 2
        assert stats.total_workouts == 2
        assert stats.total_duration == 80
        assert stats.total_reps == 30
        assert stats.today_check_ins == 1
        assert [u["user"]["name"] for u in stats.users] == ["Alex", "Sam"]


class TestAnalyticsService:

    @pytest.mark.asyncio
    async def test_end_to_end(self, db, member, exercises):
        logs = WorkoutLogService(db)
        await logs.log_exercise(member.id, exercises["A"].id, 3, 10, weight=50, log_date=TODAY - timedelta(days=7))
        await logs.log_exercise(member.id, exercises["A"].id, 3, 10, weight=60, log_date=TODAY)
        await AttendanceService(db).check_in(member.id, now=datetime.combine(TODAY, datetime.min.time()))

        service = AnalyticsService(db)

        progress = await service.category_progress(member.id)
        assert progress["leg"].growth_percentage == 20

        assert await service.category_progress(member.id, "chest") is None
        with pytest.raises(ValidationError):
            await service.category_progress(member.id, "cardio")

        summary = await service.summary(member.id, today=TODAY)
        assert summary.total_exercises == 2
        assert summary.streak == 1

        grid = await service.heatmap(member.id, today=TODAY, weeks=2)
        assert grid[-1][-1].level == HeatLevel.FULL
        assert grid[0][6].level == HeatLevel.LOGGED
