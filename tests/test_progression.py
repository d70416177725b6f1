"""Tests for the day-advancement engine."""

import asyncio
from datetime import date

import pytest

from gym_logbook.db.repositories import ProgressRepository
from gym_logbook.errors import ValidationError
from gym_logbook.services.exercises import ExerciseService
from gym_logbook.services.progression import ProgressionService
from gym_logbook.services.sequence import SequenceService


class TestGetOrCreate:
    """Tests for progress creation."""

    @pytest.mark.asyncio
    async def test_creates_at_day_one(self, db, member):
        progress = await ProgressionService(db).get_or_create(member.id)

        assert progress.current_day_number == 1
        assert progress.total_workouts_completed == 0
        assert progress.last_workout_date is None

    @pytest.mark.asyncio
    async def test_returns_existing_row(self, db, two_day_plan):
        service = ProgressionService(db)
        await service.advance(two_day_plan.id)

        progress = await service.get_or_create(two_day_plan.id)
        assert progress.current_day_number == 2

    @pytest.mark.asyncio
    async def test_concurrent_calls_create_one_row(self, db, member):
        service = ProgressionService(db)

        results = await asyncio.gather(
            *(service.get_or_create(member.id) for _ in range(10))
        )

        assert {p.id for p in results} == {results[0].id}
        assert await ProgressRepository(db.db_path).count(member.id) == 1


class TestAdvance:
    """Tests for advance()."""

    @pytest.mark.asyncio
    async def test_increments_day(self, db, two_day_plan):
        progress = await ProgressionService(db).advance(
            two_day_plan.id, today=date(2024, 6, 1)
        )

        assert progress.current_day_number == 2
        assert progress.total_workouts_completed == 1
        assert progress.last_workout_date == date(2024, 6, 1)

    @pytest.mark.asyncio
    async def test_wraps_after_last_day(self, db, two_day_plan):
        service = ProgressionService(db)
        await service.advance(two_day_plan.id)
        progress = await service.advance(two_day_plan.id)

        assert progress.current_day_number == 1
        assert progress.total_workouts_completed == 2

    @pytest.mark.asyncio
    async def test_persists(self, db, two_day_plan):
        await ProgressionService(db).advance(two_day_plan.id)

        stored = await ProgressRepository(db.db_path).get(two_day_plan.id)
        assert stored.current_day_number == 2

    @pytest.mark.asyncio
    async def test_empty_sequence_is_noop(self, db, member):
        progress = await ProgressionService(db).advance(member.id)

        assert progress.current_day_number == 1
        assert progress.total_workouts_completed == 0
        assert progress.last_workout_date is None

class TestSetDayAndReset:
    """Tests for owner overrides."""

    @pytest.mark.asyncio
    async def test_set_day_within_bounds(self, db, two_day_plan):
        progress = await ProgressionService(db).set_day(two_day_plan.id, 2)
        assert progress.current_day_number == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("day", [0, 3, -1])
    async def test_set_day_out_of_bounds(self, db, two_day_plan, day):
        with pytest.raises(ValidationError):
            await ProgressionService(db).set_day(two_day_plan.id, day)

    @pytest.mark.asyncio
    async def test_set_day_without_sequence(self, db, member):
        service = ProgressionService(db)

        progress = await service.set_day(member.id, 4)
        assert progress.current_day_number == 4

        with pytest.raises(ValidationError):
            await service.set_day(member.id, 0)

    @pytest.mark.asyncio
    async def test_reset(self, db, two_day_plan):
        service = ProgressionService(db)
        await service.advance(two_day_plan.id)

        progress = await service.reset(two_day_plan.id)

        assert progress.current_day_number == 1
        assert progress.total_workouts_completed == 0
        assert progress.last_workout_date is None


class TestPlanChanges:
    """Progress follows the plan when days are removed or skipped."""

    @pytest.mark.asyncio
    async def test_removing_last_day_moves_user_back(self, db, two_day_plan):
        service = ProgressionService(db)
        await service.set_day(two_day_plan.id, 2)

        for entry in await SequenceService(db).get_sequence(two_day_plan.id, 2):
            await SequenceService(db).remove_entry(entry.id)

        stored = await ProgressRepository(db.db_path).get(two_day_plan.id)
        assert stored.current_day_number == 1

        progress = await service.advance(two_day_plan.id)
        assert progress.current_day_number == 1
        assert progress.total_workouts_completed == 1

    @pytest.mark.asyncio
    async def test_deleted_exercise_is_settled_on_read(self, db, two_day_plan, exercises):
        service = ProgressionService(db)
        await service.set_day(two_day_plan.id, 2)

        await ExerciseService(db).delete(exercises["C"].id)

        progress = await service.get_or_create(two_day_plan.id)
        assert progress.current_day_number == 1
        stored = await ProgressRepository(db.db_path).get(two_day_plan.id)
        assert stored.current_day_number == 1

    @pytest.mark.asyncio
    async def test_advance_skips_empty_days(self, db, gapped_plan):
        service = ProgressionService(db)

        progress = await service.advance(gapped_plan.id)
        assert progress.current_day_number == 3

        progress = await service.advance(gapped_plan.id)
        assert progress.current_day_number == 1
        assert progress.total_workouts_completed == 2

    @pytest.mark.asyncio
    async def test_emptied_middle_day_moves_user_forward(self, db, two_day_plan, exercises):
        sequence = SequenceService(db)
        await sequence.add_entry(two_day_plan.id, exercises["A"].id, 3)
        service = ProgressionService(db)
        await service.set_day(two_day_plan.id, 2)

        day_two = await sequence.get_sequence(two_day_plan.id, 2)
        await sequence.remove_entry(day_two[0].id)

        progress = await service.get_or_create(two_day_plan.id)
        assert progress.current_day_number == 3

    @pytest.mark.asyncio
    async def test_set_day_rejects_empty_day(self, db, gapped_plan):
        with pytest.raises(ValidationError):
            await ProgressionService(db).set_day(gapped_plan.id, 2)

    @pytest.mark.asyncio
    async def test_plan_added_later_starts_on_first_day(self, db, member, exercises):
        service = ProgressionService(db)
        await service.set_day(member.id, 4)

        await SequenceService(db).add_entry(member.id, exercises["A"].id, 1)

        progress = await service.get_or_create(member.id)
        assert progress.current_day_number == 1
