"""Tests for sequence definition access."""

import pytest

from gym_logbook.errors import NotFoundError, ValidationError
from gym_logbook.services.exercises import ExerciseService
from gym_logbook.services.sequence import SequenceService
from gym_logbook.services.users import UserService


class TestAddEntry:
    """Tests for add_entry."""

    @pytest.mark.asyncio
    async def test_empty_day_starts_at_zero(self, db, member, exercises):
        entry = await SequenceService(db).add_entry(member.id, exercises["A"].id, 1)

        assert entry.sort_order == 0
        assert entry.exercise.name == "Squat"

    @pytest.mark.asyncio
    async def test_appends_after_max(self, db, member, exercises):
        service = SequenceService(db)
        await service.add_entry(member.id, exercises["A"].id, 1)
        second = await service.add_entry(member.id, exercises["B"].id, 1)
        other_day = await service.add_entry(member.id, exercises["C"].id, 2)

        assert second.sort_order == 1
        assert other_day.sort_order == 0

    @pytest.mark.asyncio
    async def test_appends_after_gap(self, db, two_day_plan, exercises):
        """Removing the first entry leaves a gap; new entries still go last."""
        service = SequenceService(db)
        day_one = await service.get_sequence(two_day_plan.id, 1)
        await service.remove_entry(day_one[0].id)

        entry = await service.add_entry(two_day_plan.id, exercises["C"].id, 1)
        assert entry.sort_order == 2

    @pytest.mark.asyncio
    async def test_rejects_day_zero(self, db, member, exercises):
        with pytest.raises(ValidationError):
            await SequenceService(db).add_entry(member.id, exercises["A"].id, 0)

    @pytest.mark.asyncio
    async def test_rejects_unknown_exercise(self, db, member):
        with pytest.raises(NotFoundError):
            await SequenceService(db).add_entry(member.id, 999, 1)

    @pytest.mark.asyncio
    async def test_rejects_unknown_user(self, db, exercises):
        with pytest.raises(NotFoundError):
            await SequenceService(db).add_entry(999, exercises["A"].id, 1)

    @pytest.mark.asyncio
    async def test_rejects_other_users_exercise(self, db, member):
        other = await UserService(db).create("Jordan", "pw")
        scoped = await ExerciseService(db).create(
            "Rehab Row", category="back", created_for_user_id=other.id
        )

        with pytest.raises(ValidationError):
            await SequenceService(db).add_entry(member.id, scoped.id, 1)


class TestReads:
    """Tests for get_sequence / get_days / max_day."""

    @pytest.mark.asyncio
    async def test_get_days(self, db, two_day_plan, exercises):
        days = await SequenceService(db).get_days(two_day_plan.id)

        assert [d.day_number for d in days] == [1, 2]
        assert days[0].exercise_ids == [exercises["A"].id, exercises["B"].id]
        assert [e.name for e in days[1].exercises] == ["Pull Up"]

    @pytest.mark.asyncio
    async def test_max_day(self, db, member, two_day_plan):
        service = SequenceService(db)
        assert await service.max_day(two_day_plan.id) == 2

        other = await UserService(db).create("Jordan", "pw")
        assert await service.max_day(other.id) == 0

    @pytest.mark.asyncio
    async def test_filtered_by_day(self, db, two_day_plan, exercises):
        service = SequenceService(db)
        entries = await service.get_sequence(two_day_plan.id, 2)

        assert [e.exercise_id for e in entries] == [exercises["C"].id]
        assert await service.scheduled_ids(two_day_plan.id, 1) == [
            exercises["A"].id,
            exercises["B"].id,
        ]

    @pytest.mark.asyncio
    async def test_deleted_exercise_drops_out_of_plan(self, db, two_day_plan, exercises):
        await ExerciseService(db).delete(exercises["C"].id)

        assert await SequenceService(db).max_day(two_day_plan.id) == 1


class TestReorder:
    """Tests for reorder."""

    @pytest.mark.asyncio
    async def test_applies_permutation(self, db, member, exercises):
        service = SequenceService(db)
        ids = []
        for key in ("A", "B", "C"):
            entry = await service.add_entry(member.id, exercises[key].id, 1)
            ids.append(entry.id)

        new_order = [ids[2], ids[0], ids[1]]
        entries = await service.reorder(member.id, 1, new_order)

        assert [e.id for e in entries] == new_order
        assert [e.sort_order for e in entries] == [0, 1, 2]

        reread = await service.get_sequence(member.id, 1)
        assert [e.id for e in reread] == new_order

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mutate", [
        lambda ids: ids[:-1],  # missing one
        lambda ids: ids + [ids[0]],  # duplicate
        lambda ids: ids + [9999],  # foreign id
    ])
    async def test_invalid_ids_change_nothing(self, db, two_day_plan, mutate):
        service = SequenceService(db)
        before = await service.get_sequence(two_day_plan.id, 1)
        ids = [e.id for e in reversed(before)]

        with pytest.raises(ValidationError):
            await service.reorder(two_day_plan.id, 1, mutate(ids))

        after = await service.get_sequence(two_day_plan.id, 1)
        assert [(e.id, e.sort_order) for e in after] == [(e.id, e.sort_order) for e in before]

    @pytest.mark.asyncio
    async def test_other_days_untouched(self, db, two_day_plan):
        service = SequenceService(db)
        day_one = await service.get_sequence(two_day_plan.id, 1)
        day_two_before = await service.get_sequence(two_day_plan.id, 2)

        await service.reorder(two_day_plan.id, 1, [e.id for e in reversed(day_one)])

        day_two_after = await service.get_sequence(two_day_plan.id, 2)
        assert [e.sort_order for e in day_two_after] == [e.sort_order for e in day_two_before]


@pytest.mark.asyncio
async def test_remove_missing_entry(db):
    with pytest.raises(NotFoundError):
        await SequenceService(db).remove_entry(12345)
