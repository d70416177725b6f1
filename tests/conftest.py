"""Pytest configuration and fixtures."""

import pytest

from gym_logbook.config import Settings
from gym_logbook.db import init_db
from gym_logbook.models.session import CompletionRule
from gym_logbook.services.exercises import ExerciseService
from gym_logbook.services.sequence import SequenceService
from gym_logbook.services.users import UserService


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway data directory."""
    return Settings(
        _env_file=None,
        data_dir=tmp_path,
        completion_rule=CompletionRule.COUNT,
        session_same_day_only=False,
    )


@pytest.fixture
async def db(settings) -> Settings:
    """Settings with an initialized, empty schema."""
    await init_db(settings.db_path)
    return settings


@pytest.fixture
async def owner(db):
    """The gym owner account."""
    user, _ = await UserService(db).ensure_owner("Owner", "admin")
    return user


@pytest.fixture
async def member(db):
    """A regular gym member."""
    return await UserService(db).create("Alex", "secret")


@pytest.fixture
async def exercises(db):
    """Three global exercises: A and B for day 1, C for day 2."""
    service = ExerciseService(db)
    return {
        "A": await service.create("Squat", category="leg"),
        "B": await service.create("Bench Press", category="chest"),
        "C": await service.create("Pull Up", category="back"),
    }


@pytest.fixture
async def two_day_plan(db, member, exercises):
    """Day 1 = [A, B], day 2 = [C] for the member."""
    service = SequenceService(db)
    await service.add_entry(member.id, exercises["A"].id, 1)
    await service.add_entry(member.id, exercises["B"].id, 1)
    await service.add_entry(member.id, exercises["C"].id, 2)
    return member


@pytest.fixture
async def gapped_plan(db, member, exercises):
    """Day 1 = [A], day 3 = [C]; day 2 has nothing scheduled."""
    service = SequenceService(db)
    await service.add_entry(member.id, exercises["A"].id, 1)
    await service.add_entry(member.id, exercises["C"].id, 3)
    return member
