"""Request bodies for the JSON API."""

import datetime

from pydantic import BaseModel, Field

from ..models.user import UserRole


class LoginRequest(BaseModel):
    name: str
    password: str


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: UserRole = UserRole.USER
    avatar_color: str | None = None


class UserUpdate(BaseModel):
    name: str | None = None
    password: str | None = None
    role: UserRole | None = None
    avatar_color: str | None = None


class ExerciseCreate(BaseModel):
    name: str = Field(min_length=1)
    category: str | None = None  # Inferred from the name when omitted
    target_sets: int = Field(default=3, ge=1)
    target_reps: int = Field(default=12, ge=1)
    target_weight: float = Field(default=0.0, ge=0)
    gif_url: str | None = None
    created_for_user_id: int | None = None


class ExerciseUpdate(BaseModel):
    name: str | None = None
    category: str | None = None
    target_sets: int | None = Field(default=None, ge=1)
    target_reps: int | None = Field(default=None, ge=1)
    target_weight: float | None = Field(default=None, ge=0)
    gif_url: str | None = None


class SequenceEntryCreate(BaseModel):
    user_id: int
    exercise_id: int
    day_number: int


class ReorderRequest(BaseModel):
    user_id: int
    day_number: int
    entry_ids: list[int]


class UserRef(BaseModel):
    user_id: int


class SetDayRequest(BaseModel):
    user_id: int
    day_number: int


class SessionMark(BaseModel):
    user_id: int
    exercise_id: int
    completed: bool = True
    day_number: int | None = None  # Defaults to the user's current day


class SetDataIn(BaseModel):
    set_number: int = Field(ge=1)
    target_weight: float = 0
    target_reps: int = 0
    actual_weight: float = 0
    actual_reps: int = 0
    completed: bool = False


class WorkoutLogCreate(BaseModel):
    user_id: int
    exercise_id: int
    actual_sets: int = Field(ge=0)
    actual_reps: int = Field(ge=0)
    weight: float = Field(default=0, ge=0)
    date: datetime.date | None = None
    sets_data: list[SetDataIn] | None = None


class WorkoutLogUpdate(BaseModel):
    id: int
    actual_sets: int | None = Field(default=None, ge=0)
    actual_reps: int | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)
    sets_data: list[SetDataIn] | None = None
