"""Pydantic models for request payloads."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


def _reject_null(value: object) -> object:
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


class FoodEntryCreate(BaseModel):
    """Payload for logging a food entry."""

    food_id: UUID
    serving_count: float = Field(gt=0)
    meal_type: MealType | None = None
    consumed_at: datetime | None = None


class FoodEntryUpdate(BaseModel):
    """Partial update for a food entry."""

    serving_count: float | None = Field(default=None, gt=0)
    meal_type: MealType | None = None
    consumed_at: datetime | None = None

    reject_nulls = field_validator("serving_count", "meal_type", "consumed_at")(
        _reject_null
    )


class WorkoutPayload(BaseModel):
    """Payload for creating or updating a workout."""

    name: str | None = None
    notes: str | None = None
    started_at: datetime | None = None
    ended_at: datetime | None = None

    reject_nulls = field_validator("name", "started_at")(_reject_null)


class ExerciseSetPayload(BaseModel):
    """One set of an exercise."""

    id: UUID | None = None
    set_number: int = Field(gt=0)
    weight_kg: float | None = Field(default=None, gt=0)
    reps: int | None = Field(default=None, gt=0)
    duration_seconds: int | None = Field(default=None, gt=0)
    rpe: int | None = Field(default=None, ge=1, le=10)
    notes: str | None = None


class WorkoutExerciseCreate(BaseModel):
    """Payload for adding an exercise to a workout."""

    exercise_id: UUID
    notes: str | None = None
    set_order: int | None = Field(default=None, gt=0)
    sets: list[ExerciseSetPayload] | None = None


class WorkoutExerciseUpdate(BaseModel):
    """Partial update for a workout exercise."""

    notes: str | None = None
    set_order: int | None = Field(default=None, gt=0)

    reject_nulls = field_validator("set_order")(_reject_null)
