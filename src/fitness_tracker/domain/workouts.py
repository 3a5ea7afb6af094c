"""Domain models for workouts."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Exercise:
    """Exercise catalogue entry."""

    id: UUID
    name: str
    category: str | None
    muscle_group: str | None


@dataclass(frozen=True)
class ExerciseSet:
    """One performed set."""

    id: UUID
    set_number: int
    weight_kg: float | None
    reps: int | None
    duration_seconds: int | None
    rpe: int | None
    notes: str | None


@dataclass(frozen=True)
class WorkoutExercise:
    """An exercise performed within a workout."""

    id: UUID
    workout_id: UUID
    exercise_id: UUID | None
    set_order: int
    notes: str | None
    exercise: Exercise | None = None
    sets: list[ExerciseSet] = field(default_factory=list)


@dataclass(frozen=True)
class Workout:
    """A workout session."""

    id: UUID
    user_id: UUID
    name: str | None
    notes: str | None
    started_at: datetime | None
    ended_at: datetime | None
    exercise_count: int = 0
    exercises: list[WorkoutExercise] = field(default_factory=list)


@dataclass(frozen=True)
class WorkoutPage:
    """A page of workouts with the total row count."""

    data: list[Workout]
    total: int
    limit: int
    offset: int


@dataclass(frozen=True)
class WorkoutSetRow:
    """Exercise set flattened with its workout for analytics."""

    workout_id: UUID
    performed_at: datetime
    exercise_name: str | None
    weight_kg: float | None
    reps: float | None
    duration_seconds: float | None
