"""Workout logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import ForbiddenError, NotFoundError, StoreError
from fitness_tracker.domain.workouts import (
    ExerciseSet,
    Workout,
    WorkoutExercise,
    WorkoutPage,
)

logger = logging.getLogger(__name__)

WORKOUT_NOT_FOUND = "Workout not found"
EXERCISE_NOT_FOUND = "Exercise not found in this workout"


class WorkoutRepository(Protocol):
    """Persistence interface for workouts, their exercises and sets."""

    def create_workout(self, user_id: UUID, payload: dict[str, object]) -> Workout:
        """Insert a workout and return it."""

    def list_workouts(
        self, user_id: UUID, limit: int, offset: int
    ) -> tuple[list[Workout], int]:
        """Return a page of workouts, newest first, and the total count."""

    def get_workout(self, workout_id: UUID) -> Workout | None:
        """Return a workout with exercises and sets, if present."""

    def get_workout_owner(self, workout_id: UUID) -> UUID | None:
        """Return the owning user id for a workout, if present."""

    def update_workout(self, workout_id: UUID, payload: dict[str, object]) -> Workout:
        """Apply a partial update and return the workout."""

    def delete_workout(self, workout_id: UUID) -> None:
        """Delete a workout together with its exercises and sets."""

    def create_workout_exercise(
        self, workout_id: UUID, payload: dict[str, object]
    ) -> WorkoutExercise:
        """Attach an exercise to a workout and return it."""

    def create_exercise_sets(
        self, workout_exercise_id: UUID, sets: list[dict[str, object]]
    ) -> None:
        """Insert sets for a workout exercise."""

    def list_workout_exercises(self, workout_id: UUID) -> list[WorkoutExercise]:
        """Return a workout's exercises ordered by set order."""

    def get_workout_exercise(
        self, workout_id: UUID, workout_exercise_id: UUID
    ) -> WorkoutExercise | None:
        """Return one exercise of a workout with its sets, if present."""

    def update_workout_exercise(
        self, workout_id: UUID, workout_exercise_id: UUID, payload: dict[str, object]
    ) -> WorkoutExercise:
        """Apply a partial update to a workout exercise."""

    def delete_workout_exercise(
        self, workout_id: UUID, workout_exercise_id: UUID
    ) -> None:
        """Delete a workout exercise together with its sets."""

    def replace_exercise_sets(
        self, workout_exercise_id: UUID, sets: list[dict[str, object]]
    ) -> list[ExerciseSet]:
        """Replace all sets of a workout exercise in one transaction."""


@dataclass
class WorkoutService:
    """Service for managing a user's workouts."""

    repository: WorkoutRepository

    def create_workout(self, user_id: UUID, payload: dict[str, object]) -> Workout:
        """Create a workout, defaulting the start time to now."""
        values = dict(payload)
        if values.get("started_at") is None:
            values["started_at"] = datetime.now(tz=UTC).isoformat()
        return self.repository.create_workout(user_id, values)

    def list_workouts(
        self, user_id: UUID, limit: int = 10, offset: int = 0
    ) -> WorkoutPage:
        """Return a page of the user's workouts."""
        workouts, total = self.repository.list_workouts(user_id, limit, offset)
        return WorkoutPage(data=workouts, total=total, limit=limit, offset=offset)

    def get_workout(self, user_id: UUID, workout_id: UUID) -> Workout:
        """Return a workout owned by the user."""
        workout = self.repository.get_workout(workout_id)
        if workout is None:
            raise NotFoundError(WORKOUT_NOT_FOUND)
        if workout.user_id != user_id:
            raise ForbiddenError
        return workout

    def update_workout(
        self, user_id: UUID, workout_id: UUID, payload: dict[str, object]
    ) -> Workout:
        """Update a workout owned by the user."""
        self._require_owned(user_id, workout_id)
        if not payload:
            return self.get_workout(user_id, workout_id)
        return self.repository.update_workout(workout_id, payload)

    def delete_workout(self, user_id: UUID, workout_id: UUID) -> None:
        """Delete a workout owned by the user."""
        self._require_owned(user_id, workout_id)
        self.repository.delete_workout(workout_id)

    def add_exercise(
        self, user_id: UUID, workout_id: UUID, payload: dict[str, object]
    ) -> WorkoutExercise:
        """Attach an exercise and its sets to a workout."""
        self._require_owned(user_id, workout_id)
        values = dict(payload)
        sets = values.pop("sets", None) or []
        if not values.get("set_order"):
            values["set_order"] = 0
        exercise = self.repository.create_workout_exercise(workout_id, values)
        if sets:
            try:
                self.repository.create_exercise_sets(exercise.id, sets)
            except StoreError:
                logger.exception(
                    "Failed to add sets to exercise",
                    extra={"workout_exercise_id": str(exercise.id)},
                )
        detail = self.repository.get_workout_exercise(workout_id, exercise.id)
        return detail or exercise

    def list_exercises(self, user_id: UUID, workout_id: UUID) -> list[WorkoutExercise]:
        """Return the exercises of a workout owned by the user."""
        self._require_owned(user_id, workout_id)
        return self.repository.list_workout_exercises(workout_id)

    def get_exercise(
        self, user_id: UUID, workout_id: UUID, workout_exercise_id: UUID
    ) -> WorkoutExercise:
        """Return one exercise of a workout owned by the user."""
        self._require_owned(user_id, workout_id)
        return self._require_exercise(workout_id, workout_exercise_id)

    def update_exercise(
        self,
        user_id: UUID,
        workout_id: UUID,
        workout_exercise_id: UUID,
        payload: dict[str, object],
    ) -> WorkoutExercise:
        """Update notes or ordering of a workout exercise."""
        self._require_owned(user_id, workout_id)
        exercise = self._require_exercise(workout_id, workout_exercise_id)
        if not payload:
            return exercise
        return self.repository.update_workout_exercise(
            workout_id, workout_exercise_id, payload
        )

    def delete_exercise(
        self, user_id: UUID, workout_id: UUID, workout_exercise_id: UUID
    ) -> None:
        """Remove an exercise from a workout owned by the user."""
        self._require_owned(user_id, workout_id)
        self.repository.delete_workout_exercise(workout_id, workout_exercise_id)

    def replace_sets(
        self,
        user_id: UUID,
        workout_id: UUID,
        workout_exercise_id: UUID,
        sets: list[dict[str, object]],
    ) -> list[ExerciseSet]:
        """Replace the sets recorded for a workout exercise."""
        self._require_owned(user_id, workout_id)
        self._require_exercise(workout_id, workout_exercise_id)
        return self.repository.replace_exercise_sets(workout_exercise_id, sets)

    def _require_owned(self, user_id: UUID, workout_id: UUID) -> None:
        owner = self.repository.get_workout_owner(workout_id)
        if owner is None:
            raise NotFoundError(WORKOUT_NOT_FOUND)
        if owner != user_id:
            raise ForbiddenError

    def _require_exercise(
        self, workout_id: UUID, workout_exercise_id: UUID
    ) -> WorkoutExercise:
        exercise = self.repository.get_workout_exercise(
            workout_id, workout_exercise_id
        )
        if exercise is None:
            raise NotFoundError(EXERCISE_NOT_FOUND)
        return exercise
