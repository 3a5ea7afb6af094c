"""Supabase repository for workouts, workout exercises and sets."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_support import (
    optional_float,
    optional_int,
    parse_datetime,
    parse_uuid,
    store_errors,
)
from fitness_tracker.domain.errors import StoreError
from fitness_tracker.domain.workouts import (
    Exercise,
    ExerciseSet,
    Workout,
    WorkoutExercise,
)
from fitness_tracker.services.workouts import WorkoutRepository

WORKOUT_COLUMNS = "id, user_id, name, notes, started_at, ended_at"
SET_COLUMNS = "id, set_number, weight_kg, reps, duration_seconds, rpe, notes"
WORKOUT_EXERCISE_COLUMNS = (
    "id, workout_id, exercise_id, set_order, notes, "
    "exercise:exercises(id, name, category, muscle_group), "
    f"sets:exercise_sets({SET_COLUMNS})"
)
WORKOUT_DETAIL_COLUMNS = (
    f"{WORKOUT_COLUMNS}, workout_exercises({WORKOUT_EXERCISE_COLUMNS})"
)


@dataclass
class SupabaseWorkoutRepository(WorkoutRepository):
    """Supabase implementation for workout persistence."""

    client: Client

    def create_workout(self, user_id: UUID, payload: dict[str, object]) -> Workout:
        """Insert a workout row and return it."""
        with store_errors("create workout"):
            response = (
                self.client.table("workouts")
                .insert({**payload, "user_id": str(user_id)})
                .execute()
            )
        if not response.data:
            raise StoreError("Failed to create workout")
        return _parse_workout(response.data[0])

    def list_workouts(
        self, user_id: UUID, limit: int, offset: int
    ) -> tuple[list[Workout], int]:
        """Return a page of workouts with their exercise counts."""
        with store_errors("fetch workouts"):
            response = (
                self.client.table("workouts")
                .select(f"{WORKOUT_COLUMNS}, workout_exercises(id)", count="exact")
                .eq("user_id", str(user_id))
                .order("started_at", desc=True)
                .order("id", desc=False)
                .range(offset, offset + limit - 1)
                .execute()
            )
        rows = response.data or []
        workouts = [_parse_workout(row) for row in rows]
        total = response.count if response.count is not None else len(workouts)
        return workouts, total

    def get_workout(self, workout_id: UUID) -> Workout | None:
        """Return a workout with its exercises and sets."""
        with store_errors("fetch workout"):
            response = (
                self.client.table("workouts")
                .select(WORKOUT_DETAIL_COLUMNS)
                .eq("id", str(workout_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_workout(response.data[0])

    def get_workout_owner(self, workout_id: UUID) -> UUID | None:
        """Return the id of the user owning a workout."""
        with store_errors("fetch workout"):
            response = (
                self.client.table("workouts")
                .select("user_id")
                .eq("id", str(workout_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return parse_uuid(response.data[0].get("user_id"))

    def update_workout(self, workout_id: UUID, payload: dict[str, object]) -> Workout:
        """Apply a partial update and return the workout row."""
        with store_errors("update workout"):
            response = (
                self.client.table("workouts")
                .update(payload)
                .eq("id", str(workout_id))
                .execute()
            )
        if not response.data:
            raise StoreError("Failed to update workout")
        return _parse_workout(response.data[0])

    def delete_workout(self, workout_id: UUID) -> None:
        """Delete a workout; exercises and sets cascade in the database."""
        with store_errors("delete workout"):
            self.client.table("workouts").delete().eq("id", str(workout_id)).execute()

    def create_workout_exercise(
        self, workout_id: UUID, payload: dict[str, object]
    ) -> WorkoutExercise:
        """Insert a workout exercise row and return it."""
        with store_errors("add exercise to workout"):
            response = (
                self.client.table("workout_exercises")
                .insert({**payload, "workout_id": str(workout_id)})
                .execute()
            )
        if not response.data:
            raise StoreError("Failed to add exercise to workout")
        return _parse_workout_exercise(response.data[0])

    def create_exercise_sets(
        self, workout_exercise_id: UUID, sets: list[dict[str, object]]
    ) -> None:
        """Insert set rows for a workout exercise."""
        rows = [
            {**exercise_set, "workout_exercise_id": str(workout_exercise_id)}
            for exercise_set in sets
        ]
        with store_errors("add sets to exercise"):
            self.client.table("exercise_sets").insert(rows).execute()

    def list_workout_exercises(self, workout_id: UUID) -> list[WorkoutExercise]:
        """Return a workout's exercises ordered by set order."""
        with store_errors("fetch exercises"):
            response = (
                self.client.table("workout_exercises")
                .select(WORKOUT_EXERCISE_COLUMNS)
                .eq("workout_id", str(workout_id))
                .order("set_order", desc=False)
                .execute()
            )
        return [_parse_workout_exercise(row) for row in response.data or []]

    def get_workout_exercise(
        self, workout_id: UUID, workout_exercise_id: UUID
    ) -> WorkoutExercise | None:
        """Return one workout exercise with its sets."""
        with store_errors("fetch exercise"):
            response = (
                self.client.table("workout_exercises")
                .select(WORKOUT_EXERCISE_COLUMNS)
                .eq("id", str(workout_exercise_id))
                .eq("workout_id", str(workout_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_workout_exercise(response.data[0])

    def update_workout_exercise(
        self, workout_id: UUID, workout_exercise_id: UUID, payload: dict[str, object]
    ) -> WorkoutExercise:
        """Apply a partial update to a workout exercise."""
        with store_errors("update exercise"):
            response = (
                self.client.table("workout_exercises")
                .update(payload)
                .eq("id", str(workout_exercise_id))
                .eq("workout_id", str(workout_id))
                .execute()
            )
        if not response.data:
            raise StoreError("Failed to update exercise")
        return _parse_workout_exercise(response.data[0])

    def delete_workout_exercise(
        self, workout_id: UUID, workout_exercise_id: UUID
    ) -> None:
        """Delete a workout exercise; its sets cascade in the database."""
        with store_errors("delete exercise"):
            self.client.table("workout_exercises").delete().eq(
                "id", str(workout_exercise_id)
            ).eq("workout_id", str(workout_id)).execute()

    def replace_exercise_sets(
        self, workout_exercise_id: UUID, sets: list[dict[str, object]]
    ) -> list[ExerciseSet]:
        """Replace sets through the `update_exercise_sets` database function."""
        with store_errors("update sets"):
            response = self.client.rpc(
                "update_exercise_sets",
                {"p_exercise_id": str(workout_exercise_id), "p_sets": sets},
            ).execute()
        data = response.data
        if not isinstance(data, list):
            return []
        return [_parse_set(row) for row in data]


def _parse_workout(row: dict[str, Any]) -> Workout:
    exercise_rows = row.get("workout_exercises") or []
    return Workout(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=row.get("name"),
        notes=row.get("notes"),
        started_at=parse_datetime(row.get("started_at")),
        ended_at=parse_datetime(row.get("ended_at")),
        exercise_count=len(exercise_rows),
        exercises=[
            _parse_workout_exercise(exercise_row)
            for exercise_row in exercise_rows
            if "workout_id" in exercise_row
        ],
    )


def _parse_workout_exercise(row: dict[str, Any]) -> WorkoutExercise:
    exercise_row = row.get("exercise")
    return WorkoutExercise(
        id=UUID(str(row["id"])),
        workout_id=UUID(str(row["workout_id"])),
        exercise_id=parse_uuid(row.get("exercise_id")),
        set_order=int(row.get("set_order") or 0),
        notes=row.get("notes"),
        exercise=_parse_exercise(exercise_row)
        if isinstance(exercise_row, dict)
        else None,
        sets=sorted(
            (_parse_set(set_row) for set_row in row.get("sets") or []),
            key=lambda exercise_set: exercise_set.set_number,
        ),
    )


def _parse_exercise(row: dict[str, Any]) -> Exercise:
    return Exercise(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        category=row.get("category"),
        muscle_group=row.get("muscle_group"),
    )


def _parse_set(row: dict[str, Any]) -> ExerciseSet:
    return ExerciseSet(
        id=UUID(str(row["id"])),
        set_number=int(row.get("set_number") or 0),
        weight_kg=optional_float(row.get("weight_kg")),
        reps=optional_int(row.get("reps")),
        duration_seconds=optional_int(row.get("duration_seconds")),
        rpe=optional_int(row.get("rpe")),
        notes=row.get("notes"),
    )
