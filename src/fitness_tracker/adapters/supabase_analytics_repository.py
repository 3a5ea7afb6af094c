"""Supabase repository streaming raw records for analytics."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_support import (
    DEFAULT_PAGE_SIZE,
    iter_pages,
    optional_float,
    parse_datetime,
    parse_uuid,
)
from fitness_tracker.domain.hydration import WaterIntakeRow
from fitness_tracker.domain.nutrition import FoodEntryRow
from fitness_tracker.domain.workouts import WorkoutSetRow
from fitness_tracker.services.analytics import AnalyticsRepository


@dataclass
class SupabaseAnalyticsRepository(AnalyticsRepository):
    """Supabase implementation of the analytics record source."""

    client: Client
    page_size: int = DEFAULT_PAGE_SIZE

    def iter_water_intake(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> Iterator[WaterIntakeRow]:
        """Yield water intake rows in the time range."""

        def query() -> Any:
            return (
                self.client.table("water_intake")
                .select("amount_ml, consumed_at")
                .eq("user_id", str(user_id))
                .gte("consumed_at", start.isoformat())
                .lte("consumed_at", end.isoformat())
                .order("consumed_at", desc=True)
                .order("id", desc=False)
            )

        for row in iter_pages(query, "fetch hydration data", self.page_size):
            consumed_at = parse_datetime(row.get("consumed_at"))
            if consumed_at is None:
                continue
            yield WaterIntakeRow(
                consumed_at=consumed_at,
                amount_ml=optional_float(row.get("amount_ml")),
            )

    def iter_food_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> Iterator[FoodEntryRow]:
        """Yield food entries joined with their food, scaled by servings."""

        def query() -> Any:
            return (
                self.client.table("food_entries")
                .select(
                    "serving_count, consumed_at, "
                    "food:foods(name, calories, protein_g, carbs_g, fat_g)"
                )
                .eq("user_id", str(user_id))
                .gte("consumed_at", start.isoformat())
                .lte("consumed_at", end.isoformat())
                .order("consumed_at", desc=False)
                .order("id", desc=False)
            )

        for row in iter_pages(query, "fetch nutrition data", self.page_size):
            entry = _parse_food_entry_row(row)
            if entry is not None:
                yield entry

    def iter_workout_sets(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> Iterator[WorkoutSetRow]:
        """Yield exercise sets of workouts started in the time range."""

        def query() -> Any:
            return (
                self.client.table("workouts")
                .select(
                    "id, started_at, workout_exercises("
                    "exercise:exercises(name), "
                    "sets:exercise_sets(weight_kg, reps, duration_seconds))"
                )
                .eq("user_id", str(user_id))
                .gte("started_at", start.isoformat())
                .lte("started_at", end.isoformat())
                .order("started_at", desc=False)
                .order("id", desc=False)
            )

        for row in iter_pages(query, "fetch workout statistics", self.page_size):
            yield from _flatten_workout(row)


def _parse_food_entry_row(row: dict[str, Any]) -> FoodEntryRow | None:
    consumed_at = parse_datetime(row.get("consumed_at"))
    if consumed_at is None:
        return None
    food = row.get("food") or {}
    servings = optional_float(row.get("serving_count")) or 1.0

    def scaled(column: str) -> float | None:
        value = optional_float(food.get(column))
        return None if value is None else value * servings

    return FoodEntryRow(
        consumed_at=consumed_at,
        food_name=food.get("name"),
        calories=scaled("calories"),
        protein_g=scaled("protein_g"),
        carbs_g=scaled("carbs_g"),
        fat_g=scaled("fat_g"),
    )


def _flatten_workout(row: dict[str, Any]) -> Iterator[WorkoutSetRow]:
    workout_id = parse_uuid(row.get("id"))
    performed_at = parse_datetime(row.get("started_at"))
    if workout_id is None or performed_at is None:
        return
    for workout_exercise in row.get("workout_exercises") or []:
        exercise = workout_exercise.get("exercise") or {}
        for exercise_set in workout_exercise.get("sets") or []:
            yield WorkoutSetRow(
                workout_id=workout_id,
                performed_at=performed_at,
                exercise_name=exercise.get("name"),
                weight_kg=optional_float(exercise_set.get("weight_kg")),
                reps=optional_float(exercise_set.get("reps")),
                duration_seconds=optional_float(exercise_set.get("duration_seconds")),
            )
