"""Analytics service for hydration, nutrition and workouts."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.analytics import (
    AggregationResult,
    AnalyticsWindow,
    MeasurementRecord,
)
from fitness_tracker.domain.hydration import WaterIntakeRow
from fitness_tracker.domain.models import GoalReference
from fitness_tracker.domain.nutrition import DailyNutritionSummary, FoodEntryRow
from fitness_tracker.domain.workouts import WorkoutSetRow
from fitness_tracker.services.aggregator import (
    Aggregator,
    Metric,
    aggregate,
    goal_percentage,
)

WATER_GOAL = "water"

NUTRITION_METRICS: tuple[Metric[FoodEntryRow], ...] = (
    Metric("calories", lambda row: row.calories, goal_key="calories"),
    Metric("protein_g", lambda row: row.protein_g, goal_key="protein", precision=1),
    Metric("carbs_g", lambda row: row.carbs_g, goal_key="carbs", precision=1),
    Metric("fat_g", lambda row: row.fat_g, goal_key="fat", precision=1),
)

WORKOUT_METRICS: tuple[Metric[WorkoutSetRow], ...] = (
    Metric("volume_kg", lambda row: _set_volume(row), precision=1),
    Metric("sets", lambda row: 1),
    Metric("reps", lambda row: row.reps),
    Metric("duration_minutes", lambda row: _set_minutes(row), precision=1),
)


class AnalyticsRepository(Protocol):
    """Read-only access to the raw records behind analytics."""

    def iter_water_intake(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> Iterable[WaterIntakeRow]:
        """Yield water intake entries within a time range."""

    def iter_food_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> Iterable[FoodEntryRow]:
        """Yield food entries with scaled macros within a time range."""

    def iter_workout_sets(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> Iterable[WorkoutSetRow]:
        """Yield exercise sets of workouts started within a time range."""


class GoalRepository(Protocol):
    """Persistence interface for user goals."""

    def list_active_goals(self, user_id: UUID) -> list[GoalReference]:
        """Return the user's active goals."""


@dataclass
class AnalyticsReport:
    """Aggregation result with the goals it was measured against."""

    result: AggregationResult
    goals: dict[str, float] = field(default_factory=dict)
    workouts_completed: int = 0


@dataclass
class AnalyticsService:
    """Service that feeds stored records through the aggregator."""

    repository: AnalyticsRepository
    goal_repository: GoalRepository
    tz: tzinfo = UTC

    def hydration(self, user_id: UUID, window: AnalyticsWindow) -> AnalyticsReport:
        """Return daily and hourly water intake for the window."""
        rows = self.repository.iter_water_intake(user_id, window.start, window.end)
        goals = self.get_goals(user_id)
        result = aggregate(
            (
                MeasurementRecord(timestamp=row.consumed_at, value=row.amount_ml)
                for row in rows
            ),
            window,
            goals,
            goal_key=WATER_GOAL,
            tz=self.tz,
        )
        return AnalyticsReport(result=result, goals=goals)

    def nutrition(self, user_id: UUID, window: AnalyticsWindow) -> AnalyticsReport:
        """Return macro totals, averages and top foods for the window."""
        rows = self.repository.iter_food_entries(user_id, window.start, window.end)
        goals = self.get_goals(user_id)
        result = self._nutrition_aggregator().aggregate(rows, window, goals)
        return AnalyticsReport(result=result, goals=goals)

    def workouts(self, user_id: UUID, window: AnalyticsWindow) -> AnalyticsReport:
        """Return training volume, set counts and top exercises for the window."""
        workout_ids: set[UUID] = set()

        def track_workouts(rows: Iterable[WorkoutSetRow]) -> Iterator[WorkoutSetRow]:
            for row in rows:
                workout_ids.add(row.workout_id)
                yield row

        rows = self.repository.iter_workout_sets(user_id, window.start, window.end)
        aggregator: Aggregator[WorkoutSetRow] = Aggregator(
            metrics=WORKOUT_METRICS,
            timestamp=lambda row: row.performed_at,
            label=lambda row: row.exercise_name,
            tz=self.tz,
        )
        result = aggregator.aggregate(track_workouts(rows), window)
        return AnalyticsReport(result=result, workouts_completed=len(workout_ids))

    def daily_nutrition(self, user_id: UUID, day: date) -> DailyNutritionSummary:
        """Return one calendar day's macro totals against active goals."""
        start = datetime.combine(day, time.min, tzinfo=self.tz)
        window = AnalyticsWindow(
            start=start, end=start + timedelta(days=1) - timedelta(microseconds=1)
        )
        rows = self.repository.iter_food_entries(user_id, window.start, window.end)
        goals = self.get_goals(user_id)
        result = self._nutrition_aggregator().aggregate(rows, window, goals)
        totals = result.totals
        return DailyNutritionSummary(
            day=day,
            calories=totals["calories"],
            protein_g=totals["protein_g"],
            carbs_g=totals["carbs_g"],
            fat_g=totals["fat_g"],
            entry_count=result.record_count,
            goals=goals,
            percentages={
                metric.goal_key: goal_percentage(
                    totals[metric.name], goals.get(metric.goal_key)
                )
                for metric in NUTRITION_METRICS
                if metric.goal_key is not None
            },
        )

    def get_goals(self, user_id: UUID) -> dict[str, float]:
        """Return active goal targets keyed by category."""
        return {
            goal.category: goal.target
            for goal in self.goal_repository.list_active_goals(user_id)
        }

    def _nutrition_aggregator(self) -> Aggregator[FoodEntryRow]:
        return Aggregator(
            metrics=NUTRITION_METRICS,
            timestamp=lambda row: row.consumed_at,
            label=lambda row: row.food_name,
            tz=self.tz,
        )


def _set_volume(row: WorkoutSetRow) -> float:
    if row.weight_kg is None or row.reps is None:
        return 0.0
    return row.weight_kg * row.reps


def _set_minutes(row: WorkoutSetRow) -> float | None:
    if row.duration_seconds is None:
        return None
    return row.duration_seconds / 60
