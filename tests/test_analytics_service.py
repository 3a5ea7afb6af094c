"""Tests for the analytics service."""

from datetime import UTC, date, datetime
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from fitness_tracker.domain.analytics import AnalyticsWindow
from fitness_tracker.domain.hydration import WaterIntakeRow
from fitness_tracker.domain.models import GoalReference
from fitness_tracker.domain.nutrition import FoodEntryRow
from fitness_tracker.domain.workouts import WorkoutSetRow
from fitness_tracker.services.analytics import AnalyticsService
from tests.conftest import (
    USER_ID,
    InMemoryAnalyticsRepository,
    InMemoryGoalRepository,
)

WINDOW = AnalyticsWindow(
    start=datetime(2024, 5, 1, tzinfo=UTC), end=datetime(2024, 5, 31, tzinfo=UTC)
)


def _food(day: int, hour: int, name: str, calories: float) -> FoodEntryRow:
    return FoodEntryRow(
        consumed_at=datetime(2024, 5, day, hour, tzinfo=UTC),
        food_name=name,
        calories=calories,
        protein_g=10.0,
        carbs_g=None,
        fat_g=2.5,
    )


def _set(
    workout: UUID, day: int, name: str, weight: float | None, reps: float | None
) -> WorkoutSetRow:
    return WorkoutSetRow(
        workout_id=workout,
        performed_at=datetime(2024, 5, day, 18, tzinfo=UTC),
        exercise_name=name,
        weight_kg=weight,
        reps=reps,
        duration_seconds=None,
    )


def test_hydration_measures_against_water_goal() -> None:
    repository = InMemoryAnalyticsRepository(
        water={
            USER_ID: [
                WaterIntakeRow(datetime(2024, 5, 2, 8, tzinfo=UTC), 500),
                WaterIntakeRow(datetime(2024, 5, 2, 13, tzinfo=UTC), 700),
                WaterIntakeRow(datetime(2024, 5, 3, 8, tzinfo=UTC), 1000),
                WaterIntakeRow(datetime(2024, 6, 3, 8, tzinfo=UTC), 9000),
            ]
        }
    )
    goals = InMemoryGoalRepository(
        goals={USER_ID: [GoalReference(category="water", target=2200)]}
    )
    service = AnalyticsService(repository, goals)

    report = service.hydration(USER_ID, WINDOW)

    assert report.result.totals["value"] == 2200
    assert report.result.average_daily["value"] == 1100
    assert report.result.goal_percentages == {"water": 50}
    assert report.goals == {"water": 2200}
    assert repository.windows == [(WINDOW.start, WINDOW.end)]


def test_hydration_without_goal_reports_null_percentage() -> None:
    repository = InMemoryAnalyticsRepository(
        water={USER_ID: [WaterIntakeRow(datetime(2024, 5, 2, 8, tzinfo=UTC), 250)]}
    )
    service = AnalyticsService(repository, InMemoryGoalRepository())

    report = service.hydration(USER_ID, WINDOW)

    assert report.result.goal_percentages == {"water": None}


def test_nutrition_ranks_foods_and_uses_macro_goals() -> None:
    repository = InMemoryAnalyticsRepository(
        food={
            USER_ID: [
                _food(1, 8, "Oats", 300),
                _food(1, 13, "Rice", 500),
                _food(2, 8, "Oats", 300),
                _food(2, 19, "Salmon", 600),
            ]
        }
    )
    goals = InMemoryGoalRepository(
        goals={
            USER_ID: [
                GoalReference(category="calories", target=2000),
                GoalReference(category="protein", target=40),
            ]
        }
    )
    service = AnalyticsService(repository, goals)

    report = service.nutrition(USER_ID, WINDOW)
    result = report.result

    assert result.totals["calories"] == 1700
    assert result.average_daily["calories"] == 850
    assert result.average_daily["protein_g"] == 20.0
    assert result.totals["carbs_g"] == 0
    assert result.goal_percentages == {
        "calories": 43,
        "protein": 50,
        "carbs": None,
        "fat": None,
    }
    assert [(label.name, label.count) for label in result.top_labels] == [
        ("Oats", 2),
        ("Rice", 1),
        ("Salmon", 1),
    ]


def test_workouts_count_distinct_workouts_and_volume() -> None:
    first, second = uuid4(), uuid4()
    repository = InMemoryAnalyticsRepository(
        sets={
            USER_ID: [
                _set(first, 4, "Squat", 100, 5),
                _set(first, 4, "Squat", 100, 5),
                _set(first, 4, "Plank", None, None),
                _set(second, 6, "Bench Press", 60, 8),
            ]
        }
    )
    service = AnalyticsService(repository, InMemoryGoalRepository())

    report = service.workouts(USER_ID, WINDOW)
    result = report.result

    assert report.workouts_completed == 2
    assert result.totals["volume_kg"] == 1480
    assert result.totals["sets"] == 4
    assert result.totals["reps"] == 18
    assert result.days_tracked == 2
    assert result.top_labels[0].name == "Squat"


def test_daily_nutrition_limits_to_one_day() -> None:
    repository = InMemoryAnalyticsRepository(
        food={
            USER_ID: [
                _food(10, 7, "Eggs", 200),
                _food(10, 20, "Pasta", 700),
                _food(11, 7, "Eggs", 200),
            ]
        }
    )
    goals = InMemoryGoalRepository(
        goals={USER_ID: [GoalReference(category="calories", target=1800)]}
    )
    service = AnalyticsService(repository, goals)

    summary = service.daily_nutrition(USER_ID, date(2024, 5, 10))

    assert summary.calories == 900
    assert summary.protein_g == 20
    assert summary.entry_count == 2
    assert summary.percentages["calories"] == 50
    assert summary.goals == {"calories": 1800}


def test_daily_nutrition_uses_service_time_zone() -> None:
    repository = InMemoryAnalyticsRepository(
        food={USER_ID: [_food(11, 2, "Late snack", 150)]}
    )
    service = AnalyticsService(
        repository, InMemoryGoalRepository(), tz=ZoneInfo("America/Los_Angeles")
    )

    summary = service.daily_nutrition(USER_ID, date(2024, 5, 10))

    assert summary.calories == 150
    assert summary.percentages["calories"] is None
