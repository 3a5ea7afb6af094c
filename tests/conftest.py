"""Shared test fixtures."""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from fitness_tracker.api.app import create_app
from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.errors import StoreError
from fitness_tracker.domain.hydration import WaterIntakeRow
from fitness_tracker.domain.models import GoalReference
from fitness_tracker.domain.nutrition import Food, FoodEntry, FoodEntryRow
from fitness_tracker.domain.workouts import (
    ExerciseSet,
    Workout,
    WorkoutExercise,
    WorkoutSetRow,
)
from fitness_tracker.services.analytics import (
    AnalyticsRepository,
    AnalyticsService,
    GoalRepository,
)
from fitness_tracker.services.auth import AuthService, IdentityProvider
from fitness_tracker.services.nutrition import FoodEntryRepository, FoodEntryService
from fitness_tracker.services.workouts import WorkoutRepository, WorkoutService

USER_ID = UUID("6f1c2d9e-2f0a-4b57-9c1e-8a4b7d3e5f01")
OTHER_USER_ID = UUID("0b8e4a71-93c2-4d6f-a5e8-1c7f2b9d4e02")
USER_TOKEN = "user-token"
OTHER_USER_TOKEN = "other-user-token"


def _parse_time(value: object) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Identity provider resolving a fixed set of tokens."""

    tokens: dict[str, UUID] = field(default_factory=dict)

    def get_user_id(self, access_token: str) -> UUID | None:
        return self.tokens.get(access_token)


@dataclass
class InMemoryAnalyticsRepository(AnalyticsRepository):
    """In-memory analytics record source for tests."""

    water: dict[UUID, list[WaterIntakeRow]] = field(default_factory=dict)
    food: dict[UUID, list[FoodEntryRow]] = field(default_factory=dict)
    sets: dict[UUID, list[WorkoutSetRow]] = field(default_factory=dict)
    windows: list[tuple[datetime, datetime]] = field(default_factory=list)
    failure: Exception | None = None

    def iter_water_intake(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> Iterator[WaterIntakeRow]:
        self._record(start, end)
        rows = self.water.get(user_id, [])
        return (row for row in rows if start <= row.consumed_at <= end)

    def iter_food_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> Iterator[FoodEntryRow]:
        self._record(start, end)
        rows = self.food.get(user_id, [])
        return (row for row in rows if start <= row.consumed_at <= end)

    def iter_workout_sets(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> Iterator[WorkoutSetRow]:
        self._record(start, end)
        rows = self.sets.get(user_id, [])
        return (row for row in rows if start <= row.performed_at <= end)

    def _record(self, start: datetime, end: datetime) -> None:
        if self.failure is not None:
            raise self.failure
        self.windows.append((start, end))


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory goal repository for tests."""

    goals: dict[UUID, list[GoalReference]] = field(default_factory=dict)

    def list_active_goals(self, user_id: UUID) -> list[GoalReference]:
        return list(self.goals.get(user_id, []))


@dataclass
class InMemoryFoodEntryRepository(FoodEntryRepository):
    """In-memory food entry repository for tests."""

    foods: dict[UUID, Food] = field(default_factory=dict)
    entries: dict[UUID, FoodEntry] = field(default_factory=dict)

    def create_entry(self, user_id: UUID, payload: dict[str, object]) -> FoodEntry:
        food_id = UUID(str(payload["food_id"]))
        entry = FoodEntry(
            id=uuid4(),
            user_id=user_id,
            food_id=food_id,
            serving_count=float(str(payload.get("serving_count") or 1)),
            meal_type=payload.get("meal_type"),  # type: ignore[arg-type]
            consumed_at=_parse_time(payload["consumed_at"]) or datetime.now(tz=UTC),
            food=self.foods.get(food_id),
        )
        self.entries[entry.id] = entry
        return entry

    def list_entries(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[FoodEntry]:
        owned = [
            entry
            for entry in self.entries.values()
            if entry.user_id == user_id
            and (start is None or entry.consumed_at >= start)
            and (end is None or entry.consumed_at <= end)
        ]
        return sorted(owned, key=lambda entry: entry.consumed_at, reverse=True)

    def get_entry(self, entry_id: UUID) -> FoodEntry | None:
        return self.entries.get(entry_id)

    def update_entry(self, entry_id: UUID, payload: dict[str, object]) -> FoodEntry:
        changes = dict(payload)
        if "consumed_at" in changes:
            changes["consumed_at"] = _parse_time(changes["consumed_at"])
        entry = replace(self.entries[entry_id], **changes)
        self.entries[entry_id] = entry
        return entry

    def delete_entry(self, entry_id: UUID) -> None:
        self.entries.pop(entry_id, None)


def _make_set(payload: dict[str, object]) -> ExerciseSet:
    raw_id = payload.get("id")
    return ExerciseSet(
        id=UUID(str(raw_id)) if raw_id else uuid4(),
        set_number=int(payload["set_number"]),  # type: ignore[call-overload]
        weight_kg=payload.get("weight_kg"),  # type: ignore[arg-type]
        reps=payload.get("reps"),  # type: ignore[arg-type]
        duration_seconds=payload.get("duration_seconds"),  # type: ignore[arg-type]
        rpe=payload.get("rpe"),  # type: ignore[arg-type]
        notes=payload.get("notes"),  # type: ignore[arg-type]
    )


@dataclass
class InMemoryWorkoutRepository(WorkoutRepository):
    """In-memory workout repository for tests."""

    workouts: dict[UUID, Workout] = field(default_factory=dict)
    exercises: dict[UUID, WorkoutExercise] = field(default_factory=dict)
    fail_set_inserts: bool = False

    def create_workout(self, user_id: UUID, payload: dict[str, object]) -> Workout:
        workout = Workout(
            id=uuid4(),
            user_id=user_id,
            name=payload.get("name"),  # type: ignore[arg-type]
            notes=payload.get("notes"),  # type: ignore[arg-type]
            started_at=_parse_time(payload.get("started_at")),
            ended_at=_parse_time(payload.get("ended_at")),
        )
        self.workouts[workout.id] = workout
        return workout

    def list_workouts(
        self, user_id: UUID, limit: int, offset: int
    ) -> tuple[list[Workout], int]:
        owned = sorted(
            (
                workout
                for workout in self.workouts.values()
                if workout.user_id == user_id
            ),
            key=lambda workout: workout.started_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )
        page = [
            replace(workout, exercise_count=len(self._exercises_of(workout.id)))
            for workout in owned[offset : offset + limit]
        ]
        return page, len(owned)

    def get_workout(self, workout_id: UUID) -> Workout | None:
        workout = self.workouts.get(workout_id)
        if workout is None:
            return None
        exercises = self._exercises_of(workout_id)
        return replace(workout, exercise_count=len(exercises), exercises=exercises)

    def get_workout_owner(self, workout_id: UUID) -> UUID | None:
        workout = self.workouts.get(workout_id)
        return workout.user_id if workout else None

    def update_workout(self, workout_id: UUID, payload: dict[str, object]) -> Workout:
        changes = {
            key: _parse_time(value) if key.endswith("_at") else value
            for key, value in payload.items()
        }
        workout = replace(self.workouts[workout_id], **changes)
        self.workouts[workout_id] = workout
        return workout

    def delete_workout(self, workout_id: UUID) -> None:
        self.workouts.pop(workout_id, None)
        for exercise in self._exercises_of(workout_id):
            self.exercises.pop(exercise.id, None)

    def create_workout_exercise(
        self, workout_id: UUID, payload: dict[str, object]
    ) -> WorkoutExercise:
        exercise = WorkoutExercise(
            id=uuid4(),
            workout_id=workout_id,
            exercise_id=UUID(str(payload["exercise_id"])),
            set_order=int(payload.get("set_order", 0)),  # type: ignore[call-overload]
            notes=payload.get("notes"),  # type: ignore[arg-type]
        )
        self.exercises[exercise.id] = exercise
        return exercise

    def create_exercise_sets(
        self, workout_exercise_id: UUID, sets: list[dict[str, object]]
    ) -> None:
        if self.fail_set_inserts:
            raise StoreError("Failed to add sets to exercise")
        exercise = self.exercises[workout_exercise_id]
        self.exercises[workout_exercise_id] = replace(
            exercise, sets=[*exercise.sets, *(_make_set(item) for item in sets)]
        )

    def list_workout_exercises(self, workout_id: UUID) -> list[WorkoutExercise]:
        return self._exercises_of(workout_id)

    def get_workout_exercise(
        self, workout_id: UUID, workout_exercise_id: UUID
    ) -> WorkoutExercise | None:
        exercise = self.exercises.get(workout_exercise_id)
        if exercise is None or exercise.workout_id != workout_id:
            return None
        return exercise

    def update_workout_exercise(
        self, workout_id: UUID, workout_exercise_id: UUID, payload: dict[str, object]
    ) -> WorkoutExercise:
        exercise = replace(self.exercises[workout_exercise_id], **payload)
        self.exercises[workout_exercise_id] = exercise
        return exercise

    def delete_workout_exercise(
        self, workout_id: UUID, workout_exercise_id: UUID
    ) -> None:
        if self.get_workout_exercise(workout_id, workout_exercise_id):
            self.exercises.pop(workout_exercise_id)

    def replace_exercise_sets(
        self, workout_exercise_id: UUID, sets: list[dict[str, object]]
    ) -> list[ExerciseSet]:
        new_sets = [_make_set(item) for item in sets]
        self.exercises[workout_exercise_id] = replace(
            self.exercises[workout_exercise_id], sets=new_sets
        )
        return new_sets

    def _exercises_of(self, workout_id: UUID) -> list[WorkoutExercise]:
        return sorted(
            (
                exercise
                for exercise in self.exercises.values()
                if exercise.workout_id == workout_id
            ),
            key=lambda exercise: exercise.set_order,
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider(
        tokens={USER_TOKEN: USER_ID, OTHER_USER_TOKEN: OTHER_USER_ID}
    )


@pytest.fixture
def analytics_repository() -> InMemoryAnalyticsRepository:
    return InMemoryAnalyticsRepository()


@pytest.fixture
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def food_entry_repository() -> InMemoryFoodEntryRepository:
    return InMemoryFoodEntryRepository()


@pytest.fixture
def workout_repository() -> InMemoryWorkoutRepository:
    return InMemoryWorkoutRepository()


@pytest.fixture
def container(
    settings: Settings,
    identity_provider: FakeIdentityProvider,
    analytics_repository: InMemoryAnalyticsRepository,
    goal_repository: InMemoryGoalRepository,
    food_entry_repository: InMemoryFoodEntryRepository,
    workout_repository: InMemoryWorkoutRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        auth_service=AuthService(identity_provider),
        analytics_service=AnalyticsService(analytics_repository, goal_repository),
        food_entry_service=FoodEntryService(food_entry_repository),
        workout_service=WorkoutService(workout_repository),
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {USER_TOKEN}"}


@pytest.fixture
def other_auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {OTHER_USER_TOKEN}"}
