"""Workout endpoints: workouts, their exercises and sets."""

from __future__ import annotations

from dataclasses import asdict
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from fitness_tracker.api.dependencies import get_container, require_user
from fitness_tracker.api.schemas import (
    ExerciseSetPayload,  # noqa: TC001
    WorkoutExerciseCreate,  # noqa: TC001
    WorkoutExerciseUpdate,  # noqa: TC001
    WorkoutPayload,  # noqa: TC001
)
from fitness_tracker.config import parse_int

router = APIRouter(prefix="/workouts", tags=["workouts"])

DEFAULT_LIMIT = 10


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_workout(
    payload: WorkoutPayload,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Start a workout for the caller."""
    container = get_container(request)
    workout = container.workout_service.create_workout(
        user_id, payload.model_dump(mode="json", exclude_none=True)
    )
    return asdict(workout)


@router.get("")
async def list_workouts(
    request: Request,
    limit: str | None = None,
    offset: str | None = None,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return a page of the caller's workouts, newest first."""
    container = get_container(request)
    page_limit = parse_int(limit)
    if page_limit is None or page_limit <= 0:
        page_limit = DEFAULT_LIMIT
    page_offset = max(parse_int(offset) or 0, 0)
    page = container.workout_service.list_workouts(
        user_id, limit=page_limit, offset=page_offset
    )
    return asdict(page)


@router.get("/{workout_id}")
async def get_workout(
    workout_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return a workout with its exercises and sets."""
    container = get_container(request)
    return asdict(container.workout_service.get_workout(user_id, workout_id))


@router.patch("/{workout_id}")
async def update_workout(
    workout_id: UUID,
    payload: WorkoutPayload,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Rename, annotate or finish a workout."""
    container = get_container(request)
    workout = container.workout_service.update_workout(
        user_id, workout_id, payload.model_dump(mode="json", exclude_unset=True)
    )
    return asdict(workout)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(
    workout_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> Response:
    """Delete a workout together with its exercises and sets."""
    container = get_container(request)
    container.workout_service.delete_workout(user_id, workout_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{workout_id}/exercises", status_code=status.HTTP_201_CREATED)
async def add_workout_exercise(
    workout_id: UUID,
    payload: WorkoutExerciseCreate,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Attach an exercise and its initial sets to a workout."""
    container = get_container(request)
    exercise = container.workout_service.add_exercise(
        user_id, workout_id, payload.model_dump(mode="json", exclude_none=True)
    )
    return asdict(exercise)


@router.get("/{workout_id}/exercises")
async def list_workout_exercises(
    workout_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> list[dict[str, object]]:
    """Return a workout's exercises in set order."""
    container = get_container(request)
    exercises = container.workout_service.list_exercises(user_id, workout_id)
    return [asdict(exercise) for exercise in exercises]


@router.get("/{workout_id}/exercises/{exercise_id}")
async def get_workout_exercise(
    workout_id: UUID,
    exercise_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return one exercise of a workout with its sets."""
    container = get_container(request)
    exercise = container.workout_service.get_exercise(
        user_id, workout_id, exercise_id
    )
    return asdict(exercise)


@router.patch("/{workout_id}/exercises/{exercise_id}")
async def update_workout_exercise(
    workout_id: UUID,
    exercise_id: UUID,
    payload: WorkoutExerciseUpdate,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Update notes or ordering of a workout exercise."""
    container = get_container(request)
    exercise = container.workout_service.update_exercise(
        user_id,
        workout_id,
        exercise_id,
        payload.model_dump(mode="json", exclude_unset=True),
    )
    return asdict(exercise)


@router.delete(
    "/{workout_id}/exercises/{exercise_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_workout_exercise(
    workout_id: UUID,
    exercise_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> Response:
    """Remove an exercise and its sets from a workout."""
    container = get_container(request)
    container.workout_service.delete_exercise(user_id, workout_id, exercise_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{workout_id}/exercises/{exercise_id}")
async def replace_exercise_sets(
    workout_id: UUID,
    exercise_id: UUID,
    sets: list[ExerciseSetPayload],
    request: Request,
    user_id: UUID = Depends(require_user),
) -> list[dict[str, object]]:
    """Replace every set recorded for a workout exercise."""
    container = get_container(request)
    updated = container.workout_service.replace_sets(
        user_id,
        workout_id,
        exercise_id,
        [item.model_dump(mode="json", exclude_none=True) for item in sets],
    )
    return [asdict(exercise_set) for exercise_set in updated]
