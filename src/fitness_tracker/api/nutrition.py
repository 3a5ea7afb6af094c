"""Nutrition endpoints: daily summary and food entry management."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from fitness_tracker.api.dependencies import get_container, require_user
from fitness_tracker.api.schemas import (
    FoodEntryCreate,  # noqa: TC001
    FoodEntryUpdate,  # noqa: TC001
)
from fitness_tracker.domain.errors import InvalidRequestError

router = APIRouter(prefix="/nutrition", tags=["nutrition"])


def _parse_date(raw: str | None) -> date | None:
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise InvalidRequestError(
            "Invalid date",
            details=[
                {
                    "loc": ["query", "date"],
                    "message": "Expected a date formatted as YYYY-MM-DD",
                    "type": "date_from_datetime_parsing",
                }
            ],
        ) from exc


@router.get("/summary")
async def nutrition_summary(
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return one day's calories and macros against active goals."""
    container = get_container(request)
    day = _parse_date(request.query_params.get("date"))
    if day is None:
        day = datetime.now(tz=container.settings.tz).date()
    summary = container.analytics_service.daily_nutrition(user_id, day)
    return {
        "date": summary.day.isoformat(),
        "calories": summary.calories,
        "protein_g": summary.protein_g,
        "carbs_g": summary.carbs_g,
        "fat_g": summary.fat_g,
        "entry_count": summary.entry_count,
        "goals": summary.goals,
        "percentages": summary.percentages,
    }


@router.post("/entries", status_code=status.HTTP_201_CREATED)
async def create_food_entry(
    payload: FoodEntryCreate,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Log a food entry for the caller."""
    container = get_container(request)
    entry = container.food_entry_service.create_entry(
        user_id, payload.model_dump(mode="json", exclude_none=True)
    )
    return asdict(entry)


@router.get("/entries")
async def list_food_entries(
    request: Request,
    user_id: UUID = Depends(require_user),
) -> list[dict[str, object]]:
    """Return the caller's entries, optionally for a single day."""
    container = get_container(request)
    day = _parse_date(request.query_params.get("date"))
    entries = container.food_entry_service.list_entries(user_id, day)
    return [asdict(entry) for entry in entries]


@router.get("/entries/{entry_id}")
async def get_food_entry(
    entry_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return one of the caller's entries."""
    container = get_container(request)
    return asdict(container.food_entry_service.get_entry(user_id, entry_id))


@router.patch("/entries/{entry_id}")
async def update_food_entry(
    entry_id: UUID,
    payload: FoodEntryUpdate,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Update servings, meal type or time of one of the caller's entries."""
    container = get_container(request)
    entry = container.food_entry_service.update_entry(
        user_id, entry_id, payload.model_dump(mode="json", exclude_unset=True)
    )
    return asdict(entry)


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food_entry(
    entry_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> Response:
    """Delete one of the caller's entries."""
    container = get_container(request)
    container.food_entry_service.delete_entry(user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
