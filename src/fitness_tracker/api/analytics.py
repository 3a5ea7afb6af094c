"""Analytics endpoints for hydration, nutrition and workouts."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from fitness_tracker.api.dependencies import get_container, require_user
from fitness_tracker.config import parse_days
from fitness_tracker.domain.analytics import (
    AggregationResult,
    AnalyticsWindow,
    DailyTotal,
    HourlyAverage,
)
from fitness_tracker.services.analytics import (
    NUTRITION_METRICS,
    WATER_GOAL,
    WORKOUT_METRICS,
)

if TYPE_CHECKING:
    from fitness_tracker.services.aggregator import Metric

router = APIRouter(prefix="/analytics", tags=["analytics"])

_VALUE = "value"


def _window(request: Request, days: str | None) -> AnalyticsWindow:
    settings = get_container(request).settings
    resolved = parse_days(
        days, settings.analytics_default_days, settings.analytics_max_days
    )
    return AnalyticsWindow.last_days(resolved)


@router.get("/hydration")
async def hydration_analytics(
    request: Request,
    days: str | None = None,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return water intake totals, daily history and hourly pattern."""
    container = get_container(request)
    report = container.analytics_service.hydration(user_id, _window(request, days))
    result = report.result
    return {
        "summary": {
            "total": result.totals[_VALUE],
            "average_daily": result.average_daily[_VALUE],
            "goal": report.goals.get(WATER_GOAL),
            "days_tracked": result.days_tracked,
            "goal_percentage": result.goal_percentages.get(WATER_GOAL),
        },
        "recent_days": [_water_day(day) for day in result.recent_days],
        "hourly_averages": [
            {
                **_hour_fields(hour),
                "average": hour.averages[_VALUE],
            }
            for hour in result.hourly_averages
        ],
        "daily_totals": [_water_day(day) for day in result.daily_totals],
    }


@router.get("/nutrition")
async def nutrition_analytics(
    request: Request,
    days: str | None = None,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return macro totals, averages against goals and the most logged foods."""
    container = get_container(request)
    report = container.analytics_service.nutrition(user_id, _window(request, days))
    result = report.result
    return {
        "summary": {
            **_metric_summary(result, NUTRITION_METRICS),
            "entry_count": result.record_count,
            "days_tracked": result.days_tracked,
            "goals": report.goals,
            "goal_percentages": result.goal_percentages,
        },
        **_history(result),
        "top_foods": _ranking(result),
    }


@router.get("/workouts")
async def workout_analytics(
    request: Request,
    days: str | None = None,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return training volume, set counts and the most trained exercises."""
    container = get_container(request)
    report = container.analytics_service.workouts(user_id, _window(request, days))
    result = report.result
    return {
        "summary": {
            "total_workouts": report.workouts_completed,
            **_metric_summary(result, WORKOUT_METRICS),
            "days_tracked": result.days_tracked,
        },
        **_history(result),
        "top_exercises": _ranking(result),
    }


def _metric_summary(
    result: AggregationResult, metrics: tuple[Metric, ...]
) -> dict[str, float]:
    summary: dict[str, float] = {}
    for metric in metrics:
        summary[f"total_{metric.name}"] = result.totals[metric.name]
        summary[f"average_daily_{metric.name}"] = result.average_daily[metric.name]
    return summary


def _history(result: AggregationResult) -> dict[str, list[dict[str, object]]]:
    return {
        "recent_days": [_day(day) for day in result.recent_days],
        "hourly_averages": [
            {**_hour_fields(hour), **hour.averages} for hour in result.hourly_averages
        ],
        "daily_totals": [_day(day) for day in result.daily_totals],
    }


def _ranking(result: AggregationResult) -> list[dict[str, object]]:
    return [{"name": label.name, "count": label.count} for label in result.top_labels]


def _day(day: DailyTotal) -> dict[str, object]:
    return {
        "date": day.day.isoformat(),
        "day": day.day.strftime("%a"),
        **day.totals,
    }


def _water_day(day: DailyTotal) -> dict[str, object]:
    return {
        "date": day.day.isoformat(),
        "day": day.day.strftime("%a"),
        "total": day.totals[_VALUE],
    }


def _hour_fields(hour: HourlyAverage) -> dict[str, object]:
    return {
        "hour": hour.hour,
        "hour_display": f"{hour.hour:02d}:00",
        "count": hour.count,
    }
