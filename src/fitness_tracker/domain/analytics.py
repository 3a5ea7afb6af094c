"""Domain models for analytics aggregation."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta


@dataclass(frozen=True)
class MeasurementRecord:
    """One timestamped numeric measurement."""

    timestamp: datetime
    value: float | None
    category: str | None = None


@dataclass(frozen=True)
class AnalyticsWindow:
    """Inclusive time range an aggregation was requested for."""

    start: datetime
    end: datetime

    @classmethod
    def last_days(cls, days: int, now: datetime | None = None) -> "AnalyticsWindow":
        """Return the window covering the last `days` days up to `now`."""
        end = now or datetime.now(tz=UTC)
        return cls(start=end - timedelta(days=days), end=end)


@dataclass(frozen=True)
class DailyTotal:
    """Per-metric sums for one calendar day."""

    day: date
    totals: dict[str, float]


@dataclass(frozen=True)
class HourlyAverage:
    """Per-metric mean of all records logged in one hour-of-day slot."""

    hour: int
    count: int
    averages: dict[str, float]


@dataclass(frozen=True)
class RankedLabel:
    """A label with its occurrence count."""

    name: str
    count: int


@dataclass(frozen=True)
class AggregationResult:
    """Rolled-up view of a record sequence."""

    window: AnalyticsWindow
    record_count: int
    days_tracked: int
    totals: dict[str, float]
    average_daily: dict[str, float]
    daily_totals: list[DailyTotal]
    recent_days: list[DailyTotal]
    hourly_averages: list[HourlyAverage]
    goal_percentages: dict[str, int | None]
    top_labels: list[RankedLabel]
