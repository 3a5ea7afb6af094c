"""Single-pass aggregation of timestamped measurements."""

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo
from typing import Generic, TypeVar

from fitness_tracker.domain.analytics import (
    AggregationResult,
    AnalyticsWindow,
    DailyTotal,
    HourlyAverage,
    MeasurementRecord,
    RankedLabel,
)

RowT = TypeVar("RowT")

RECENT_DAYS = 7
TOP_LABELS = 5
MAX_PERCENTAGE = 100


@dataclass(frozen=True)
class Metric(Generic[RowT]):
    """A numeric field pulled out of a raw row.

    `goal_key` names the goal category the metric's daily average is compared
    against; `precision` is the number of decimals kept on averages.
    """

    name: str
    extract: Callable[[RowT], float | None]
    goal_key: str | None = None
    precision: int = 0


@dataclass
class _HourBucket:
    sums: dict[str, float]
    count: int = 0


@dataclass(frozen=True)
class Aggregator(Generic[RowT]):
    """Rolls a record stream up into daily, hourly and window-wide figures.

    Records are consumed once, in order. Running state is bounded by the number
    of distinct days, hours and labels seen.
    """

    metrics: Sequence[Metric[RowT]]
    timestamp: Callable[[RowT], datetime]
    label: Callable[[RowT], str | None] | None = None
    tz: tzinfo = UTC
    recent_days: int = RECENT_DAYS
    top_n: int = TOP_LABELS

    def aggregate(
        self,
        records: Iterable[RowT],
        window: AnalyticsWindow,
        goals: Mapping[str, float] | None = None,
    ) -> AggregationResult:
        """Aggregate `records`; out-of-window records are kept as given."""
        daily: dict[date, dict[str, float]] = {}
        hourly: dict[int, _HourBucket] = {}
        label_counts: dict[str, int] = {}
        totals = self._zeroes()
        record_count = 0

        for record in records:
            moment = _localize(self.timestamp(record), self.tz)
            day_sums = daily.get(moment.date())
            if day_sums is None:
                day_sums = daily[moment.date()] = self._zeroes()
            bucket = hourly.get(moment.hour)
            if bucket is None:
                bucket = hourly[moment.hour] = _HourBucket(sums=self._zeroes())
            bucket.count += 1
            for metric in self.metrics:
                value = _coerce(metric.extract(record))
                day_sums[metric.name] += value
                bucket.sums[metric.name] += value
                totals[metric.name] += value
            record_count += 1
            if self.label is not None:
                name = self.label(record)
                if name:
                    label_counts[name] = label_counts.get(name, 0) + 1

        days_tracked = len(daily)
        average_daily = {
            metric.name: (
                round_half_up(totals[metric.name] / days_tracked, metric.precision)
                if days_tracked
                else 0.0
            )
            for metric in self.metrics
        }
        ascending = [
            DailyTotal(day=day, totals=daily[day]) for day in sorted(daily)
        ]
        return AggregationResult(
            window=window,
            record_count=record_count,
            days_tracked=days_tracked,
            totals=totals,
            average_daily=average_daily,
            daily_totals=ascending,
            recent_days=ascending[::-1][: self.recent_days],
            hourly_averages=[
                self._hourly_average(hour, hourly[hour]) for hour in sorted(hourly)
            ],
            goal_percentages=self._goal_percentages(average_daily, goals or {}),
            top_labels=[
                RankedLabel(name=name, count=count)
                for name, count in sorted(
                    label_counts.items(), key=lambda item: item[1], reverse=True
                )[: self.top_n]
            ],
        )

    def _zeroes(self) -> dict[str, float]:
        return {metric.name: 0.0 for metric in self.metrics}

    def _hourly_average(self, hour: int, bucket: _HourBucket) -> HourlyAverage:
        return HourlyAverage(
            hour=hour,
            count=bucket.count,
            averages={
                metric.name: round_half_up(
                    bucket.sums[metric.name] / bucket.count, metric.precision
                )
                for metric in self.metrics
            },
        )

    def _goal_percentages(
        self, average_daily: Mapping[str, float], goals: Mapping[str, float]
    ) -> dict[str, int | None]:
        return {
            metric.goal_key: goal_percentage(
                average_daily[metric.name], goals.get(metric.goal_key)
            )
            for metric in self.metrics
            if metric.goal_key is not None
        }


def aggregate(
    records: Iterable[MeasurementRecord],
    window: AnalyticsWindow,
    goals: Mapping[str, float] | None = None,
    *,
    goal_key: str | None = None,
    tz: tzinfo = UTC,
) -> AggregationResult:
    """Aggregate plain measurement records under the `value` metric.

    Categories feed the label ranking; `goal_key` selects which goal the
    daily average is measured against.
    """
    aggregator: Aggregator[MeasurementRecord] = Aggregator(
        metrics=[
            Metric(
                name="value",
                extract=lambda record: record.value,
                goal_key=goal_key,
            )
        ],
        timestamp=lambda record: record.timestamp,
        label=lambda record: record.category,
        tz=tz,
    )
    return aggregator.aggregate(records, window, goals)


def goal_percentage(observed: float, target: float | None) -> int | None:
    """Return observed/target as a whole percentage clamped to [0, 100]."""
    if not target:
        return None
    percentage = int(round_half_up(100 * observed / target))
    return max(0, min(MAX_PERCENTAGE, percentage))


def round_half_up(value: float, precision: int = 0) -> float:
    """Round to `precision` decimals with halves rounded up."""
    scale = 10**precision
    return math.floor(value * scale + 0.5) / scale


def _coerce(value: float | None) -> float:
    if value is None:
        return 0.0
    return float(value)


def _localize(moment: datetime, tz: tzinfo) -> datetime:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(tz)
