"""Domain models for hydration tracking."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WaterIntakeRow:
    """A single water intake entry."""

    consumed_at: datetime
    amount_ml: float | None
