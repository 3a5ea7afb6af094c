"""Domain models for food logging."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class Food:
    """Food catalogue entry with macros per serving."""

    id: UUID
    name: str
    brand: str | None
    serving_size_g: float | None
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class FoodEntry:
    """A logged serving of a food."""

    id: UUID
    user_id: UUID
    food_id: UUID | None
    serving_count: float
    meal_type: str | None
    consumed_at: datetime
    food: Food | None = None


@dataclass(frozen=True)
class FoodEntryRow:
    """Food entry flattened for analytics, macros scaled by servings."""

    consumed_at: datetime
    food_name: str | None
    calories: float | None
    protein_g: float | None
    carbs_g: float | None
    fat_g: float | None


@dataclass(frozen=True)
class DailyNutritionSummary:
    """Macro totals for one day compared against active goals."""

    day: date
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    entry_count: int
    goals: dict[str, float]
    percentages: dict[str, int | None]
