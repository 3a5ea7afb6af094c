"""Domain models for the fitness tracker."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GoalReference:
    """Active per-category target for a user."""

    category: str
    target: float
