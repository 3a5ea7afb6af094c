"""Supabase repository for user goals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_support import store_errors
from fitness_tracker.domain.models import GoalReference
from fitness_tracker.services.analytics import GoalRepository


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for goal lookups."""

    client: Client

    def list_active_goals(self, user_id: UUID) -> list[GoalReference]:
        """Return the user's active goals."""
        with store_errors("fetch goals"):
            response = (
                self.client.table("user_goals")
                .select("goal_type, target_value")
                .eq("user_id", str(user_id))
                .eq("is_active", True)
                .execute()
            )
        return [
            GoalReference(
                category=str(row["goal_type"]),
                target=float(row.get("target_value") or 0.0),
            )
            for row in response.data or []
            if row.get("goal_type")
        ]
