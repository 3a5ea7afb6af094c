"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from fitness_tracker.adapters.supabase_analytics_repository import (
    SupabaseAnalyticsRepository,
)
from fitness_tracker.adapters.supabase_food_entry_repository import (
    SupabaseFoodEntryRepository,
)
from fitness_tracker.adapters.supabase_goal_repository import SupabaseGoalRepository
from fitness_tracker.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from fitness_tracker.adapters.supabase_workout_repository import (
    SupabaseWorkoutRepository,
)
from fitness_tracker.config import Settings
from fitness_tracker.services.analytics import AnalyticsService
from fitness_tracker.services.auth import AuthService
from fitness_tracker.services.nutrition import FoodEntryService
from fitness_tracker.services.workouts import WorkoutService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    analytics_service: AnalyticsService
    food_entry_service: FoodEntryService
    workout_service: WorkoutService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    tz = resolved_settings.tz
    analytics_repository = SupabaseAnalyticsRepository(
        supabase_client, page_size=resolved_settings.store_page_size
    )
    analytics_service = AnalyticsService(
        repository=analytics_repository,
        goal_repository=SupabaseGoalRepository(supabase_client),
        tz=tz,
    )
    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(SupabaseIdentityProvider(supabase_client)),
        analytics_service=analytics_service,
        food_entry_service=FoodEntryService(
            SupabaseFoodEntryRepository(supabase_client), tz=tz
        ),
        workout_service=WorkoutService(SupabaseWorkoutRepository(supabase_client)),
    )
