"""Supabase Auth adapter for resolving access tokens."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from fitness_tracker.services.auth import IdentityProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Identity provider backed by Supabase Auth."""

    client: Client

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for the token, or None when it is rejected."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError as exc:
            logger.info("Rejected access token: %s", exc.message)
            return None
        if response is None or response.user is None:
            return None
        return UUID(response.user.id)
