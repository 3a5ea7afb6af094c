"""Request authentication against the identity provider."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import UnauthenticatedError

BEARER_PREFIX = "bearer "


class IdentityProvider(Protocol):
    """Interface for resolving access tokens to users."""

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a valid token, or None."""


@dataclass
class AuthService:
    """Service that turns request credentials into a user id."""

    provider: IdentityProvider

    def authenticate(self, authorization: str | None) -> UUID:
        """Return the caller's user id or raise UnauthenticatedError."""
        token = parse_bearer_token(authorization)
        if token is None:
            raise UnauthenticatedError
        user_id = self.provider.get_user_id(token)
        if user_id is None:
            raise UnauthenticatedError
        return user_id


def parse_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if authorization is None:
        return None
    if not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None
