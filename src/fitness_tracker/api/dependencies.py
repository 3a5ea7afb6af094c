"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Header, Request

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> UUID:
    """Resolve the caller from the bearer token or fail with 401."""
    container = get_container(request)
    return container.auth_service.authenticate(authorization)
