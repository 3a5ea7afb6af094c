"""Shared helpers for Supabase repositories."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any
from uuid import UUID

from supabase import PostgrestAPIError

from fitness_tracker.domain.errors import StoreError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Translate PostgREST failures into StoreError."""
    try:
        yield
    except PostgrestAPIError as exc:
        logger.exception("Supabase call failed", extra={"action": action})
        raise StoreError(f"Failed to {action}") from exc


def iter_pages(
    build_query: Callable[[], Any],
    action: str,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Iterator[dict[str, Any]]:
    """Yield rows of a query one `range()` page at a time."""
    offset = 0
    while True:
        with store_errors(action):
            response = build_query().range(offset, offset + page_size - 1).execute()
        rows = response.data or []
        yield from rows
        if len(rows) < page_size:
            return
        offset += page_size


def parse_datetime(raw: object) -> datetime | None:
    """Parse an ISO timestamp column."""
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def parse_uuid(raw: object) -> UUID | None:
    """Parse a UUID column."""
    if raw is None or raw == "":
        return None
    return UUID(str(raw))


def optional_float(raw: object) -> float | None:
    """Return a numeric column as float, keeping nulls."""
    if raw is None:
        return None
    return float(raw)  # type: ignore[arg-type]


def optional_int(raw: object) -> int | None:
    """Return a numeric column as int, keeping nulls."""
    if raw is None:
        return None
    return int(raw)  # type: ignore[call-overload]
