"""Food entry logging service."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import ForbiddenError, NotFoundError
from fitness_tracker.domain.nutrition import FoodEntry

ENTRY_NOT_FOUND = "Food entry not found"


class FoodEntryRepository(Protocol):
    """Persistence interface for food entries."""

    def create_entry(self, user_id: UUID, payload: dict[str, object]) -> FoodEntry:
        """Insert a food entry and return it."""

    def list_entries(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[FoodEntry]:
        """Return the user's entries, newest first, optionally within a range."""

    def get_entry(self, entry_id: UUID) -> FoodEntry | None:
        """Return an entry with its food, if present."""

    def update_entry(self, entry_id: UUID, payload: dict[str, object]) -> FoodEntry:
        """Apply a partial update and return the entry."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""


@dataclass
class FoodEntryService:
    """Service for creating and managing a user's food entries."""

    repository: FoodEntryRepository
    tz: tzinfo = UTC

    def create_entry(self, user_id: UUID, payload: dict[str, object]) -> FoodEntry:
        """Log a food entry, defaulting the consumption time to now."""
        values = dict(payload)
        if values.get("consumed_at") is None:
            values["consumed_at"] = datetime.now(tz=UTC).isoformat()
        return self.repository.create_entry(user_id, values)

    def list_entries(self, user_id: UUID, day: date | None = None) -> list[FoodEntry]:
        """Return entries, limited to one calendar day when given."""
        if day is None:
            return self.repository.list_entries(user_id, None, None)
        start = datetime.combine(day, time.min, tzinfo=self.tz)
        end = start + timedelta(days=1) - timedelta(microseconds=1)
        return self.repository.list_entries(user_id, start, end)

    def get_entry(self, user_id: UUID, entry_id: UUID) -> FoodEntry:
        """Return an entry owned by the user."""
        return self._require_owned(user_id, entry_id)

    def update_entry(
        self, user_id: UUID, entry_id: UUID, payload: dict[str, object]
    ) -> FoodEntry:
        """Update an entry owned by the user."""
        entry = self._require_owned(user_id, entry_id)
        if not payload:
            return entry
        return self.repository.update_entry(entry_id, payload)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an entry owned by the user."""
        self._require_owned(user_id, entry_id)
        self.repository.delete_entry(entry_id)

    def _require_owned(self, user_id: UUID, entry_id: UUID) -> FoodEntry:
        entry = self.repository.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(ENTRY_NOT_FOUND)
        if entry.user_id != user_id:
            raise ForbiddenError
        return entry
