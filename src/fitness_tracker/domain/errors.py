"""Error taxonomy shared by services and the HTTP layer."""


class TrackerError(Exception):
    """Base class for errors with a client-facing status code."""

    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict[str, object]:
        """Return the JSON body sent to the client."""
        return {"error": self.message}


class UnauthenticatedError(TrackerError):
    """No valid session was presented."""

    status_code = 401
    default_message = "Unauthorized"


class InvalidRequestError(TrackerError):
    """Request payload or query parameters failed validation."""

    status_code = 400
    default_message = "Invalid data"

    def __init__(
        self,
        message: str | None = None,
        details: list[dict[str, object]] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or []

    def to_payload(self) -> dict[str, object]:
        """Return the error with per-field issues."""
        return {"error": self.message, "details": self.details}


class ForbiddenError(TrackerError):
    """The record exists but belongs to another user."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(TrackerError):
    """The record does not exist."""

    status_code = 404
    default_message = "Not found"


class StoreError(TrackerError):
    """The datastore call failed."""

    status_code = 500
    default_message = "Failed to reach the datastore"
