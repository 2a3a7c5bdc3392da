"""Errors raised by the guest stores.

Routers translate these into HTTP responses; every error carries a message that
can be shown to a user as-is.
"""


class GuestServiceError(Exception):
    """Base class for guest and guest group store errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(GuestServiceError):
    """Raised when input is malformed or a required field is missing."""


class InvalidRSVPTransitionError(ValidationError):
    """Raised when the active transition policy forbids an RSVP change."""

    def __init__(self, current: str, new: str) -> None:
        self.current = current
        self.new = new
        super().__init__(f"RSVP status cannot change from '{current}' to '{new}'")


class PersistenceError(GuestServiceError):
    """Raised when the database rejects a read or write."""


class NotFoundError(PersistenceError):
    """Raised when the target row does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")
