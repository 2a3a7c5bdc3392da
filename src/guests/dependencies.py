from fastapi import HTTPException, Request

from src.events import EventBus
from src.guests.errors import GuestServiceError, NotFoundError, ValidationError
from src.guests.repository.read_models import GuestReadModel, SqlGuestReadModel
from src.guests.revalidation import GuestViewCache


def get_event_bus(request: Request) -> EventBus:
    """The bus owned by the running app."""
    return request.app.state.event_bus


def get_guest_view_cache(request: Request) -> GuestViewCache:
    return request.app.state.guest_view_cache


def get_guest_read_model() -> GuestReadModel:
    """Dependency to get guest read model instance."""
    return SqlGuestReadModel()


def http_error(error: GuestServiceError) -> HTTPException:
    """Map a store error onto the HTTP status the dashboard expects."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, ValidationError):
        return HTTPException(status_code=422, detail=error.message)
    return HTTPException(status_code=400, detail=error.message)
