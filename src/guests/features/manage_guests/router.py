from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, EmailStr

from src.events import EventBus
from src.guests.dependencies import get_event_bus, get_guest_read_model, http_error
from src.guests.errors import GuestServiceError
from src.guests.repository.read_models import GuestReadModel
from src.guests.repository.write_models import GuestWriteModel, SqlGuestWriteModel
from src.guests.rsvp_policy import parse_status
from src.guests.schemas import GuestResponse
from src.guests.urls import GUEST_URL, GUESTS_URL

router = APIRouter()


class GuestCreateRequest(BaseModel):
    name: str
    email: EmailStr
    phone: str | None = None
    group_category: str | None = None
    group_id: UUID | None = None
    dietary_restrictions: str | None = None
    plus_one_name: str | None = None
    plus_one_dietary_restrictions: str | None = None
    notes: str | None = None


class GuestUpdateRequest(BaseModel):
    """Only the fields present in the request body are changed."""

    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    group_category: str | None = None
    group_id: UUID | None = None
    dietary_restrictions: str | None = None
    plus_one_name: str | None = None
    plus_one_dietary_restrictions: str | None = None
    notes: str | None = None


def get_guest_write_model(event_bus: EventBus = Depends(get_event_bus)) -> GuestWriteModel:
    """Dependency to get guest write model instance."""
    return SqlGuestWriteModel(event_bus=event_bus)


@router.get(GUESTS_URL, response_model=list[GuestResponse])
async def list_guests(
    event_id: UUID,
    search: str = "",
    status_filter: str = Query("all", alias="status"),
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> list[GuestResponse]:
    """
    List an event's guests ordered by name.
    ``search`` matches name or email; ``status`` is an RSVP status or "all".
    """
    try:
        rsvp_status = None if status_filter == "all" else parse_status(status_filter)
    except GuestServiceError as e:
        raise http_error(e)

    guests = await read_model.list_guests(event_id, search=search, status=rsvp_status)
    return [GuestResponse.model_validate(guest) for guest in guests]


@router.post(GUESTS_URL, response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
async def create_guest(
    event_id: UUID,
    request: GuestCreateRequest,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
) -> GuestResponse:
    """Add a guest to an event. New guests are pending and not yet invited."""
    try:
        guest = await write_model.create_guest(event_id=event_id, **request.model_dump())
    except GuestServiceError as e:
        raise http_error(e)
    return GuestResponse.model_validate(guest)


@router.get(GUEST_URL, response_model=GuestResponse)
async def get_guest(
    guest_id: UUID,
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> GuestResponse:
    guest = await read_model.get_guest(guest_id)
    if guest is None:
        raise HTTPException(status_code=404, detail=f"Guest {guest_id} not found")
    return GuestResponse.model_validate(guest)


@router.patch(GUEST_URL, response_model=GuestResponse)
async def update_guest(
    guest_id: UUID,
    request: GuestUpdateRequest,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
) -> GuestResponse:
    try:
        guest = await write_model.update_guest(guest_id, request.model_dump(exclude_unset=True))
    except GuestServiceError as e:
        raise http_error(e)
    return GuestResponse.model_validate(guest)


@router.delete(GUEST_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_guest(
    guest_id: UUID,
    confirm: bool = False,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
) -> Response:
    """Permanently delete a guest. The caller must pass ``confirm=true``."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Deleting a guest is permanent; repeat the request with confirm=true",
        )
    try:
        await write_model.delete_guest(guest_id)
    except GuestServiceError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
