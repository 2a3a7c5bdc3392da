from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from src.events import EventBus
from src.guests.dependencies import get_event_bus, get_guest_read_model, http_error
from src.guests.errors import GuestServiceError
from src.guests.repository.read_models import GuestReadModel
from src.guests.repository.write_models import GuestGroupWriteModel, SqlGuestGroupWriteModel
from src.guests.schemas import GuestGroupResponse
from src.guests.urls import GROUP_URL, GROUPS_URL

router = APIRouter()

DEFAULT_GROUP_COLOR = "#3B82F6"


class GroupCreateRequest(BaseModel):
    name: str
    color: str = DEFAULT_GROUP_COLOR
    sort_order: int | None = None


class GroupUpdateRequest(BaseModel):
    name: str | None = None
    color: str | None = None
    sort_order: int | None = None


def get_group_write_model(
    event_bus: EventBus = Depends(get_event_bus),
) -> GuestGroupWriteModel:
    """Dependency to get guest group write model instance."""
    return SqlGuestGroupWriteModel(event_bus=event_bus)


@router.get(GROUPS_URL, response_model=list[GuestGroupResponse])
async def list_groups(
    event_id: UUID,
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> list[GuestGroupResponse]:
    groups = await read_model.list_groups(event_id)
    return [GuestGroupResponse.model_validate(group) for group in groups]


@router.post(GROUPS_URL, response_model=GuestGroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    event_id: UUID,
    request: GroupCreateRequest,
    write_model: GuestGroupWriteModel = Depends(get_group_write_model),
) -> GuestGroupResponse:
    """Create a group. Without ``sort_order`` it is placed after the last group."""
    try:
        group = await write_model.create_group(
            event_id=event_id,
            name=request.name,
            color=request.color,
            sort_order=request.sort_order,
        )
    except GuestServiceError as e:
        raise http_error(e)
    return GuestGroupResponse.model_validate(group)


@router.patch(GROUP_URL, response_model=GuestGroupResponse)
async def update_group(
    group_id: UUID,
    request: GroupUpdateRequest,
    write_model: GuestGroupWriteModel = Depends(get_group_write_model),
) -> GuestGroupResponse:
    try:
        group = await write_model.update_group(group_id, request.model_dump(exclude_unset=True))
    except GuestServiceError as e:
        raise http_error(e)
    return GuestGroupResponse.model_validate(group)


@router.delete(GROUP_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group_id: UUID,
    write_model: GuestGroupWriteModel = Depends(get_group_write_model),
) -> Response:
    """Delete a group. Guests stay in the event and keep their group_category."""
    try:
        await write_model.delete_group(group_id)
    except GuestServiceError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
