from uuid import uuid4

import pytest

from src.guests.dependencies import get_guest_read_model
from src.guests.features.invitations.router import get_invitation_write_model
from src.guests.features.manage_groups.router import get_group_write_model
from src.guests.features.manage_guests.router import get_guest_write_model
from src.guests.features.update_rsvp.router import get_rsvp_write_model
from src.guests.tests.inmemory_models import InMemoryGuestStore
from src.main import app


@pytest.fixture
def event_id():
    return uuid4()


@pytest.fixture
def guest_store(event_id):
    """In-memory store publishing on the app's bus, so the view cache sees its events."""
    return InMemoryGuestStore(event_ids=[event_id], event_bus=app.state.event_bus)


@pytest.fixture
async def store_client(client_factory, guest_store):
    """Client whose read and write models are all backed by ``guest_store``."""
    overrides = {
        get_guest_read_model: lambda: guest_store,
        get_guest_write_model: lambda: guest_store,
        get_group_write_model: lambda: guest_store,
        get_rsvp_write_model: lambda: guest_store,
        get_invitation_write_model: lambda: guest_store,
    }
    async with client_factory(overrides) as client:
        yield client
