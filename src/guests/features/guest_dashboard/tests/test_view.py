"""Tests for GuestDashboardView caching."""

from uuid import uuid4

import pytest

from src.guests.dtos import RSVPStatus
from src.guests.features.guest_dashboard.view import GuestDashboardView
from src.guests.features.update_rsvp.write_model import SqlRSVPWriteModel
from src.guests.repository.read_models import SqlGuestReadModel
from src.guests.repository.write_models import SqlGuestGroupWriteModel, SqlGuestWriteModel
from src.guests.revalidation import GuestViewCache
from src.guests.tests.inmemory_models import InMemoryGuestStore


@pytest.fixture
def event_id():
    return uuid4()


@pytest.fixture
def store(event_id):
    # no bus: every change has to be noticed through the stored version
    return InMemoryGuestStore(event_ids=[event_id])


@pytest.fixture
def view(store):
    return GuestDashboardView(read_model=store, cache=GuestViewCache())


async def test_unchanged_event_is_served_from_cache(view, store, event_id):
    await store.create_guest(event_id=event_id, name="Jane", email="jane@x.com")

    first = await view.load(event_id)
    second = await view.load(event_id)

    assert second is first


async def test_guest_changes_are_seen_without_events(view, store, event_id):
    jane = await store.create_guest(event_id=event_id, name="Jane", email="jane@x.com")
    await view.load(event_id)

    await store.set_rsvp_status(jane.id, RSVPStatus.CONFIRMED)
    after_rsvp = await view.load(event_id)
    await store.delete_guest(jane.id)
    after_delete = await view.load(event_id)

    assert after_rsvp.stats.confirmed == 1
    assert after_delete.stats.total == 0


async def test_group_delete_is_seen_without_events(view, store, event_id):
    group = await store.create_group(event_id=event_id, name="Family", color="#3B82F6")
    await store.create_guest(event_id=event_id, name="Jane", email="jane@x.com", group_id=group.id)
    assert [item.guest_count for item in (await view.load(event_id)).groups] == [1]

    await store.delete_group(group.id)

    assert (await view.load(event_id)).groups == []


async def test_sql_writes_without_bus_are_seen(db_session, event):
    view = GuestDashboardView(
        read_model=SqlGuestReadModel(session_overwrite=db_session), cache=GuestViewCache()
    )
    guest_model = SqlGuestWriteModel(session_overwrite=db_session)
    assert (await view.load(event.id)).stats.total == 0

    jane = await guest_model.create_guest(event_id=event.id, name="Jane", email="jane@x.com")
    after_create = await view.load(event.id)
    await SqlRSVPWriteModel(session_overwrite=db_session).set_rsvp_status(
        jane.id, RSVPStatus.DECLINED
    )
    after_rsvp = await view.load(event.id)
    await SqlGuestGroupWriteModel(session_overwrite=db_session).create_group(
        event_id=event.id, name="Family", color="#3B82F6"
    )
    after_group = await view.load(event.id)

    assert after_create.stats.total == 1
    assert after_rsvp.stats.declined == 1
    assert [item.group.name for item in after_group.groups] == ["Family"]
