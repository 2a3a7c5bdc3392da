from uuid import uuid4

import pytest

from src.guests.dtos import RSVPStatus
from src.guests.urls import GUEST_URL, GUESTS_URL


async def add_guest(guest_store, event_id, name, email, **fields):
    return await guest_store.create_guest(event_id=event_id, name=name, email=email, **fields)


@pytest.mark.asyncio
async def test_create_guest(store_client, guest_store, event_id):
    response = await store_client.post(
        GUESTS_URL.format(event_id=event_id),
        json={"name": "Jane Doe", "email": "jane@x.com", "group_category": "Family"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Jane Doe"
    assert data["event_id"] == str(event_id)
    assert data["rsvp_status"] == RSVPStatus.PENDING.value
    assert data["invitation_sent"] is False
    assert data["group_category"] == "Family"
    assert len(guest_store.guests) == 1


@pytest.mark.asyncio
async def test_create_guest_rejects_invalid_email(store_client, guest_store, event_id):
    response = await store_client.post(
        GUESTS_URL.format(event_id=event_id), json={"name": "Jane", "email": "not-an-email"}
    )

    assert response.status_code == 422
    assert guest_store.guests == {}


@pytest.mark.asyncio
async def test_create_guest_rejects_blank_name(store_client, guest_store, event_id):
    response = await store_client.post(
        GUESTS_URL.format(event_id=event_id), json={"name": "  ", "email": "jane@x.com"}
    )

    assert response.status_code == 422
    assert "name" in response.json()["detail"]


@pytest.mark.asyncio
async def test_create_guest_rejects_group_of_another_event(store_client, guest_store, event_id):
    other_event_id = uuid4()
    guest_store.event_ids.add(other_event_id)
    other_group = await guest_store.create_group(
        event_id=other_event_id, name="Friends", color="#10B981"
    )

    response = await store_client.post(
        GUESTS_URL.format(event_id=event_id),
        json={"name": "Jane", "email": "jane@x.com", "group_id": str(other_group.id)},
    )

    assert response.status_code == 422
    assert guest_store.guests == {}


@pytest.mark.asyncio
async def test_update_guest_rejects_group_of_another_event(store_client, guest_store, event_id):
    other_event_id = uuid4()
    guest_store.event_ids.add(other_event_id)
    other_group = await guest_store.create_group(
        event_id=other_event_id, name="Friends", color="#10B981"
    )
    guest = await add_guest(guest_store, event_id, "Jane", "jane@x.com")

    response = await store_client.patch(
        GUEST_URL.format(guest_id=guest.id), json={"group_id": str(other_group.id)}
    )

    assert response.status_code == 422
    assert guest_store.guests[guest.id].group_id is None


@pytest.mark.asyncio
async def test_create_guest_for_unknown_event(store_client):
    response = await store_client.post(
        GUESTS_URL.format(event_id=uuid4()), json={"name": "Jane", "email": "jane@x.com"}
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_guest_store_failure(store_client, guest_store, event_id):
    guest_store.fail_writes = True

    response = await store_client.post(
        GUESTS_URL.format(event_id=event_id), json={"name": "Jane", "email": "jane@x.com"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "database is read-only"


@pytest.mark.asyncio
async def test_list_guests_search_and_filter(store_client, guest_store, event_id):
    await add_guest(guest_store, event_id, "Zoe Doe", "zoe@x.com")
    adam = await add_guest(guest_store, event_id, "Adam Doe", "adam@x.com")
    await add_guest(guest_store, event_id, "Bob Smith", "bob@x.com")
    await guest_store.set_rsvp_status(adam.id, RSVPStatus.CONFIRMED)
    url = GUESTS_URL.format(event_id=event_id)

    everyone = await store_client.get(url)
    does = await store_client.get(url, params={"search": "doe"})
    confirmed_does = await store_client.get(url, params={"search": "DOE", "status": "confirmed"})
    all_status = await store_client.get(url, params={"status": "all"})

    assert [g["name"] for g in everyone.json()] == ["Adam Doe", "Bob Smith", "Zoe Doe"]
    assert [g["name"] for g in does.json()] == ["Adam Doe", "Zoe Doe"]
    assert [g["name"] for g in confirmed_does.json()] == ["Adam Doe"]
    assert len(all_status.json()) == 3


@pytest.mark.asyncio
async def test_list_guests_unknown_status(store_client, event_id):
    response = await store_client.get(
        GUESTS_URL.format(event_id=event_id), params={"status": "attending"}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_guest(store_client, guest_store, event_id):
    guest = await add_guest(guest_store, event_id, "Jane", "jane@x.com")

    found = await store_client.get(GUEST_URL.format(guest_id=guest.id))
    missing = await store_client.get(GUEST_URL.format(guest_id=uuid4()))

    assert found.status_code == 200
    assert found.json()["id"] == str(guest.id)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_guest_changes_only_sent_fields(store_client, guest_store, event_id):
    guest = await add_guest(
        guest_store, event_id, "Jane", "jane@x.com", phone="555-0100", notes="keep me"
    )

    response = await store_client.patch(
        GUEST_URL.format(guest_id=guest.id), json={"phone": "555-0199"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["phone"] == "555-0199"
    assert data["notes"] == "keep me"
    assert data["name"] == "Jane"
    assert guest_store.guests[guest.id].updated_at > guest.updated_at


@pytest.mark.asyncio
async def test_update_guest_can_clear_a_field(store_client, guest_store, event_id):
    guest = await add_guest(guest_store, event_id, "Jane", "jane@x.com", notes="remove me")

    response = await store_client.patch(GUEST_URL.format(guest_id=guest.id), json={"notes": None})

    assert response.status_code == 200
    assert response.json()["notes"] is None


@pytest.mark.asyncio
async def test_update_missing_guest(store_client):
    response = await store_client.patch(GUEST_URL.format(guest_id=uuid4()), json={"notes": "x"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_guest_requires_confirmation(store_client, guest_store, event_id):
    guest = await add_guest(guest_store, event_id, "Jane", "jane@x.com")

    response = await store_client.delete(GUEST_URL.format(guest_id=guest.id))

    assert response.status_code == 409
    assert guest.id in guest_store.guests


@pytest.mark.asyncio
async def test_delete_guest(store_client, guest_store, event_id):
    guest = await add_guest(guest_store, event_id, "Jane", "jane@x.com")

    response = await store_client.delete(
        GUEST_URL.format(guest_id=guest.id), params={"confirm": "true"}
    )
    again = await store_client.delete(
        GUEST_URL.format(guest_id=guest.id), params={"confirm": "true"}
    )

    assert response.status_code == 204
    assert guest_store.guests == {}
    assert again.status_code == 404
