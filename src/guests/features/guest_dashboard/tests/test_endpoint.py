import pytest

from src.guests.dtos import RSVPStatus
from src.guests.urls import GUEST_DASHBOARD_URL, GUEST_RSVP_URL, GUESTS_URL
from src.main import app


@pytest.mark.asyncio
async def test_dashboard_contents(store_client, guest_store, event_id):
    family = await guest_store.create_group(event_id=event_id, name="Family", color="#3B82F6")
    friends = await guest_store.create_group(event_id=event_id, name="Friends", color="#10B981")
    jane = await guest_store.create_guest(
        event_id=event_id, name="Jane", email="jane@x.com", group_id=family.id
    )
    await guest_store.create_guest(
        event_id=event_id, name="Aunt May", email="may@x.com", group_category="Family"
    )
    await guest_store.create_guest(event_id=event_id, name="Bob", email="bob@x.com")
    await guest_store.mark_invitation_sent(jane.id)
    await guest_store.set_rsvp_status(jane.id, RSVPStatus.CONFIRMED)

    response = await store_client.get(GUEST_DASHBOARD_URL.format(event_id=event_id))

    assert response.status_code == 200
    data = response.json()
    assert data["event_id"] == str(event_id)
    assert [guest["name"] for guest in data["guests"]] == ["Aunt May", "Bob", "Jane"]
    counts = {group["id"]: group["guest_count"] for group in data["groups"]}
    assert counts == {str(family.id): 2, str(friends.id): 0}
    assert data["stats"] == {"total": 3, "confirmed": 1, "maybe": 0, "pending": 2, "declined": 0}
    assert data["invitation_summary"] == {
        "total": 3,
        "sent": 1,
        "not_sent": 2,
        "responded": 1,
        "response_rate": 33,
    }


@pytest.mark.asyncio
async def test_dashboard_sees_writes_made_without_the_bus(store_client, guest_store, event_id):
    url = GUEST_DASHBOARD_URL.format(event_id=event_id)
    await store_client.get(url)
    assert event_id in app.state.guest_view_cache

    # like another worker or the CLI: the write never reaches this process's bus
    guest_store.event_bus = None
    await guest_store.create_guest(event_id=event_id, name="Quiet", email="quiet@x.com")
    response = await store_client.get(url)

    assert response.json()["stats"]["total"] == 1
    assert [guest["name"] for guest in response.json()["guests"]] == ["Quiet"]


@pytest.mark.asyncio
async def test_mutation_revalidates_dashboard(store_client, event_id):
    url = GUEST_DASHBOARD_URL.format(event_id=event_id)
    assert (await store_client.get(url)).json()["stats"]["total"] == 0

    created = await store_client.post(
        GUESTS_URL.format(event_id=event_id), json={"name": "Jane", "email": "jane@x.com"}
    )
    assert event_id not in app.state.guest_view_cache
    after_create = await store_client.get(url)

    await store_client.put(
        GUEST_RSVP_URL.format(guest_id=created.json()["id"]), json={"status": "maybe"}
    )
    after_rsvp = await store_client.get(url)

    assert after_create.json()["stats"]["total"] == 1
    assert after_rsvp.json()["stats"]["maybe"] == 1


@pytest.mark.asyncio
async def test_failed_mutation_keeps_cached_view(store_client, guest_store, event_id):
    url = GUEST_DASHBOARD_URL.format(event_id=event_id)
    await store_client.get(url)
    guest_store.fail_writes = True

    response = await store_client.post(
        GUESTS_URL.format(event_id=event_id), json={"name": "Jane", "email": "jane@x.com"}
    )

    assert response.status_code == 400
    assert event_id in app.state.guest_view_cache
