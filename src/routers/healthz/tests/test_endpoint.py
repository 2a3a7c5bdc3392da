import pytest

from src.config.settings import settings


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/healthz/")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "0.1.0"
    assert data["environment"] == settings.ENVIRONMENT
    assert data["rsvp_transition_policy"] == settings.rsvp_transition_policy


@pytest.mark.asyncio
async def test_root_endpoint(client):
    """Test the root endpoint returns welcome message."""
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Welcome to the Event Guests API"
