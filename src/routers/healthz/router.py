from fastapi import APIRouter
from pydantic import BaseModel

from src.config.settings import settings

router = APIRouter()

API_VERSION = "0.1.0"


class HealthCheckResponse(BaseModel):
    status: str
    version: str = API_VERSION
    environment: str
    rsvp_transition_policy: str


@router.get("/", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """
    Report that the API is up, and which RSVP transition policy it enforces.
    """
    return HealthCheckResponse(
        status="healthy",
        environment=settings.ENVIRONMENT,
        rsvp_transition_policy=settings.rsvp_transition_policy,
    )
