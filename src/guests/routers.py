from fastapi import APIRouter

from .features.guest_dashboard.router import router as guest_dashboard_router
from .features.guest_stats.router import router as guest_stats_router
from .features.invitations.router import router as invitations_router
from .features.manage_groups.router import router as manage_groups_router
from .features.manage_guests.router import router as manage_guests_router
from .features.update_rsvp.router import router as update_rsvp_router

router = APIRouter()

router.include_router(guest_stats_router)
router.include_router(guest_dashboard_router)
router.include_router(manage_guests_router)
router.include_router(update_rsvp_router)
router.include_router(invitations_router)
router.include_router(manage_groups_router)
