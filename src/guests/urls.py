GUESTS_URL = "/api/v1/events/{event_id}/guests"
GUEST_URL = "/api/v1/guests/{guest_id}"
GUEST_RSVP_URL = "/api/v1/guests/{guest_id}/rsvp"
GUEST_INVITATION_URL = "/api/v1/guests/{guest_id}/invitation"
GUEST_REINVITE_URL = "/api/v1/guests/{guest_id}/reinvite"
GUEST_STATS_URL = "/api/v1/events/{event_id}/guests/stats"
GUEST_DASHBOARD_URL = "/api/v1/events/{event_id}/guests/dashboard"

GROUPS_URL = "/api/v1/events/{event_id}/groups"
GROUP_URL = "/api/v1/groups/{group_id}"
