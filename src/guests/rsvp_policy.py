"""RSVP transition policies.

A policy is a transition table: for each current status, the set of statuses a
guest may move to. Re-applying the current status is always allowed.
"""

from collections.abc import Mapping

from src.guests.dtos import RSVPStatus
from src.guests.errors import InvalidRSVPTransitionError, ValidationError

RESPONDED = frozenset({RSVPStatus.CONFIRMED, RSVPStatus.DECLINED, RSVPStatus.MAYBE})


class RSVPTransitionPolicy:
    def __init__(self, name: str, transitions: Mapping[RSVPStatus, frozenset[RSVPStatus]]) -> None:
        self.name = name
        self._transitions = {status: frozenset(targets) for status, targets in transitions.items()}

    def allowed_targets(self, current: RSVPStatus) -> frozenset[RSVPStatus]:
        return self._transitions.get(RSVPStatus(current), frozenset()) | {RSVPStatus(current)}

    def can_transition(self, current: RSVPStatus, new: RSVPStatus) -> bool:
        return RSVPStatus(new) in self.allowed_targets(current)

    def ensure_transition(self, current: RSVPStatus, new: RSVPStatus) -> None:
        if not self.can_transition(current, new):
            raise InvalidRSVPTransitionError(RSVPStatus(current).value, RSVPStatus(new).value)

    def __repr__(self) -> str:
        return f"<RSVPTransitionPolicy {self.name}>"


OPEN_POLICY = RSVPTransitionPolicy(
    "open",
    {status: frozenset(RSVPStatus) for status in RSVPStatus},
)

# Going back to pending needs a re-invitation
DIRECTED_POLICY = RSVPTransitionPolicy(
    "directed",
    {
        RSVPStatus.PENDING: RESPONDED,
        RSVPStatus.CONFIRMED: RESPONDED,
        RSVPStatus.DECLINED: RESPONDED,
        RSVPStatus.MAYBE: RESPONDED,
    },
)

POLICIES = {policy.name: policy for policy in (OPEN_POLICY, DIRECTED_POLICY)}


def get_transition_policy(name: str) -> RSVPTransitionPolicy:
    try:
        return POLICIES[name.lower()]
    except KeyError:
        raise ValidationError(
            f"Unknown RSVP transition policy '{name}', expected one of {sorted(POLICIES)}"
        ) from None


def parse_status(value: str | RSVPStatus) -> RSVPStatus:
    try:
        return RSVPStatus(value)
    except ValueError:
        raise ValidationError(
            f"Unknown RSVP status '{value}', expected one of {[s.value for s in RSVPStatus]}"
        ) from None
