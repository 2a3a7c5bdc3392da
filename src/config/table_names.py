from enum import Enum


class TableNames(str, Enum):
    EVENTS = "events"
    GUESTS = "guests"
    GUEST_GROUPS = "guest_groups"
