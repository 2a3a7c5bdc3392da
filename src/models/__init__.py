from .base import Base, BaseModel, TimeStamp
from .event import Event

__all__ = [
    "Base",
    "BaseModel",
    "TimeStamp",
    "Event",
]
