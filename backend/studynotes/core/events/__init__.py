from .bus import Event, EventBus
from .events import (
    StorageFallbackEvent,
    UserRegisteredEvent,
    ProjectDeletedEvent,
    FileAddedEvent,
)

__all__ = [
    "Event",
    "EventBus",
    "StorageFallbackEvent",
    "UserRegisteredEvent",
    "ProjectDeletedEvent",
    "FileAddedEvent",
]
