"""
Event Handler Classes and Registration

Each event family has a dedicated handler class.
"""
from .storage_handler import StorageEventHandler
from .activity_handler import ActivityEventHandler
from ..bus import EventBus
from ..events import (
    StorageFallbackEvent,
    UserRegisteredEvent,
    ProjectDeletedEvent,
    FileAddedEvent,
)
import logging

logger = logging.getLogger(__name__)


def register_event_handlers(bus: EventBus):
    """Register all event handlers with an event bus"""
    storage_handler = StorageEventHandler()
    activity_handler = ActivityEventHandler()
    bus.subscribe(StorageFallbackEvent, storage_handler.handle_fallback)
    bus.subscribe(UserRegisteredEvent, activity_handler.handle_user_registered)
    bus.subscribe(ProjectDeletedEvent, activity_handler.handle_project_deleted)
    bus.subscribe(FileAddedEvent, activity_handler.handle_file_added)
    logger.info("Event handlers registered successfully")


__all__ = [
    "StorageEventHandler",
    "ActivityEventHandler",
    "register_event_handlers",
]
