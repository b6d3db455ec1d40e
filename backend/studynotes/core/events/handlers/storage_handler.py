"""
Storage Event Handler

Makes degraded-mode storage visible in the logs.
"""
from ..events import StorageFallbackEvent
import logging

logger = logging.getLogger(__name__)


class StorageEventHandler:
    """Handler for storage fallback events"""
    
    def handle_fallback(self, event: StorageFallbackEvent):
        if event.fallback_count == 1:
            logger.error(
                f"Durable storage unreachable during '{event.operation}' ({event.reason}); "
                f"serving from in-memory store. Writes made now will not be persisted."
            )
        else:
            logger.warning(
                f"Storage fallback #{event.fallback_count} for '{event.operation}' at {event.timestamp}"
            )
