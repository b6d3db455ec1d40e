"""
Event Bus for Decoupled Service Communication

Services publish events for cross-cutting concerns (logging, audit, degraded
mode alerts) that must not block or fail the main request flow. Each
application context owns its own bus.
"""
from typing import List, Callable, Dict, Type
from abc import ABC
import logging

logger = logging.getLogger(__name__)


class Event(ABC):
    """Base event class - all events inherit from this"""
    pass


class EventBus:
    """Synchronous in-process publish/subscribe"""
    
    def __init__(self):
        self._subscribers: Dict[Type[Event], List[Callable]] = {}
        logger.debug("Event bus initialized")
    
    def subscribe(self, event_type: Type[Event], handler: Callable):
        """
        Subscribe to an event type
        
        Args:
            event_type: The event class to subscribe to
            handler: Callable that handles the event
        """
        self._subscribers.setdefault(event_type, []).append(handler)
        logger.debug(f"Subscribed handler {getattr(handler, '__name__', handler)} to {event_type.__name__}")
    
    def unsubscribe(self, event_type: Type[Event], handler: Callable):
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
    
    def publish(self, event: Event):
        """
        Publish an event to all subscribers
        
        A failing handler is logged and skipped; the publisher never sees
        handler errors.
        
        Args:
            event: Event instance to publish
        """
        event_type = type(event)
        handlers = list(self._subscribers.get(event_type, []))
        if not handlers:
            logger.debug(f"No subscribers for event {event_type.__name__}")
            return
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    f"Error handling event {event_type.__name__} in {getattr(handler, '__name__', handler)}: {e}",
                    exc_info=True
                )
