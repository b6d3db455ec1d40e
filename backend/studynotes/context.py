"""
Application context

Owns every piece of process-wide state (storage backends, sessions, event
bus). One context is created per application at startup and discarded at
shutdown, so tests get isolation by building a fresh app.
"""
from datetime import timedelta
from typing import Optional
from .config import Settings
from .core.events import EventBus
from .core.events.handlers import register_event_handlers
from .core.security import ApiKeyCipher
from .core.sessions import SessionManager
from .storage import StorageBackend, DatabaseStorage, MemoryStorage, ResilientStorage, BackendUnavailableError
import logging

logger = logging.getLogger(__name__)


class AppContext:
    """Process-wide collaborators shared by request handlers"""
    
    def __init__(self, settings: Settings, primary_storage: Optional[StorageBackend] = None):
        self.settings = settings
        self.event_bus = EventBus()
        register_event_handlers(self.event_bus)
        
        backend_options = {
            "bcrypt_rounds": settings.bcrypt_rounds,
            "default_preferred_model": settings.default_preferred_model,
        }
        self.primary_storage = primary_storage or DatabaseStorage(
            database_url=settings.database_url,
            debug=settings.debug,
            **backend_options,
        )
        self.memory_storage = MemoryStorage(**backend_options)
        self.storage = ResilientStorage(self.primary_storage, self.memory_storage, self.event_bus)
        
        self.sessions = SessionManager(max_age=timedelta(days=settings.session_max_age_days))
        self.api_key_cipher = ApiKeyCipher(settings.secret_key, settings.api_key_encryption_key)
    
    def startup(self) -> None:
        """Connect the durable store early so an outage is reported at boot"""
        if isinstance(self.primary_storage, DatabaseStorage):
            try:
                self.primary_storage.connect()
            except BackendUnavailableError as e:
                logger.warning(f"Starting without durable storage, requests will use memory: {e.reason}")
        logger.info("Application context started")
    
    def shutdown(self) -> None:
        self.sessions.clear()
        self.memory_storage.clear()
        if isinstance(self.primary_storage, DatabaseStorage):
            self.primary_storage.dispose()
        logger.info("Application context stopped")
