from typing import Optional, Tuple
from ..storage import ResilientStorage
from ..core.sessions import SessionManager, SessionRecord
from ..core.events import EventBus, UserRegisteredEvent
from ..schemas import UserRecord, UserRegister, UserLogin
from ..exceptions import ConflictError, AuthenticationError, NotFoundError
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """Service for registration, login and session lifecycle"""
    
    def __init__(self, storage: ResilientStorage, sessions: SessionManager, event_bus: Optional[EventBus] = None):
        self.storage = storage
        self.sessions = sessions
        self.event_bus = event_bus
    
    def register(self, user_data: UserRegister, previous_session_id: Optional[str] = None) -> Tuple[UserRecord, SessionRecord]:
        """Register a new user and start a session for them"""
        logger.info(f"Attempting to register user: {user_data.email}")
        
        if self.storage.get_user_by_email(user_data.email):
            logger.warning(f"Registration failed: email already exists - {user_data.email}")
            raise ConflictError("Email already registered")
        
        if self.storage.get_user_by_username(user_data.username):
            logger.warning(f"Registration failed: username already taken - {user_data.username}")
            raise ConflictError("Username already taken")
        
        try:
            user = self.storage.create_user(user_data)
        except Exception as e:
            logger.error(f"Error registering user: {e}")
            raise
        
        logger.info(f"User registered successfully: {user.email}")
        if self.event_bus is not None:
            self.event_bus.publish(UserRegisteredEvent(user.id, user.username))
        
        return user, self._start_session(user.id, previous_session_id)
    
    def login(self, user_data: UserLogin, previous_session_id: Optional[str] = None) -> Tuple[UserRecord, SessionRecord]:
        """Check credentials and start a session"""
        logger.info(f"Attempting login for: {user_data.email}")
        
        user = self.storage.validate_user(user_data.email, user_data.password)
        if not user:
            logger.warning(f"Login failed for: {user_data.email}")
            raise AuthenticationError("Invalid credentials")
        
        logger.info(f"User logged in successfully: {user.email}")
        return user, self._start_session(user.id, previous_session_id)
    
    def logout(self, session_id: Optional[str]) -> None:
        if self.sessions.destroy(session_id):
            logger.info("Session destroyed on logout")
    
    def get_current_user(self, user_id: str) -> UserRecord:
        """Load the user behind a session"""
        user = self.storage.get_user(user_id)
        if not user:
            # Session outlived its user, e.g. records written during a storage outage
            logger.warning(f"Session references missing user {user_id}")
            raise NotFoundError("User", user_id)
        return user
    
    def _start_session(self, user_id: str, previous_session_id: Optional[str]) -> SessionRecord:
        if previous_session_id:
            self.sessions.destroy(previous_session_id)
        return self.sessions.create(user_id)
