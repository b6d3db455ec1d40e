from .database import Base, build_engine, create_session_factory, session_scope, init_db
from .security import verify_password, get_password_hash, ApiKeyCipher
from .sessions import SessionManager, SessionRecord
from .logging_config import setup_logging
from .events import Event, EventBus

__all__ = [
    "Base",
    "build_engine",
    "create_session_factory",
    "session_scope",
    "init_db",
    "verify_password",
    "get_password_hash",
    "ApiKeyCipher",
    "SessionManager",
    "SessionRecord",
    "setup_logging",
    "Event",
    "EventBus",
]
