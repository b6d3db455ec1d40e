"""
Server-side sessions

A session is a record held in process memory and referenced by an opaque
cookie value. The cookie carries no user data; losing the process loses
every session, which forces users to log in again.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional
import secrets
import threading
import logging
from ..utils import get_current_timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    user_id: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class SessionManager:
    """Issues, resolves and destroys server-side sessions"""

    def __init__(self, max_age: timedelta = timedelta(days=7), clock: Callable[[], datetime] = get_current_timestamp):
        self.max_age = max_age
        self._clock = clock
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.RLock()

    def create(self, user_id: str) -> SessionRecord:
        """Start a new session for a user, dropping sessions that have expired"""
        self.purge_expired()
        now = self._clock()
        record = SessionRecord(
            session_id=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + self.max_age,
        )
        with self._lock:
            self._sessions[record.session_id] = record
        logger.debug(f"Session issued for user {user_id}")
        return record

    def get(self, session_id: Optional[str]) -> Optional[SessionRecord]:
        """Return the live session for an id, or None if unknown or expired"""
        if not session_id:
            return None
        with self._lock:
            record = self._sessions.get(session_id)
            if record is None:
                return None
            if record.is_expired(self._clock()):
                del self._sessions[session_id]
                logger.info(f"Session for user {record.user_id} expired")
                return None
            return record

    def destroy(self, session_id: Optional[str]) -> bool:
        if not session_id:
            return False
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        """Drop every expired session; returns how many were removed"""
        now = self._clock()
        with self._lock:
            expired = [sid for sid, record in self._sessions.items() if record.is_expired(now)]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info(f"Purged {len(expired)} expired sessions")
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
