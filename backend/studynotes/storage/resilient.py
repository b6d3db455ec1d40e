"""
Storage facade with in-memory fallback

Every call goes to the durable backend first. When that backend is
unreachable the same call is re-run on the in-memory backend, the event is
logged, counted and published. The two stores are never reconciled: data
written while degraded lives only in this process and is lost on restart.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
import threading

from .base import StorageBackend, BackendUnavailableError
from ..core.events import EventBus, StorageFallbackEvent
from ..core.telemetry import get_tracer
from ..schemas import UserRecord, UserRegister, Project, ProjectCreate, File, FileCreate
from ..utils import get_current_timestamp
import logging

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class ResilientStorage:
    """Single entry point for storage; degrades to the fallback backend on outages"""

    def __init__(
        self,
        primary: StorageBackend,
        fallback: StorageBackend,
        event_bus: Optional[EventBus] = None,
    ):
        self.primary = primary
        self.fallback = fallback
        self.event_bus = event_bus
        self._state_lock = threading.Lock()
        self._fallback_count = 0
        self._degraded = False
        self._last_fallback_at: Optional[datetime] = None

    @property
    def degraded(self) -> bool:
        """True while the most recent call was served by the fallback backend"""
        return self._degraded

    @property
    def fallback_count(self) -> int:
        return self._fallback_count

    @property
    def last_fallback_at(self) -> Optional[datetime]:
        return self._last_fallback_at

    def status(self) -> Dict[str, Any]:
        with self._state_lock:
            return {
                "backend": self.fallback.name if self._degraded else self.primary.name,
                "degraded": self._degraded,
                "fallbackCount": self._fallback_count,
                "lastFallbackAt": self._last_fallback_at.isoformat() if self._last_fallback_at else None,
            }

    def _call(self, operation: str, *args, **kwargs):
        try:
            result = getattr(self.primary, operation)(*args, **kwargs)
        except BackendUnavailableError as e:
            return self._fall_back(operation, e, *args, **kwargs)
        if self._degraded:
            with self._state_lock:
                self._degraded = False
            logger.warning(
                f"{self.primary.name} storage reachable again; records written in the meantime "
                f"remain only in {self.fallback.name} storage"
            )
        return result

    def _fall_back(self, operation: str, error: BackendUnavailableError, *args, **kwargs):
        with self._state_lock:
            self._fallback_count += 1
            self._degraded = True
            self._last_fallback_at = get_current_timestamp()
            count = self._fallback_count
        logger.warning(f"Storage fallback for '{operation}': {error.reason}")
        if self.event_bus is not None:
            self.event_bus.publish(StorageFallbackEvent(operation, error.reason, count))
        with tracer.start_as_current_span("storage.fallback") as span:
            span.set_attribute("storage.operation", operation)
            span.set_attribute("storage.fallback_backend", self.fallback.name)
            return getattr(self.fallback, operation)(*args, **kwargs)

    # User operations

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self._call("get_user", user_id)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return self._call("get_user_by_email", email)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        return self._call("get_user_by_username", username)

    def create_user(self, user_data: UserRegister) -> UserRecord:
        return self._call("create_user", user_data)

    def validate_user(self, email: str, password: str) -> Optional[UserRecord]:
        return self._call("validate_user", email, password)

    def update_user_profile(self, user_id: str, updates: Dict[str, Any]) -> UserRecord:
        return self._call("update_user_profile", user_id, updates)

    # Project operations

    def get_projects(self, user_id: str) -> List[Project]:
        return self._call("get_projects", user_id)

    def get_project(self, project_id: str) -> Optional[Project]:
        return self._call("get_project", project_id)

    def create_project(self, user_id: str, project_data: ProjectCreate) -> Project:
        return self._call("create_project", user_id, project_data)

    def update_project(self, project_id: str, updates: Dict[str, Any]) -> Project:
        return self._call("update_project", project_id, updates)

    def delete_project(self, project_id: str) -> None:
        return self._call("delete_project", project_id)

    # File operations

    def get_project_files(self, project_id: str) -> List[File]:
        return self._call("get_project_files", project_id)

    def get_file(self, file_id: str) -> Optional[File]:
        return self._call("get_file", file_id)

    def add_file(self, project_id: str, file_data: FileCreate) -> File:
        return self._call("add_file", project_id, file_data)

    def delete_file(self, file_id: str) -> None:
        return self._call("delete_file", file_id)
