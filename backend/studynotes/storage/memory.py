"""
In-memory storage backend

Process-local dicts keyed by id. Used as the fallback when the durable
store is unreachable, and directly in tests. Nothing here is persisted or
shared with other processes.
"""
from typing import Any, Dict, List, Optional
import threading
from .base import StorageBackend, file_counters
from ..schemas import UserRecord, Project, ProjectCreate, File, FileCreate
from ..exceptions import NotFoundError, ConflictError
from ..utils import get_current_timestamp, new_id
import logging

logger = logging.getLogger(__name__)


class MemoryStorage(StorageBackend):
    """Storage backend over process-local dicts"""

    name = "memory"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._users: Dict[str, UserRecord] = {}
        self._projects: Dict[str, Project] = {}
        self._files: Dict[str, File] = {}
        # Re-entrant: add_file reads files and writes the project under one hold
        self._lock = threading.RLock()

    def clear(self) -> None:
        with self._lock:
            self._users.clear()
            self._projects.clear()
            self._files.clear()

    # User operations

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user.model_copy()
        return None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user.model_copy()
        return None

    def _insert_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        now = get_current_timestamp()
        with self._lock:
            for existing in self._users.values():
                if existing.email == email:
                    raise ConflictError("Email already registered")
                if existing.username == username:
                    raise ConflictError("Username already taken")
            user = UserRecord(
                id=new_id(),
                username=username,
                email=email,
                password=password_hash,
                preferred_model=self.default_preferred_model,
                api_key=None,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
        logger.debug(f"Stored user {user.id} in memory")
        return user.model_copy()

    def update_user_profile(self, user_id: str, updates: Dict[str, Any]) -> UserRecord:
        with self._lock:
            user = self._users.get(user_id)
            if not user:
                raise NotFoundError("User", user_id)
            updated = user.model_copy(update={**updates, "updated_at": get_current_timestamp()})
            self._users[user_id] = updated
            return updated.model_copy()

    # Project operations

    def get_projects(self, user_id: str) -> List[Project]:
        with self._lock:
            projects = [p.model_copy() for p in self._projects.values() if p.user_id == user_id]
        return sorted(projects, key=lambda p: p.last_accessed, reverse=True)

    def get_project(self, project_id: str) -> Optional[Project]:
        with self._lock:
            project = self._projects.get(project_id)
            return project.model_copy() if project else None

    def create_project(self, user_id: str, project_data: ProjectCreate) -> Project:
        now = get_current_timestamp()
        project = Project(
            id=new_id(),
            user_id=user_id,
            name=project_data.name,
            description=project_data.description,
            category=project_data.category,
            file_count=0,
            image_count=0,
            pdf_count=0,
            query_count=0,
            last_accessed=now,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._projects[project.id] = project
        return project.model_copy()

    def update_project(self, project_id: str, updates: Dict[str, Any]) -> Project:
        unknown = set(updates) - set(Project.model_fields)
        if unknown:
            raise ValueError(f"Unknown project fields: {sorted(unknown)}")
        with self._lock:
            project = self._projects.get(project_id)
            if not project:
                raise NotFoundError("Project", project_id)
            updated = project.model_copy(update={**updates, "updated_at": get_current_timestamp()})
            self._projects[project_id] = updated
            return updated.model_copy()

    def delete_project(self, project_id: str) -> None:
        with self._lock:
            self._projects.pop(project_id, None)
            orphaned = [fid for fid, f in self._files.items() if f.project_id == project_id]
            for fid in orphaned:
                del self._files[fid]
        logger.debug(f"Deleted project {project_id} and {len(orphaned)} files from memory")

    # File operations

    def get_project_files(self, project_id: str) -> List[File]:
        with self._lock:
            return [f.model_copy() for f in self._files.values() if f.project_id == project_id]

    def get_file(self, file_id: str) -> Optional[File]:
        with self._lock:
            stored = self._files.get(file_id)
            return stored.model_copy() if stored else None

    def add_file(self, project_id: str, file_data: FileCreate) -> File:
        with self._lock:
            if project_id not in self._projects:
                raise NotFoundError("Project", project_id)
            stored = File(
                id=new_id(),
                project_id=project_id,
                name=file_data.name,
                type=file_data.type,
                size=file_data.size,
                url=file_data.url,
                uploaded_at=get_current_timestamp(),
            )
            self._files[stored.id] = stored
            self._recount(project_id)
            return stored.model_copy()

    def delete_file(self, file_id: str) -> None:
        with self._lock:
            stored = self._files.pop(file_id, None)
            if stored and stored.project_id in self._projects:
                self._recount(stored.project_id)

    def _recount(self, project_id: str) -> None:
        # Caller holds self._lock
        types = [f.type.value for f in self._files.values() if f.project_id == project_id]
        self.update_project(project_id, file_counters(types))
