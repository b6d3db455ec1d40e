"""
Storage contract

Every backend (durable or in-memory) implements StorageBackend. Password
hashing and credential checks live here so both backends treat credentials
identically.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional
from ..core.security import get_password_hash, verify_password
from ..schemas import UserRecord, UserRegister, Project, ProjectCreate, File, FileCreate
import logging

logger = logging.getLogger(__name__)


class BackendUnavailableError(Exception):
    """Raised when a storage backend cannot be reached (connection or driver failure)"""
    
    def __init__(self, backend: str, reason: str):
        super().__init__(f"{backend} storage unavailable: {reason}")
        self.backend = backend
        self.reason = reason


def file_counters(file_types: Iterable[str]) -> Dict[str, int]:
    """Project counters derived from the types of its files"""
    types = list(file_types)
    return {
        "file_count": len(types),
        "image_count": sum(1 for t in types if t == "image"),
        "pdf_count": sum(1 for t in types if t == "pdf"),
    }


class StorageBackend(ABC):
    """Storage operations for users, projects and files"""
    
    name = "storage"
    
    def __init__(self, bcrypt_rounds: int = 12, default_preferred_model: str = "gpt-4"):
        self.bcrypt_rounds = bcrypt_rounds
        self.default_preferred_model = default_preferred_model
    
    # User operations
    
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        ...
    
    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        ...
    
    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        ...
    
    @abstractmethod
    def _insert_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Persist a user whose password is already hashed"""
    
    @abstractmethod
    def update_user_profile(self, user_id: str, updates: Dict[str, Any]) -> UserRecord:
        """Apply profile changes; raises NotFoundError for an unknown user"""
    
    def create_user(self, user_data: UserRegister) -> UserRecord:
        """Hash the password and persist a new user"""
        password_hash = get_password_hash(user_data.password, rounds=self.bcrypt_rounds)
        return self._insert_user(user_data.username, user_data.email, password_hash)
    
    def validate_user(self, email: str, password: str) -> Optional[UserRecord]:
        """Return the user for matching credentials, None otherwise"""
        user = self.get_user_by_email(email)
        if not user:
            logger.debug(f"Credential check failed: unknown email {email}")
            return None
        if not verify_password(password, user.password):
            logger.debug(f"Credential check failed: wrong password for {email}")
            return None
        return user
    
    # Project operations
    
    @abstractmethod
    def get_projects(self, user_id: str) -> List[Project]:
        """Projects owned by a user, most recently accessed first"""
    
    @abstractmethod
    def get_project(self, project_id: str) -> Optional[Project]:
        ...
    
    @abstractmethod
    def create_project(self, user_id: str, project_data: ProjectCreate) -> Project:
        ...
    
    @abstractmethod
    def update_project(self, project_id: str, updates: Dict[str, Any]) -> Project:
        """Apply partial changes; raises NotFoundError for an unknown project"""
    
    @abstractmethod
    def delete_project(self, project_id: str) -> None:
        """Delete a project and all of its files"""
    
    # File operations
    
    @abstractmethod
    def get_project_files(self, project_id: str) -> List[File]:
        ...
    
    @abstractmethod
    def get_file(self, file_id: str) -> Optional[File]:
        ...
    
    @abstractmethod
    def add_file(self, project_id: str, file_data: FileCreate) -> File:
        """Insert a file and recompute the parent project's counters atomically"""
    
    @abstractmethod
    def delete_file(self, file_id: str) -> None:
        """Delete a file and recompute the parent project's counters atomically"""
