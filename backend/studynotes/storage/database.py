"""
Durable storage backend (SQLAlchemy)

The engine is created lazily on first use, so a missing driver or an
unreachable server surfaces as BackendUnavailableError on the call that
needed it rather than at import time. A failed initialization is retried
on the next call.
"""
from contextlib import contextmanager
from typing import Any, Dict, List, Optional
import threading

from sqlalchemy.engine import Engine
from sqlalchemy.exc import (
    ArgumentError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    NoSuchModuleError,
    OperationalError,
)

from .base import StorageBackend, BackendUnavailableError
from ..core.database import build_engine, create_session_factory, session_scope, init_db
from ..models import Project as ProjectModel
from ..repositories import UserRepository, ProjectRepository, FileRepository
from ..schemas import UserRecord, Project, ProjectCreate, File, FileCreate
from ..exceptions import NotFoundError, ConflictError
from ..utils import get_current_timestamp
import logging

logger = logging.getLogger(__name__)

# Errors meaning "the database is not reachable", as opposed to a bad query
CONNECTION_ERRORS = (OperationalError, InterfaceError, DisconnectionError)
SETUP_ERRORS = CONNECTION_ERRORS + (ImportError, NoSuchModuleError, ArgumentError)


class DatabaseStorage(StorageBackend):
    """Storage backend over a relational database"""

    name = "database"

    def __init__(
        self,
        database_url: Optional[str] = None,
        engine: Optional[Engine] = None,
        debug: bool = False,
        **kwargs,
    ):
        super().__init__(**kwargs)
        if database_url is None and engine is None:
            raise ValueError("DatabaseStorage needs a database_url or an engine")
        self._database_url = database_url
        self._engine = engine
        self._debug = debug
        self._session_factory = None
        self._init_lock = threading.Lock()

    def _get_session_factory(self):
        if self._session_factory is not None:
            return self._session_factory
        with self._init_lock:
            if self._session_factory is None:
                try:
                    engine = self._engine or build_engine(self._database_url, debug=self._debug)
                    init_db(engine)
                except SETUP_ERRORS as e:
                    raise BackendUnavailableError(self.name, f"{type(e).__name__}: {e}") from e
                self._engine = engine
                self._session_factory = create_session_factory(engine)
                logger.info("Durable storage initialized")
        return self._session_factory

    @contextmanager
    def _transaction(self):
        """One unit of work; connection failures become BackendUnavailableError"""
        session_factory = self._get_session_factory()
        try:
            with session_scope(session_factory) as db:
                yield db
        except CONNECTION_ERRORS as e:
            raise BackendUnavailableError(self.name, f"{type(e).__name__}: {e}") from e

    def connect(self) -> None:
        """Create the engine and tables now instead of on first use"""
        self._get_session_factory()

    def dispose(self) -> None:
        """Release pooled connections"""
        if self._engine is not None:
            self._engine.dispose()

    # User operations

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self._transaction() as db:
            user = UserRepository(db).get(user_id)
            return UserRecord.model_validate(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self._transaction() as db:
            user = UserRepository(db).get_by_email(email)
            return UserRecord.model_validate(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self._transaction() as db:
            user = UserRepository(db).get_by_username(username)
            return UserRecord.model_validate(user) if user else None

    def _insert_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        try:
            with self._transaction() as db:
                user = UserRepository(db).create(
                    username=username,
                    email=email,
                    password=password_hash,
                    preferred_model=self.default_preferred_model,
                )
                return UserRecord.model_validate(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            logger.warning(f"User insert rejected by unique constraint: {e.orig}")
            raise ConflictError("Email or username already registered") from e

    def update_user_profile(self, user_id: str, updates: Dict[str, Any]) -> UserRecord:
        with self._transaction() as db:
            user = UserRepository(db).update(user_id, **updates, updated_at=get_current_timestamp())
            if not user:
                raise NotFoundError("User", user_id)
            return UserRecord.model_validate(user)

    # Project operations

    def get_projects(self, user_id: str) -> List[Project]:
        with self._transaction() as db:
            return [Project.model_validate(p) for p in ProjectRepository(db).get_by_user_id(user_id)]

    def get_project(self, project_id: str) -> Optional[Project]:
        with self._transaction() as db:
            project = ProjectRepository(db).get(project_id)
            return Project.model_validate(project) if project else None

    def create_project(self, user_id: str, project_data: ProjectCreate) -> Project:
        now = get_current_timestamp()
        with self._transaction() as db:
            project = ProjectRepository(db).create(
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
            return Project.model_validate(project)

    def update_project(self, project_id: str, updates: Dict[str, Any]) -> Project:
        unknown = set(updates) - set(ProjectModel.__table__.columns.keys())
        if unknown:
            raise ValueError(f"Unknown project fields: {sorted(unknown)}")
        with self._transaction() as db:
            project = ProjectRepository(db).update(project_id, **updates, updated_at=get_current_timestamp())
            if not project:
                raise NotFoundError("Project", project_id)
            return Project.model_validate(project)

    def delete_project(self, project_id: str) -> None:
        with self._transaction() as db:
            # ORM cascade removes the project's files in the same transaction
            ProjectRepository(db).delete(project_id)

    # File operations

    def get_project_files(self, project_id: str) -> List[File]:
        with self._transaction() as db:
            return [File.model_validate(f) for f in FileRepository(db).get_by_project_id(project_id)]

    def get_file(self, file_id: str) -> Optional[File]:
        with self._transaction() as db:
            stored = FileRepository(db).get(file_id)
            return File.model_validate(stored) if stored else None

    def add_file(self, project_id: str, file_data: FileCreate) -> File:
        with self._transaction() as db:
            project = ProjectRepository(db).get_for_update(project_id)
            if not project:
                raise NotFoundError("Project", project_id)
            file_repo = FileRepository(db)
            stored = file_repo.create(
                project_id=project_id,
                name=file_data.name,
                type=file_data.type.value,
                size=file_data.size,
                url=file_data.url,
                uploaded_at=get_current_timestamp(),
            )
            self._recount(db, project)
            return File.model_validate(stored)

    def delete_file(self, file_id: str) -> None:
        with self._transaction() as db:
            file_repo = FileRepository(db)
            stored = file_repo.get(file_id)
            if not stored:
                return
            project = ProjectRepository(db).get_for_update(stored.project_id)
            file_repo.delete(file_id)
            if project:
                self._recount(db, project)

    @staticmethod
    def _recount(db, project: ProjectModel) -> None:
        counts = FileRepository(db).count_by_type(project.id)
        project.file_count = sum(counts.values())
        project.image_count = counts.get("image", 0)
        project.pdf_count = counts.get("pdf", 0)
        project.updated_at = get_current_timestamp()
        db.flush()
