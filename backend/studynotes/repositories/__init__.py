from .base import BaseRepository
from .user_repository import UserRepository
from .project_repository import ProjectRepository
from .file_repository import FileRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ProjectRepository",
    "FileRepository",
]
