from .auth_service import AuthService
from .profile_service import ProfileService
from .project_service import ProjectService
from .file_service import FileService

__all__ = [
    "AuthService",
    "ProfileService",
    "ProjectService",
    "FileService",
]
