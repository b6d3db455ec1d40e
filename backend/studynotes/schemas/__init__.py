from .base import CamelModel, MessageResponse
from .auth import UserRegister, UserLogin
from .user import User, UserRecord, UserProfileUpdate, UserResponse
from .project import Project, ProjectCreate, ProjectUpdate, ProjectResponse, ProjectListResponse
from .file import File, FileType, FileCreate, FileResponse, FileListResponse

__all__ = [
    "CamelModel",
    "MessageResponse",
    "UserRegister",
    "UserLogin",
    "User",
    "UserRecord",
    "UserProfileUpdate",
    "UserResponse",
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectListResponse",
    "File",
    "FileType",
    "FileCreate",
    "FileResponse",
    "FileListResponse",
]
