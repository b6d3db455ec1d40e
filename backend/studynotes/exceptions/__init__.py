from .base import StudyNotesException, InternalError
from .not_found import NotFoundError
from .validation import ValidationError, ConflictError
from .auth import AuthenticationError, AuthorizationError

__all__ = [
    "StudyNotesException",
    "InternalError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
]
