from fastapi import status
from .base import StudyNotesException


class AuthenticationError(StudyNotesException):
    """Exception raised when authentication fails"""
    
    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class AuthorizationError(StudyNotesException):
    """Exception raised when user is not authorized"""
    
    def __init__(self, detail: str = "Access denied"):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_403_FORBIDDEN
        )
