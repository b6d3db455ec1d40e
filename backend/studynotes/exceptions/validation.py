from fastapi import status
from .base import StudyNotesException


class ValidationError(StudyNotesException):
    """Exception raised when validation fails"""
    
    def __init__(self, detail: str = "Invalid input data"):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_400_BAD_REQUEST
        )


class ConflictError(ValidationError):
    """Exception raised when a unique field (email, username) is already taken"""
