from fastapi import status
from .base import StudyNotesException


class NotFoundError(StudyNotesException):
    """Exception raised when a resource is not found"""
    
    def __init__(self, resource: str, identifier: str = None):
        detail = f"{resource} not found"
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            detail=detail,
            status_code=status.HTTP_404_NOT_FOUND
        )
