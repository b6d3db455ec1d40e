from fastapi import HTTPException, status


class StudyNotesException(HTTPException):
    """Base exception for the Study Notes application"""
    
    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers: dict = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class InternalError(StudyNotesException):
    """Exception raised for unexpected failures; the detail is shown to clients"""
    
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(detail=detail)
