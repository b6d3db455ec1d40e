from .query_cache import QueryCache
from .studynotes_client import StudyNotesClient, ApiError

__all__ = [
    "QueryCache",
    "StudyNotesClient",
    "ApiError",
]
