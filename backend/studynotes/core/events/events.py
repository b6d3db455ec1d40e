"""
Event Definitions

Events describe things that already happened. Core operations that need an
immediate result use direct service calls instead.
"""
from .bus import Event
from datetime import datetime, timezone


class StorageFallbackEvent(Event):
    """Fired when a storage call is re-run on the in-memory store"""
    
    def __init__(self, operation: str, reason: str, fallback_count: int):
        self.operation = operation
        self.reason = reason
        self.fallback_count = fallback_count
        self.timestamp = datetime.now(timezone.utc)
    
    def __repr__(self):
        return f"StorageFallbackEvent(operation='{self.operation}', fallback_count={self.fallback_count})"


class UserRegisteredEvent(Event):
    """Fired when a new account is created"""
    
    def __init__(self, user_id: str, username: str):
        self.user_id = user_id
        self.username = username
        self.timestamp = datetime.now(timezone.utc)
    
    def __repr__(self):
        return f"UserRegisteredEvent(user_id={self.user_id}, username='{self.username}')"


class ProjectDeletedEvent(Event):
    """Fired when a project and its files are deleted"""
    
    def __init__(self, project_id: str, user_id: str, project_name: str, file_count: int):
        self.project_id = project_id
        self.user_id = user_id
        self.project_name = project_name
        self.file_count = file_count
        self.timestamp = datetime.now(timezone.utc)
    
    def __repr__(self):
        return f"ProjectDeletedEvent(project_id={self.project_id}, user_id={self.user_id}, name='{self.project_name}')"


class FileAddedEvent(Event):
    """Fired when a file is attached to a project"""
    
    def __init__(self, file_id: str, project_id: str, user_id: str, file_name: str, file_type: str):
        self.file_id = file_id
        self.project_id = project_id
        self.user_id = user_id
        self.file_name = file_name
        self.file_type = file_type
        self.timestamp = datetime.now(timezone.utc)
    
    def __repr__(self):
        return f"FileAddedEvent(file_id={self.file_id}, project_id={self.project_id}, type='{self.file_type}')"
