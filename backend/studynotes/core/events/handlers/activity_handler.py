"""
Activity Event Handler

Audit-style logging for account, project and file activity.
"""
from ..events import UserRegisteredEvent, ProjectDeletedEvent, FileAddedEvent
import logging

logger = logging.getLogger(__name__)


class ActivityEventHandler:
    """Handler for user-facing activity events"""
    
    def handle_user_registered(self, event: UserRegisteredEvent):
        logger.info(f"User registered: '{event.username}' (id: {event.user_id}) at {event.timestamp}")
    
    def handle_project_deleted(self, event: ProjectDeletedEvent):
        logger.info(
            f"Project deleted: '{event.project_name}' (id: {event.project_id}) by user {event.user_id}, "
            f"{event.file_count} files removed"
        )
    
    def handle_file_added(self, event: FileAddedEvent):
        logger.info(
            f"File added: '{event.file_name}' [{event.file_type}] (id: {event.file_id}) "
            f"to project {event.project_id} by user {event.user_id}"
        )
