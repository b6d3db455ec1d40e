from typing import List, Optional
from ..storage import ResilientStorage
from ..core.events import EventBus, FileAddedEvent
from ..schemas import File, FileCreate
from ..exceptions import NotFoundError
from .project_service import ProjectService
import logging

logger = logging.getLogger(__name__)


class FileService:
    """Service for the files attached to a project"""
    
    def __init__(self, storage: ResilientStorage, event_bus: Optional[EventBus] = None):
        self.storage = storage
        self.event_bus = event_bus
        self.projects = ProjectService(storage, event_bus)
    
    def list_files(self, user_id: str, project_id: str) -> List[File]:
        """List all files in a project"""
        logger.debug(f"Listing files for project {project_id}, user: {user_id}")
        self.projects.get_owned_project(user_id, project_id)
        return self.storage.get_project_files(project_id)
    
    def add_file(self, user_id: str, project_id: str, file_data: FileCreate) -> File:
        """Attach a file record to a project; the project's counters follow"""
        logger.info(f"Adding file '{file_data.name}' to project {project_id} for user {user_id}")
        self.projects.get_owned_project(user_id, project_id)
        
        stored = self.storage.add_file(project_id, file_data)
        logger.info(f"File added successfully: {stored.id}")
        if self.event_bus is not None:
            self.event_bus.publish(FileAddedEvent(stored.id, project_id, user_id, stored.name, stored.type.value))
        return stored
    
    def delete_file(self, user_id: str, project_id: str, file_id: str) -> None:
        """Remove a file from a project"""
        logger.info(f"Deleting file {file_id} from project {project_id} for user {user_id}")
        self.projects.get_owned_project(user_id, project_id)
        
        stored = self.storage.get_file(file_id)
        if not stored or stored.project_id != project_id:
            raise NotFoundError("File", file_id)
        
        self.storage.delete_file(file_id)
        logger.info(f"File deleted successfully: {file_id}")
