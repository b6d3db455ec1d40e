from typing import List, Optional
from ..storage import ResilientStorage
from ..core.events import EventBus, ProjectDeletedEvent
from ..schemas import Project, ProjectCreate, ProjectUpdate
from ..exceptions import NotFoundError, AuthorizationError
from ..utils import get_current_timestamp
import logging

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for project operations"""
    
    def __init__(self, storage: ResilientStorage, event_bus: Optional[EventBus] = None):
        self.storage = storage
        self.event_bus = event_bus
    
    def list_projects(self, user_id: str) -> List[Project]:
        """List all projects for a user, most recently accessed first"""
        logger.debug(f"Listing projects for user: {user_id}")
        return self.storage.get_projects(user_id)
    
    def get_owned_project(self, user_id: str, project_id: str) -> Project:
        """Load a project and check that the user owns it"""
        project = self.storage.get_project(project_id)
        if not project:
            raise NotFoundError("Project", project_id)
        if project.user_id != user_id:
            logger.warning(f"User {user_id} denied access to project {project_id}")
            raise AuthorizationError("Access denied")
        return project
    
    def get_project(self, user_id: str, project_id: str) -> Project:
        """Get a specific project and mark it as accessed"""
        logger.debug(f"Getting project {project_id} for user {user_id}")
        self.get_owned_project(user_id, project_id)
        return self.storage.update_project(project_id, {"last_accessed": get_current_timestamp()})
    
    def create_project(self, user_id: str, project_data: ProjectCreate) -> Project:
        """Create a new project"""
        logger.info(f"Creating project '{project_data.name}' for user {user_id}")
        project = self.storage.create_project(user_id, project_data)
        logger.info(f"Project created successfully: {project.id}")
        return project
    
    def update_project(self, user_id: str, project_id: str, project_data: ProjectUpdate) -> Project:
        """Update a project's name, description or category"""
        logger.info(f"Updating project {project_id} for user {user_id}")
        project = self.get_owned_project(user_id, project_id)
        
        updates = project_data.to_updates()
        if not updates:
            return project
        
        updated_project = self.storage.update_project(project_id, updates)
        logger.info(f"Project updated successfully: {project_id}")
        return updated_project
    
    def delete_project(self, user_id: str, project_id: str) -> None:
        """Delete a project (cascades to files)"""
        logger.info(f"Deleting project {project_id} for user {user_id}")
        project = self.get_owned_project(user_id, project_id)
        
        try:
            self.storage.delete_project(project_id)
        except Exception as e:
            logger.error(f"Error deleting project: {e}")
            raise
        
        logger.info(f"Project deleted successfully: {project_id}")
        if self.event_bus is not None:
            self.event_bus.publish(ProjectDeletedEvent(project_id, user_id, project.name, project.file_count))
