from typing import List, Optional
from sqlalchemy.orm import Session
from ..models.project import Project
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project model"""
    
    def __init__(self, db: Session):
        super().__init__(Project, db)
    
    def get_by_user_id(self, user_id: str) -> List[Project]:
        """Get all projects for a user, most recently accessed first"""
        return (
            self.db.query(Project)
            .filter(Project.user_id == user_id)
            .order_by(Project.last_accessed.desc())
            .all()
        )
    
    def get_for_update(self, project_id: str) -> Optional[Project]:
        """Get a project, locking its row where the database supports it"""
        return (
            self.db.query(Project)
            .filter(Project.id == project_id)
            .with_for_update()
            .first()
        )
