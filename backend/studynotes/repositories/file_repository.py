from typing import Dict, List
from sqlalchemy import func
from sqlalchemy.orm import Session
from ..models.file import File
from .base import BaseRepository


class FileRepository(BaseRepository[File]):
    """Repository for File model"""
    
    def __init__(self, db: Session):
        super().__init__(File, db)
    
    def get_by_project_id(self, project_id: str) -> List[File]:
        """Get all files for a project in upload order"""
        return (
            self.db.query(File)
            .filter(File.project_id == project_id)
            .order_by(File.uploaded_at)
            .all()
        )
    
    def count_by_type(self, project_id: str) -> Dict[str, int]:
        """Number of files per type for a project"""
        rows = (
            self.db.query(File.type, func.count(File.id))
            .filter(File.project_id == project_id)
            .group_by(File.type)
            .all()
        )
        return {file_type: count for file_type, count in rows}
