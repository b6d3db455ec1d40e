from pydantic import Field, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime
from .base import CamelModel
from ..utils import ensure_utc


class ProjectCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    category: str = Field(min_length=1, max_length=100)


class ProjectUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)

    class Config:
        extra = "forbid"

    def to_updates(self) -> Dict[str, Any]:
        """Fields the client actually sent; name and category cannot be nulled"""
        updates = self.model_dump(exclude_unset=True)
        for required in ("name", "category"):
            if updates.get(required, "") is None:
                del updates[required]
        return updates


class Project(CamelModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    category: str
    file_count: int = 0
    image_count: int = 0
    pdf_count: int = 0
    query_count: int = 0
    last_accessed: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("last_accessed", "created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value):
        return ensure_utc(value)


class ProjectResponse(CamelModel):
    project: Project


class ProjectListResponse(CamelModel):
    projects: List[Project]
