from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime
import enum
from .base import CamelModel
from ..utils import ensure_utc


class FileType(str, enum.Enum):
    DOCUMENT = "document"
    IMAGE = "image"
    PDF = "pdf"


class FileCreate(CamelModel):
    name: str = Field(default="Untitled", min_length=1, max_length=255)
    type: FileType = FileType.DOCUMENT
    size: int = Field(default=0, ge=0)
    url: Optional[str] = None


class File(CamelModel):
    id: str
    project_id: str
    name: str
    type: FileType
    size: Optional[int] = 0
    url: Optional[str] = None
    uploaded_at: Optional[datetime] = None

    @field_validator("uploaded_at")
    @classmethod
    def _as_utc(cls, value):
        return ensure_utc(value)


class FileResponse(CamelModel):
    file: File


class FileListResponse(CamelModel):
    files: List[File]
