from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
from .base import CamelModel
from ..utils import ensure_utc


class UserRecord(CamelModel):
    """Stored user, including the password hash and the encrypted API key"""
    id: str
    username: str
    email: str
    password: str
    preferred_model: Optional[str] = "gpt-4"
    api_key: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value):
        return ensure_utc(value)


class User(CamelModel):
    """User as returned to clients; never carries credentials"""
    id: str
    username: str
    email: str
    preferred_model: Optional[str] = None
    has_api_key: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: UserRecord) -> "User":
        return cls(
            id=record.id,
            username=record.username,
            email=record.email,
            preferred_model=record.preferred_model,
            has_api_key=bool(record.api_key),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class UserProfileUpdate(CamelModel):
    preferred_model: Optional[str] = Field(default=None, min_length=1, max_length=64)
    api_key: Optional[str] = Field(default=None, max_length=512)  # "" clears the stored key


class UserResponse(CamelModel):
    user: User
