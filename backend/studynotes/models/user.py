from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from ..core.database import Base
from ..utils import new_id, get_current_timestamp


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash
    preferred_model = Column(String, default="gpt-4")
    api_key = Column(Text, nullable=True)  # Fernet token
    created_at = Column(DateTime(timezone=True), default=get_current_timestamp)
    updated_at = Column(DateTime(timezone=True), default=get_current_timestamp, onupdate=get_current_timestamp)

    projects = relationship("Project", back_populates="owner", cascade="all, delete-orphan")
