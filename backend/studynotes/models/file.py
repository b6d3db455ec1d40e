from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from ..core.database import Base
from ..utils import new_id, get_current_timestamp


class File(Base):
    __tablename__ = "files"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)  # 'pdf', 'image', 'document'
    size = Column(Integer, default=0)
    url = Column(Text, nullable=True)
    uploaded_at = Column(DateTime(timezone=True), default=get_current_timestamp)

    project = relationship("Project", back_populates="files")
