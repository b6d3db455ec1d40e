from typing import Generic, TypeVar, Type, Optional
from sqlalchemy.orm import Session
from ..core.database import Base
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations"""
    
    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db
    
    def get(self, id: str) -> Optional[ModelType]:
        """Get a record by ID"""
        return self.db.get(self.model, id)
    
    def create(self, **kwargs) -> ModelType:
        """Create a new record"""
        instance = self.model(**kwargs)
        self.db.add(instance)
        self.db.flush()  # Flush instead of commit to allow rollback
        logger.debug(f"Created {self.model.__name__} with id: {instance.id}")
        return instance
    
    def update(self, id: str, **kwargs) -> Optional[ModelType]:
        """Update a record; None values are written as given"""
        instance = self.get(id)
        if instance:
            for key, value in kwargs.items():
                setattr(instance, key, value)
            self.db.flush()  # Flush instead of commit to allow rollback
            logger.debug(f"Updated {self.model.__name__} with id: {id}")
        return instance
    
    def delete(self, id: str) -> bool:
        """Delete a record"""
        instance = self.get(id)
        if instance:
            self.db.delete(instance)
            self.db.flush()  # Flush instead of commit to allow rollback
            logger.debug(f"Deleted {self.model.__name__} with id: {id}")
            return True
        return False
