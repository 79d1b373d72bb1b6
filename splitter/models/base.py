"""Base Models and Mixins"""

import uuid
from sqlalchemy import Column, DateTime, Uuid

from splitter.database import Base
from splitter.utils.time import get_utc_now


class BaseModel(Base):
    """
    Base model class with common fields for all models.
    
    Provides:
    - UUID primary key
    - created_at timestamp
    
    Column defaults are also applied when an instance is constructed, so a
    bill graph built in memory has identifiers and field values before it is
    ever flushed to the database.
    """
    __abstract__ = True
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    
    def __init__(self, **kwargs):
        for column in self.__table__.columns:
            default = column.default
            if column.key in kwargs or default is None:
                continue
            if default.is_scalar:
                kwargs[column.key] = default.arg
            elif default.is_callable:
                kwargs[column.key] = default.arg(None)
        super().__init__(**kwargs)


class UpdatedAtMixin:
    """
    Mixin for aggregates that track their last modification.
    
    Provides:
    - updated_at timestamp
    - mark_updated()
    """
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)
    
    def mark_updated(self) -> None:
        """Refresh updated_at after any change to the aggregate"""
        self.updated_at = get_utc_now()
