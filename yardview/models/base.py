# yardview/models/base.py
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Uuid

from yardview.core.database import Base


class BaseModel(Base):
    __abstract__ = True

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
