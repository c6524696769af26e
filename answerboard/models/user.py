from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey
from ..db import Base
from ..core.uuid_type import UUIDType, new_id


class User(Base):
    __tablename__ = "users"
    id = Column(UUIDType, primary_key=True, default=new_id)
    username = Column(String(20), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Category(Base):
    __tablename__ = "categories"
    id = Column(UUIDType, primary_key=True, default=new_id)
    name = Column(String(15), unique=True, nullable=False, index=True)  # short lowercase token, e.g. "fitness"
    created_by = Column(UUIDType, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
