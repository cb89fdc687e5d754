"""
站点设置模型
"""
from sqlalchemy import Column, String, Text, DateTime
from sitecms.db.database import Base
from sitecms.models.types import generate_uuid, utcnow


class Setting(Base):
    __tablename__ = "settings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    key = Column(String(128), unique=True, nullable=False)
    value = Column(Text, nullable=False, default="")
    group = Column(String(64), nullable=False, default="general", index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
