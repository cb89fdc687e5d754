"""
联系表单模型
"""
from sqlalchemy import Column, String, Text, DateTime
from sitecms.db.database import Base
from sitecms.models.types import generate_uuid, utcnow

CONTACT_STATUSES = ("pending", "processing", "replied", "closed")


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(64), nullable=False)
    email = Column(String(255), nullable=False)
    company = Column(String(128), nullable=True)
    phone = Column(String(32), nullable=True)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default="pending", index=True)
    replied_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
