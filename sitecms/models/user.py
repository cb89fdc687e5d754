"""
用户模型
"""
from sqlalchemy import Column, String, SmallInteger, DateTime
from sitecms.db.database import Base
from sitecms.models.types import generate_uuid, utcnow

USER_STATUS_DISABLED = 0
USER_STATUS_ENABLED = 1


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(64), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt 哈希
    nickname = Column(String(64), nullable=True)
    avatar = Column(String(512), nullable=True)
    role = Column(String(16), nullable=False, default="user")  # admin / editor / user
    status = Column(SmallInteger, nullable=False, default=USER_STATUS_ENABLED)  # 1=启用, 0=禁用
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def is_enabled(self) -> bool:
        return self.status == USER_STATUS_ENABLED
