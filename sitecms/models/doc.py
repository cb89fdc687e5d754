"""
文档模型（parent_id 自关联构成文档树）
"""
from sqlalchemy import Column, String, Integer, ForeignKey
from sitecms.db.database import Base
from sitecms.models.article import PublishableMixin


class Doc(PublishableMixin, Base):
    __tablename__ = "docs"

    parent_id = Column(String(36), ForeignKey("docs.id", ondelete="SET NULL"), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
