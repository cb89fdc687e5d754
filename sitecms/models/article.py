"""
文章与新闻模型

两张表字段一致，共用 PublishableMixin。
"""
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import declared_attr
from sitecms.db.database import Base
from sitecms.models.types import TagList, generate_uuid, utcnow

CONTENT_STATUSES = ("draft", "published")


class PublishableMixin:
    """可发布内容的公共字段"""

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    summary = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    category = Column(String(64), nullable=True, index=True)
    status = Column(String(16), nullable=False, default="draft")  # draft / published
    view_count = Column(Integer, nullable=False, default=0)
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    @declared_attr
    def author_id(cls):
        # 仅作查找引用，删除用户不级联内容
        return Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)


class Article(PublishableMixin, Base):
    __tablename__ = "articles"

    cover_image = Column(String(512), nullable=True)
    tags = Column(TagList, nullable=True)


class News(PublishableMixin, Base):
    __tablename__ = "news"

    cover_image = Column(String(512), nullable=True)
    tags = Column(TagList, nullable=True)
