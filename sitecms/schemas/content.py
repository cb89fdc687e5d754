"""
文章/新闻/文档Schema模型

请求模型的必填项在服务层校验，以便统一返回400和中文提示。
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class ArticleInput(BaseModel):
    """文章/新闻创建与更新请求模型"""
    title: Optional[str] = Field(None, max_length=255, description="标题")
    slug: Optional[str] = Field(None, max_length=255, description="URL别名")
    summary: Optional[str] = Field(None, description="摘要")
    content: Optional[str] = Field(None, description="正文")
    coverImage: Optional[str] = Field(None, description="封面图")
    category: Optional[str] = Field(None, max_length=64, description="分类")
    tags: Optional[List[str]] = Field(None, description="标签数组")
    status: Optional[str] = Field(None, description="状态：draft / published")


class DocInput(BaseModel):
    """文档创建与更新请求模型"""
    title: Optional[str] = Field(None, max_length=255, description="标题")
    slug: Optional[str] = Field(None, max_length=255, description="URL别名")
    summary: Optional[str] = Field(None, description="摘要")
    content: Optional[str] = Field(None, description="正文")
    category: Optional[str] = Field(None, max_length=64, description="分类")
    parentId: Optional[str] = Field(None, description="父文档ID")
    sortOrder: Optional[int] = Field(None, description="排序值，越小越靠前")
    status: Optional[str] = Field(None, description="状态：draft / published")


class AuthorInfo(BaseModel):
    """作者信息"""
    id: str
    username: str
    nickname: Optional[str] = None
    avatar: Optional[str] = None


class ContentListItem(BaseModel):
    """内容列表项（不含正文）"""
    id: str
    title: str
    slug: str
    summary: Optional[str] = None
    category: Optional[str] = None
    status: str
    viewCount: int = 0
    authorId: Optional[str] = None
    author: Optional[AuthorInfo] = None
    publishedAt: Optional[datetime] = None
    createdAt: datetime
    updatedAt: datetime


class ArticleListItem(ContentListItem):
    coverImage: Optional[str] = None
    tags: List[str] = []


class ArticleResponse(ArticleListItem):
    content: str


class DocListItem(ContentListItem):
    parentId: Optional[str] = None
    sortOrder: int = 0


class DocResponse(DocListItem):
    content: str
