"""
文章、新闻、文档API

三类内容的路由结构相同，由 build_content_routers 按服务生成公开路由和管理路由。
"""
from typing import Optional, Tuple, Type

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.security import Identity
from sitecms.db.database import get_db
from sitecms.schemas.common import ResponseModel
from sitecms.schemas.content import ArticleInput, DocInput
from sitecms.services.content_service import (
    ContentService, article_service, news_service, doc_service
)
from sitecms.utils.auth import require_admin, require_editor
from sitecms.utils.pagination import parse_pagination


def build_content_routers(
    service: ContentService,
    resource: str,
    input_schema: Type[BaseModel],
    tag: str
) -> Tuple[APIRouter, APIRouter]:
    """
    生成一组内容路由

    Args:
        service: 内容服务实例
        resource: URL中的资源名，如 articles
        input_schema: 创建/更新请求模型
        tag: 文档分组名

    Returns:
        (公开路由, 管理路由)
    """
    public = APIRouter(tags=[tag])
    admin = APIRouter(prefix="/admin", tags=[f"{tag}管理"])
    label = service.label

    @public.get(f"/{resource}", response_model=ResponseModel)
    async def list_published(
        page: Optional[str] = Query(None, description="页码"),
        pageSize: Optional[str] = Query(None, description="每页数量，最大100"),
        category: Optional[str] = Query(None, description="分类"),
        keyword: Optional[str] = Query(None, description="标题或摘要关键词"),
        db: AsyncSession = Depends(get_db)
    ):
        """已发布内容列表"""
        data = await service.list_public(
            db, parse_pagination(page, pageSize), category=category, keyword=keyword
        )
        return ResponseModel(code=200, data=data)

    @public.get(f"/{resource}/{{id_or_slug}}", response_model=ResponseModel)
    async def get_published(id_or_slug: str, db: AsyncSession = Depends(get_db)):
        """按ID或slug获取已发布内容，浏览量加1"""
        data = await service.get_public(db, id_or_slug)
        return ResponseModel(code=200, data=data)

    @admin.get(f"/{resource}", response_model=ResponseModel)
    async def list_all(
        page: Optional[str] = Query(None, description="页码"),
        pageSize: Optional[str] = Query(None, description="每页数量，最大100"),
        category: Optional[str] = Query(None, description="分类"),
        status_filter: Optional[str] = Query(None, alias="status", description="状态"),
        keyword: Optional[str] = Query(None, description="标题或摘要关键词"),
        db: AsyncSession = Depends(get_db),
        identity: Identity = Depends(require_editor)
    ):
        """全部内容列表（含草稿）"""
        data = await service.list_admin(
            db,
            parse_pagination(page, pageSize),
            category=category,
            status=status_filter,
            keyword=keyword
        )
        return ResponseModel(code=200, data=data)

    @admin.get(f"/{resource}/{{record_id}}", response_model=ResponseModel)
    async def get_any(
        record_id: str,
        db: AsyncSession = Depends(get_db),
        identity: Identity = Depends(require_editor)
    ):
        """管理端详情（含草稿，不计浏览量）"""
        data = await service.get_admin(db, record_id)
        return ResponseModel(code=200, data=data)

    @admin.post(f"/{resource}", response_model=ResponseModel, status_code=status.HTTP_201_CREATED)
    async def create(
        payload: input_schema,
        db: AsyncSession = Depends(get_db),
        identity: Identity = Depends(require_editor)
    ):
        """创建内容"""
        data = await service.create(db, payload, identity)
        return ResponseModel(code=201, message=f"{label}创建成功", data=data)

    @admin.put(f"/{resource}/{{record_id}}", response_model=ResponseModel)
    async def update(
        record_id: str,
        payload: input_schema,
        db: AsyncSession = Depends(get_db),
        identity: Identity = Depends(require_editor)
    ):
        """更新内容"""
        data = await service.update(db, record_id, payload)
        return ResponseModel(code=200, message=f"{label}更新成功", data=data)

    @admin.delete(f"/{resource}/{{record_id}}", response_model=ResponseModel)
    async def remove(
        record_id: str,
        db: AsyncSession = Depends(get_db),
        identity: Identity = Depends(require_admin)
    ):
        """删除内容"""
        await service.delete(db, record_id)
        return ResponseModel(code=200, message=f"{label}删除成功")

    return public, admin


articles_public, articles_admin = build_content_routers(article_service, "articles", ArticleInput, "文章")
news_public, news_admin = build_content_routers(news_service, "news", ArticleInput, "新闻")
docs_public, docs_admin = build_content_routers(doc_service, "docs", DocInput, "文档")
