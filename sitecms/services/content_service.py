"""
内容服务：文章、新闻、文档共用的列表/详情/增删改逻辑
"""
import logging
from typing import Dict, Iterable, Optional, Type

from sqlalchemy import and_, delete, desc, asc, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.exceptions import ConflictError, NotFoundError, ValidationError
from sitecms.core.security import Identity
from sitecms.models import Article, Doc, News, User
from sitecms.models.article import CONTENT_STATUSES
from sitecms.models.types import utcnow
from sitecms.schemas.content import (
    ArticleListItem, ArticleResponse, AuthorInfo, DocListItem, DocResponse
)
from sitecms.utils.pagination import Pagination, calculate_pagination
from sitecms.utils.slug import slug_with_timestamp

logger = logging.getLogger(__name__)

# 请求字段 -> 模型列
FIELD_COLUMNS = {
    "title": "title",
    "slug": "slug",
    "summary": "summary",
    "content": "content",
    "coverImage": "cover_image",
    "category": "category",
    "tags": "tags",
    "status": "status",
    "parentId": "parent_id",
    "sortOrder": "sort_order",
}

# 不允许被显式置空的列
NON_NULLABLE = {"title", "slug", "content", "status", "sort_order"}


class ContentService:
    """可发布内容的通用服务，按模型实例化"""

    list_item_schema = ArticleListItem
    detail_schema = ArticleResponse

    def __init__(self, model: Type, label: str, default_category: str):
        self.model = model
        self.label = label
        self.default_category = default_category

    # ------------------------------------------------------------------
    # 排序
    # ------------------------------------------------------------------

    def public_order(self) -> list:
        return [desc(self.model.published_at)]

    def admin_order(self) -> list:
        return [desc(self.model.created_at)]

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def _filters(
        self,
        category: Optional[str] = None,
        status: Optional[str] = None,
        keyword: Optional[str] = None
    ) -> list:
        conditions = []
        if category:
            conditions.append(self.model.category == category)
        if status:
            conditions.append(self.model.status == status)
        if keyword:
            # 用户输入中的 % 和 _ 按字面匹配
            conditions.append(
                or_(
                    self.model.title.icontains(keyword, autoescape=True),
                    self.model.summary.icontains(keyword, autoescape=True)
                )
            )
        return conditions

    async def _paginate(
        self,
        db: AsyncSession,
        conditions: list,
        order_by: list,
        pagination: Pagination
    ) -> dict:
        count_result = await db.execute(
            select(func.count(self.model.id)).where(*conditions)
        )
        total = count_result.scalar() or 0

        rows_result = await db.execute(
            select(self.model)
            .where(*conditions)
            .order_by(*order_by)
            .offset(pagination.offset)
            .limit(pagination.page_size)
        )
        records = rows_result.scalars().all()
        authors = await self._load_authors(db, [r.author_id for r in records])

        return {
            "items": [self.to_list_item(r, authors) for r in records],
            **calculate_pagination(total, pagination),
        }

    async def list_public(
        self,
        db: AsyncSession,
        pagination: Pagination,
        category: Optional[str] = None,
        keyword: Optional[str] = None
    ) -> dict:
        """公开列表：仅已发布内容"""
        conditions = self._filters(category=category, status="published", keyword=keyword)
        return await self._paginate(db, conditions, self.public_order(), pagination)

    async def list_admin(
        self,
        db: AsyncSession,
        pagination: Pagination,
        category: Optional[str] = None,
        status: Optional[str] = None,
        keyword: Optional[str] = None
    ) -> dict:
        """管理列表：包含所有状态，除非显式指定"""
        conditions = self._filters(category=category, status=status, keyword=keyword)
        return await self._paginate(db, conditions, self.admin_order(), pagination)

    async def get_public(self, db: AsyncSession, id_or_slug: str):
        """
        公开详情

        按ID或slug匹配已发布记录，命中后浏览量加1。并发请求下计数允许近似。
        """
        result = await db.execute(
            select(self.model).where(
                and_(
                    or_(self.model.id == id_or_slug, self.model.slug == id_or_slug),
                    self.model.status == "published"
                )
            )
        )
        record = result.scalars().first()
        if not record:
            raise NotFoundError(f"{self.label}不存在")

        await db.execute(
            update(self.model)
            .where(self.model.id == record.id)
            .values(view_count=self.model.view_count + 1)
        )
        await db.commit()
        await db.refresh(record)

        authors = await self._load_authors(db, [record.author_id])
        return self.to_detail(record, authors)

    async def get_admin(self, db: AsyncSession, record_id: str):
        """管理详情，不计浏览量"""
        record = await self._get_or_404(db, record_id)
        authors = await self._load_authors(db, [record.author_id])
        return self.to_detail(record, authors)

    # ------------------------------------------------------------------
    # 写操作
    # ------------------------------------------------------------------

    async def create(self, db: AsyncSession, data, identity: Identity):
        """创建内容，未提供slug时由标题生成"""
        fields = data.model_dump()
        title = (fields.get("title") or "").strip()
        content = fields.get("content") or ""
        if not title or not content.strip():
            raise ValidationError("标题和内容不能为空")

        status = fields.get("status") or "draft"
        self._check_status(status)

        slug = (fields.get("slug") or "").strip() or slug_with_timestamp(title)
        await self._ensure_slug_free(db, slug)

        values = self._column_values(fields)
        values.update(
            title=title,
            slug=slug,
            status=status,
            category=fields.get("category") or self.default_category,
            author_id=identity.user_id,
            published_at=utcnow() if status == "published" else None,
        )
        await self.validate_values(db, None, values)

        record = self.model(**values)
        db.add(record)
        await self._commit(db, slug)
        await db.refresh(record)

        logger.info("%s已创建: id=%s slug=%s author=%s", self.label, record.id, record.slug, identity.username)
        authors = await self._load_authors(db, [record.author_id])
        return self.to_detail(record, authors)

    async def update(self, db: AsyncSession, record_id: str, data):
        """
        更新内容

        只修改请求中出现的字段；published_at 只在第一次进入 published 时写入。
        """
        record = await self._get_or_404(db, record_id)
        fields = data.model_dump(exclude_unset=True)

        for name in ("title", "content"):
            if name in fields and not (fields[name] or "").strip():
                raise ValidationError("标题和内容不能为空")
        if "title" in fields:
            fields["title"] = fields["title"].strip()

        if "status" in fields and fields["status"] is not None:
            self._check_status(fields["status"])

        if "slug" in fields:
            new_slug = (fields["slug"] or "").strip()
            if not new_slug:
                fields.pop("slug")
            elif new_slug != record.slug:
                await self._ensure_slug_free(db, new_slug)
                fields["slug"] = new_slug
            else:
                fields.pop("slug")

        values = self._column_values(fields)
        await self.validate_values(db, record, values)

        for column, value in values.items():
            setattr(record, column, value)

        if record.status == "published" and record.published_at is None:
            record.published_at = utcnow()

        await self._commit(db, record.slug, exclude_id=record_id)
        await db.refresh(record)

        authors = await self._load_authors(db, [record.author_id])
        return self.to_detail(record, authors)

    async def delete(self, db: AsyncSession, record_id: str) -> None:
        """硬删除"""
        record = await self._get_or_404(db, record_id)
        await db.execute(delete(self.model).where(self.model.id == record.id))
        await db.commit()
        logger.info("%s已删除: id=%s", self.label, record_id)

    async def validate_values(self, db: AsyncSession, record, values: dict) -> None:
        """子类钩子：写入前的额外校验"""

    # ------------------------------------------------------------------
    # 内部工具
    # ------------------------------------------------------------------

    def _column_values(self, fields: dict) -> Dict[str, object]:
        values = {}
        for field, value in fields.items():
            column = FIELD_COLUMNS.get(field)
            if column is None or not hasattr(self.model, column):
                continue
            if value is None and column in NON_NULLABLE:
                continue
            values[column] = value
        return values

    @staticmethod
    def _check_status(status: str) -> None:
        if status not in CONTENT_STATUSES:
            raise ValidationError("无效的状态值")

    async def _get_or_404(self, db: AsyncSession, record_id: str):
        result = await db.execute(select(self.model).where(self.model.id == record_id))
        record = result.scalar_one_or_none()
        if not record:
            raise NotFoundError(f"{self.label}不存在")
        return record

    async def _ensure_slug_free(self, db: AsyncSession, slug: str) -> None:
        result = await db.execute(select(self.model.id).where(self.model.slug == slug))
        if result.first() is not None:
            raise ConflictError("URL别名已存在")

    async def _commit(self, db: AsyncSession, slug: str, exclude_id: Optional[str] = None) -> None:
        """
        提交事务

        并发写入同一slug时唯一约束会在提交时失败，此时转为 ConflictError；
        其他约束错误（如作者外键）原样抛出。
        """
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            stmt = select(self.model.id).where(self.model.slug == slug)
            if exclude_id is not None:
                stmt = stmt.where(self.model.id != exclude_id)
            if (await db.execute(stmt)).first() is not None:
                raise ConflictError("URL别名已存在")
            raise

    @staticmethod
    async def _load_authors(db: AsyncSession, author_ids: Iterable[Optional[str]]) -> Dict[str, User]:
        ids = {author_id for author_id in author_ids if author_id}
        if not ids:
            return {}
        result = await db.execute(select(User).where(User.id.in_(ids)))
        return {user.id: user for user in result.scalars().all()}

    def _common_fields(self, record, authors: Dict[str, User]) -> dict:
        author = authors.get(record.author_id)
        return {
            "id": record.id,
            "title": record.title,
            "slug": record.slug,
            "summary": record.summary,
            "category": record.category,
            "status": record.status,
            "viewCount": record.view_count,
            "authorId": record.author_id,
            "author": AuthorInfo(
                id=author.id,
                username=author.username,
                nickname=author.nickname,
                avatar=author.avatar
            ) if author else None,
            "publishedAt": record.published_at,
            "createdAt": record.created_at,
            "updatedAt": record.updated_at,
        }

    def _extra_fields(self, record) -> dict:
        return {
            "coverImage": record.cover_image,
            "tags": record.tags or [],
        }

    def to_list_item(self, record, authors: Dict[str, User]):
        return self.list_item_schema(**self._common_fields(record, authors), **self._extra_fields(record))

    def to_detail(self, record, authors: Dict[str, User]):
        return self.detail_schema(
            **self._common_fields(record, authors),
            **self._extra_fields(record),
            content=record.content
        )


class DocService(ContentService):
    """文档服务：增加树形父节点与排序字段"""

    list_item_schema = DocListItem
    detail_schema = DocResponse

    def public_order(self) -> list:
        return [asc(self.model.sort_order), desc(self.model.created_at)]

    def admin_order(self) -> list:
        return self.public_order()

    def _extra_fields(self, record) -> dict:
        return {
            "parentId": record.parent_id,
            "sortOrder": record.sort_order,
        }

    async def validate_values(self, db: AsyncSession, record, values: dict) -> None:
        """父文档必须存在，且不能是自身或自身的后代"""
        parent_id = values.get("parent_id")
        if not parent_id:
            if "parent_id" in values:
                values["parent_id"] = None
            return

        if record is not None and parent_id == record.id:
            raise ValidationError("父文档不能是自身")

        visited = set()
        current = parent_id
        while current:
            if current in visited:
                break
            visited.add(current)
            result = await db.execute(select(Doc.parent_id).where(Doc.id == current))
            row = result.first()
            if row is None:
                if current == parent_id:
                    raise ValidationError("父文档不存在")
                break
            if record is not None and row[0] == record.id:
                raise ValidationError("不能将文档移动到其子文档下")
            current = row[0]


article_service = ContentService(Article, label="文章", default_category="tech")
news_service = ContentService(News, label="新闻", default_category="company")
doc_service = DocService(Doc, label="文档", default_category="guide")
