"""
联系表单服务
"""
import logging
import re
from typing import Optional

from sqlalchemy import delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.exceptions import NotFoundError, ValidationError
from sitecms.models import Contact
from sitecms.models.contact import CONTACT_STATUSES
from sitecms.models.types import utcnow
from sitecms.schemas.contact import ContactCreate, ContactResponse
from sitecms.utils.pagination import Pagination, calculate_pagination

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ContactService:
    """联系表单服务类"""

    @staticmethod
    def to_response(contact: Contact) -> ContactResponse:
        return ContactResponse(
            id=contact.id,
            name=contact.name,
            email=contact.email,
            company=contact.company,
            phone=contact.phone,
            subject=contact.subject,
            message=contact.message,
            status=contact.status,
            repliedAt=contact.replied_at,
            createdAt=contact.created_at,
            updatedAt=contact.updated_at
        )

    @classmethod
    async def submit(cls, db: AsyncSession, data: ContactCreate) -> Contact:
        """
        提交联系表单

        Args:
            db: 数据库会话
            data: 表单内容，name/email/subject/message 必填

        Returns:
            Contact: 新建的记录，状态为 pending
        """
        name = (data.name or "").strip()
        email = (data.email or "").strip()
        subject = (data.subject or "").strip()
        message = (data.message or "").strip()

        if not name or not email or not subject or not message:
            raise ValidationError("请填写完整信息")
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("邮箱格式不正确")

        contact = Contact(
            name=name,
            email=email,
            company=data.company,
            phone=data.phone,
            subject=subject,
            message=message,
            status="pending"
        )
        db.add(contact)
        await db.commit()
        await db.refresh(contact)

        logger.info("收到联系表单: id=%s subject=%s", contact.id, contact.subject)
        return contact

    @classmethod
    async def list_contacts(cls, db: AsyncSession, pagination: Pagination, status: Optional[str] = None) -> dict:
        """分页查询联系记录，按提交时间倒序"""
        conditions = []
        if status:
            conditions.append(Contact.status == status)

        count_result = await db.execute(select(func.count(Contact.id)).where(*conditions))
        total = count_result.scalar() or 0

        result = await db.execute(
            select(Contact)
            .where(*conditions)
            .order_by(desc(Contact.created_at))
            .offset(pagination.offset)
            .limit(pagination.page_size)
        )
        contacts = result.scalars().all()

        return {
            "items": [cls.to_response(c) for c in contacts],
            **calculate_pagination(total, pagination),
        }

    @classmethod
    async def get(cls, db: AsyncSession, contact_id: str) -> Contact:
        result = await db.execute(select(Contact).where(Contact.id == contact_id))
        contact = result.scalar_one_or_none()
        if not contact:
            raise NotFoundError("记录不存在")
        return contact

    @classmethod
    async def update_status(cls, db: AsyncSession, contact_id: str, status: Optional[str]) -> Contact:
        """
        更新处理状态

        replied_at 只在第一次进入 replied 时写入，之后保持不变。
        """
        if status not in CONTACT_STATUSES:
            raise ValidationError("无效的状态值")

        contact = await cls.get(db, contact_id)
        contact.status = status
        if status == "replied" and contact.replied_at is None:
            contact.replied_at = utcnow()

        await db.commit()
        await db.refresh(contact)
        return contact

    @classmethod
    async def delete(cls, db: AsyncSession, contact_id: str) -> None:
        contact = await cls.get(db, contact_id)
        await db.execute(delete(Contact).where(Contact.id == contact.id))
        await db.commit()
