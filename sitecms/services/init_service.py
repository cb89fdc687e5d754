"""
启动初始化：默认管理员与默认设置
"""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.config import settings
from sitecms.core.security import hash_password
from sitecms.models import Setting, User

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = [
    {"key": "site_name", "value": "墨云科技", "group": "general"},
    {"key": "site_description", "value": "人工智能技术前沿开发者", "group": "general"},
    {"key": "site_keywords", "value": "AI,人工智能,软件开发,墨云科技", "group": "seo"},
    {"key": "contact_email", "value": "contact@cloudmo.tech", "group": "general"},
    {"key": "copyright", "value": "© 2024 墨云科技 CloudMo Technology", "group": "general"},
]


async def initialize_admin(db: AsyncSession) -> bool:
    """
    初始化管理员账号

    只有数据库中没有任何用户时才创建，返回是否创建。
    """
    count_result = await db.execute(select(func.count(User.id)))
    if (count_result.scalar() or 0) > 0:
        return False

    admin = User(
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        password=hash_password(settings.ADMIN_PASSWORD),
        nickname="管理员",
        role="admin",
        status=1
    )
    db.add(admin)
    await db.commit()

    logger.info("默认管理员账号已创建: %s", settings.ADMIN_USERNAME)
    if not settings.is_production:
        logger.warning("默认管理员使用配置中的初始密码，请尽快修改")
    return True


async def initialize_settings(db: AsyncSession) -> int:
    """写入默认设置，已存在的键保持不变。返回新增数量"""
    keys = [item["key"] for item in DEFAULT_SETTINGS]
    result = await db.execute(select(Setting.key).where(Setting.key.in_(keys)))
    existing = set(result.scalars().all())

    created = 0
    for item in DEFAULT_SETTINGS:
        if item["key"] in existing:
            continue
        db.add(Setting(**item))
        created += 1

    if created:
        await db.commit()
        logger.info("默认设置已初始化: %d 项", created)
    return created
