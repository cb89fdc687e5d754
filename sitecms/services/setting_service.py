"""
站点设置服务
"""
import logging
from typing import Dict, List, Optional

from sqlalchemy import asc, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.config import settings
from sitecms.core.exceptions import NotFoundError, ValidationError
from sitecms.models import Setting
from sitecms.schemas.setting import SettingItem

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "general"


class SettingService:
    """站点设置服务类"""

    @staticmethod
    async def get_public(db: AsyncSession) -> Dict[str, str]:
        """公开设置：只返回允许公开的分组，扁平 key -> value"""
        result = await db.execute(
            select(Setting).where(Setting.group.in_(settings.PUBLIC_SETTING_GROUPS))
        )
        return {s.key: s.value for s in result.scalars().all()}

    @staticmethod
    async def get_grouped(db: AsyncSession, group: Optional[str] = None) -> Dict[str, Dict[str, str]]:
        """全部设置，按分组整理为 {group: {key: value}}"""
        stmt = select(Setting).order_by(asc(Setting.group), asc(Setting.key))
        if group:
            stmt = stmt.where(Setting.group == group)
        result = await db.execute(stmt)

        grouped: Dict[str, Dict[str, str]] = {}
        for s in result.scalars().all():
            grouped.setdefault(s.group, {})[s.key] = s.value
        return grouped

    @staticmethod
    async def upsert_many(db: AsyncSession, items: List[SettingItem]) -> int:
        """
        批量保存设置

        在同一事务内完成，任意一项失败则全部回滚。已有键只替换值，新键分组默认 general。

        Returns:
            int: 处理的设置项数量
        """
        for item in items:
            if not item.key or not item.key.strip():
                raise ValidationError("无效的设置数据")

        try:
            keys = [item.key.strip() for item in items]
            result = await db.execute(select(Setting).where(Setting.key.in_(keys)))
            existing = {s.key: s for s in result.scalars().all()}

            for key, item in zip(keys, items):
                value = item.value if item.value is not None else ""
                setting = existing.get(key)
                if setting is not None:
                    setting.value = value
                else:
                    setting = Setting(key=key, value=value, group=item.group or DEFAULT_GROUP)
                    db.add(setting)
                    existing[key] = setting

            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("保存设置 %d 项", len(items))
        return len(items)

    @staticmethod
    async def delete(db: AsyncSession, key: str) -> None:
        result = await db.execute(select(Setting).where(Setting.key == key))
        if result.scalar_one_or_none() is None:
            raise NotFoundError("设置项不存在")
        await db.execute(delete(Setting).where(Setting.key == key))
        await db.commit()
