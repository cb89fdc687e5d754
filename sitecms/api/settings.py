"""
站点设置API
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.security import Identity
from sitecms.db.database import get_db
from sitecms.schemas.common import ResponseModel
from sitecms.schemas.setting import SettingItem
from sitecms.services.setting_service import SettingService
from sitecms.utils.auth import require_admin

router = APIRouter(tags=["站点设置"])


@router.get("/settings", response_model=ResponseModel)
async def get_public_settings(db: AsyncSession = Depends(get_db)):
    """公开设置（general、seo 分组）"""
    data = await SettingService.get_public(db)
    return ResponseModel(code=200, data=data)


@router.get("/admin/settings", response_model=ResponseModel)
async def get_all_settings(
    group: Optional[str] = Query(None, description="分组"),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_admin)
):
    """全部设置，按分组返回"""
    data = await SettingService.get_grouped(db, group)
    return ResponseModel(code=200, data=data)


@router.put("/admin/settings", response_model=ResponseModel)
async def update_settings(
    items: List[SettingItem],
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_admin)
):
    """批量保存设置（事务内全部成功或全部失败）"""
    await SettingService.upsert_many(db, items)
    return ResponseModel(code=200, message="设置保存成功")


@router.delete("/admin/settings/{key}", response_model=ResponseModel)
async def delete_setting(
    key: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_admin)
):
    """删除单个设置"""
    await SettingService.delete(db, key)
    return ResponseModel(code=200, message="删除成功")
