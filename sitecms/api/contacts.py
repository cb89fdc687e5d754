"""
联系表单API
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.security import Identity
from sitecms.db.database import get_db
from sitecms.schemas.common import ResponseModel
from sitecms.schemas.contact import ContactCreate, ContactStatusUpdate
from sitecms.services.contact_service import ContactService
from sitecms.utils.auth import require_editor
from sitecms.utils.pagination import parse_pagination

router = APIRouter(tags=["联系表单"])


@router.post("/contact", response_model=ResponseModel, status_code=status.HTTP_201_CREATED)
async def submit_contact(payload: ContactCreate, db: AsyncSession = Depends(get_db)):
    """
    提交联系表单（公开）
    """
    contact = await ContactService.submit(db, payload)
    return ResponseModel(code=201, message="提交成功，我们会尽快与您联系", data={"id": contact.id})


@router.get("/admin/contacts", response_model=ResponseModel)
async def get_contacts(
    page: Optional[str] = Query(None, description="页码"),
    pageSize: Optional[str] = Query(None, description="每页数量"),
    status_filter: Optional[str] = Query(None, alias="status", description="处理状态"),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_editor)
):
    """联系记录列表"""
    data = await ContactService.list_contacts(db, parse_pagination(page, pageSize), status=status_filter)
    return ResponseModel(code=200, data=data)


@router.get("/admin/contacts/{contact_id}", response_model=ResponseModel)
async def get_contact(
    contact_id: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_editor)
):
    """联系记录详情"""
    contact = await ContactService.get(db, contact_id)
    return ResponseModel(code=200, data=ContactService.to_response(contact))


@router.put("/admin/contacts/{contact_id}", response_model=ResponseModel)
async def update_contact_status(
    contact_id: str,
    payload: ContactStatusUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_editor)
):
    """更新处理状态（仅 status 字段）"""
    contact = await ContactService.update_status(db, contact_id, payload.status)
    return ResponseModel(code=200, message="状态更新成功", data=ContactService.to_response(contact))


@router.delete("/admin/contacts/{contact_id}", response_model=ResponseModel)
async def delete_contact(
    contact_id: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_editor)
):
    """删除联系记录"""
    await ContactService.delete(db, contact_id)
    return ResponseModel(code=200, message="删除成功")
