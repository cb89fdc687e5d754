"""
联系表单Schema模型
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ContactCreate(BaseModel):
    """联系表单提交"""
    name: Optional[str] = Field(None, max_length=64)
    email: Optional[str] = Field(None, max_length=255)
    company: Optional[str] = Field(None, max_length=128)
    phone: Optional[str] = Field(None, max_length=32)
    subject: Optional[str] = Field(None, max_length=255)
    message: Optional[str] = None


class ContactStatusUpdate(BaseModel):
    """联系记录状态更新"""
    status: Optional[str] = None


class ContactResponse(BaseModel):
    """联系记录"""
    id: str
    name: str
    email: str
    company: Optional[str] = None
    phone: Optional[str] = None
    subject: str
    message: str
    status: str
    repliedAt: Optional[datetime] = None
    createdAt: datetime
    updatedAt: datetime
