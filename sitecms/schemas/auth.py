"""
认证Schema模型
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class LoginRequest(BaseModel):
    """登录请求，username 可以是用户名或邮箱"""
    username: Optional[str] = Field(None, description="用户名或邮箱")
    password: Optional[str] = Field(None, description="密码")


class PasswordChange(BaseModel):
    """修改密码请求"""
    oldPassword: Optional[str] = None
    newPassword: Optional[str] = None


class UserSummary(BaseModel):
    """用户摘要"""
    id: str
    username: str
    email: str
    nickname: Optional[str] = None
    avatar: Optional[str] = None
    role: str


class UserProfile(UserSummary):
    """当前用户资料"""
    createdAt: datetime


class LoginResponse(BaseModel):
    """登录响应数据"""
    token: str
    user: UserSummary
