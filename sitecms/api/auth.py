"""
认证API
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.security import Identity
from sitecms.db.database import get_db
from sitecms.schemas.auth import LoginRequest, PasswordChange
from sitecms.schemas.common import ResponseModel
from sitecms.services.auth_service import AuthService
from sitecms.utils.auth import require_auth

router = APIRouter(prefix="/auth", tags=["认证"])


@router.post("/login", response_model=ResponseModel)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    """
    用户名/邮箱 + 密码登录
    """
    data = await AuthService.login(db, payload.username, payload.password)
    return ResponseModel(code=200, message="登录成功", data=data)


@router.post("/logout", response_model=ResponseModel)
async def logout():
    """
    退出登录

    JWT 无状态，服务端不维护黑名单，客户端删除token即可。
    """
    return ResponseModel(code=200, message="退出成功")


@router.get("/me", response_model=ResponseModel)
async def get_current_user(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_auth)
):
    """获取当前用户信息"""
    data = await AuthService.get_profile(db, identity)
    return ResponseModel(code=200, data=data)


@router.put("/password", response_model=ResponseModel)
async def change_password(
    payload: PasswordChange,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_auth)
):
    """修改密码"""
    await AuthService.change_password(db, identity, payload.oldPassword, payload.newPassword)
    return ResponseModel(code=200, message="密码修改成功")
