"""
认证服务
"""
import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from sitecms.core.security import Identity, create_access_token, hash_password, verify_password
from sitecms.models import User
from sitecms.schemas.auth import LoginResponse, UserProfile, UserSummary

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

# 用户不存在与密码错误返回同样的提示，避免枚举账号
INVALID_CREDENTIALS = "用户名或密码错误"


class AuthService:
    """认证服务类"""

    @staticmethod
    def to_summary(user: User) -> UserSummary:
        return UserSummary(
            id=user.id,
            username=user.username,
            email=user.email,
            nickname=user.nickname,
            avatar=user.avatar,
            role=user.role
        )

    @staticmethod
    async def get_user(db: AsyncSession, user_id: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @classmethod
    async def login(cls, db: AsyncSession, username: Optional[str], password: Optional[str]) -> LoginResponse:
        """
        用户名或邮箱登录

        步骤：
        1. 校验参数
        2. 按用户名或邮箱查找用户
        3. 检查账户状态
        4. 校验密码并签发token

        Raises:
            ValidationError: 缺少用户名或密码
            AuthenticationError: 用户不存在或密码错误
            AuthorizationError: 账户已禁用
        """
        if not username or not password:
            raise ValidationError("请输入用户名和密码")

        result = await db.execute(
            select(User).where(or_(User.username == username, User.email == username))
        )
        user = result.scalars().first()

        if not user:
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not user.is_enabled:
            raise AuthorizationError("账户已被禁用")

        if not verify_password(password, user.password):
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = create_access_token(Identity(user_id=user.id, username=user.username, role=user.role))
        logger.info("用户登录成功: %s", user.username)

        return LoginResponse(token=token, user=cls.to_summary(user))

    @classmethod
    async def get_profile(cls, db: AsyncSession, identity: Identity) -> UserProfile:
        """获取当前用户资料"""
        user = await cls.get_user(db, identity.user_id)
        if not user:
            raise NotFoundError("用户不存在")
        return UserProfile(**cls.to_summary(user).model_dump(), createdAt=user.created_at)

    @classmethod
    async def change_password(
        cls,
        db: AsyncSession,
        identity: Identity,
        old_password: Optional[str],
        new_password: Optional[str]
    ) -> None:
        """修改密码，需校验原密码"""
        if not old_password or not new_password:
            raise ValidationError("请输入原密码和新密码")

        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"新密码长度不能少于{MIN_PASSWORD_LENGTH}位")

        user = await cls.get_user(db, identity.user_id)
        if not user:
            raise NotFoundError("用户不存在")

        if not verify_password(old_password, user.password):
            raise ValidationError("原密码错误")

        user.password = hash_password(new_password)
        await db.commit()
        logger.info("用户修改密码: %s", user.username)
