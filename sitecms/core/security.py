"""
密码哈希与JWT令牌
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from sitecms.core.config import settings

# 密码哈希上下文
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


@dataclass(frozen=True)
class Identity:
    """令牌中携带的调用方身份"""
    user_id: str
    username: str
    role: str


def hash_password(password: str) -> str:
    """密码哈希（每次调用使用新盐）"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码，哈希格式错误时视为不匹配"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def create_access_token(identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
    """
    签发JWT访问令牌

    Args:
        identity: 要编码到token中的身份
        expires_delta: 有效期，默认使用配置中的时间

    Returns:
        str: JWT token字符串
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "sub": identity.user_id,
        "username": identity.username,
        "role": identity.role,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Optional[Identity]:
    """
    验证JWT token

    签名错误、过期、格式错误和缺少字段一律返回None，调用方无法区分失败原因。
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    user_id = payload.get("sub")
    username = payload.get("username")
    role = payload.get("role")
    if not user_id or not username or not role:
        return None
    return Identity(user_id=str(user_id), username=str(username), role=str(role))
