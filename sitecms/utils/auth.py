"""
认证依赖（请求拦截器）

每个依赖要么返回调用方身份供处理器使用，要么抛出业务异常中断请求。
路由按顺序声明依赖，处理器通过参数显式获得 Identity。
"""
from typing import Callable, Optional

from fastapi import Depends, Header

from sitecms.core.exceptions import AuthenticationError, AuthorizationError
from sitecms.core.security import Identity, verify_token


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    从 Authorization 头中提取token

    只接受恰好两段且第一段为 "Bearer" 的格式，其余情况返回None。
    """
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]


async def require_auth(authorization: Optional[str] = Header(None)) -> Identity:
    """
    强制认证：缺少请求头、格式错误、token无效均返回401
    """
    if not authorization:
        raise AuthenticationError("未提供认证令牌")

    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError("认证令牌格式错误，应为: Bearer {token}")

    identity = verify_token(token)
    if identity is None:
        raise AuthenticationError("认证令牌无效或已过期")
    return identity


async def optional_auth(authorization: Optional[str] = Header(None)) -> Optional[Identity]:
    """可选认证：有合法token时返回身份，否则返回None，从不拒绝请求"""
    token = extract_bearer_token(authorization)
    if token is None:
        return None
    return verify_token(token)


def require_roles(*roles: str) -> Callable:
    """
    角色校验依赖工厂

    未登录返回401，角色不在允许列表中返回403。
    """
    allowed = frozenset(roles)

    async def role_checker(identity: Optional[Identity] = Depends(optional_auth)) -> Identity:
        if identity is None:
            raise AuthenticationError("请先登录")
        if identity.role not in allowed:
            raise AuthorizationError("权限不足")
        return identity

    return role_checker


# 常用角色组合
require_editor = require_roles("admin", "editor")
require_admin = require_roles("admin")
