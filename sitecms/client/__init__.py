"""
站点API客户端：请求封装、状态存储与路由守卫
"""
from .storage import LocalStorage
from .request import ApiClient, ApiResponse, ApiRequestError
from .api import SiteApi
from .stores import UserStore, AppStore
from .router import Router, Route

__all__ = [
    "LocalStorage",
    "ApiClient",
    "ApiResponse",
    "ApiRequestError",
    "SiteApi",
    "UserStore",
    "AppStore",
    "Router",
    "Route"
]
