"""
API路由表

公开路由与 /admin 管理路由统一挂在 /api 前缀下；管理路由的鉴权由各自的依赖声明。
"""
from fastapi import APIRouter

from sitecms.api import auth, contacts, settings
from sitecms.api.content import (
    articles_public, articles_admin,
    news_public, news_admin,
    docs_public, docs_admin
)

api_router = APIRouter(prefix="/api")

# 公开路由
api_router.include_router(auth.router)
api_router.include_router(articles_public)
api_router.include_router(news_public)
api_router.include_router(docs_public)
api_router.include_router(contacts.router)
api_router.include_router(settings.router)

# 管理路由
api_router.include_router(articles_admin)
api_router.include_router(news_admin)
api_router.include_router(docs_admin)
