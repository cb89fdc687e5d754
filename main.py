"""
站点CMS - FastAPI应用主入口
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI

from sitecms.api.router import api_router
from sitecms.core.config import settings
from sitecms.core.exception_handlers import setup_exception_handlers
from sitecms.core.logging import setup_logging
from sitecms.core.middlewares import setup_middlewares
from sitecms.db.database import Database
from sitecms.services.init_service import initialize_admin, initialize_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """启动时连接数据库并初始化数据，关闭时断开连接"""
    database: Database = app.state.db
    await database.connect()
    if settings.AUTO_CREATE_TABLES:
        await database.create_all()

    async with database.session() as session:
        await initialize_admin(session)
        await initialize_settings(session)

    logger.info("%s v%s 已启动 (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    try:
        yield
    finally:
        await database.disconnect()


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    应用工厂

    Args:
        database: 持久层句柄，默认按配置创建
    """
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="站点内容管理后端API",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.db = database or Database(settings.DATABASE_URL, echo=settings.DEBUG)

    setup_middlewares(app)
    setup_exception_handlers(app)

    # 注册路由
    app.include_router(api_router)

    @app.get("/")
    async def root():
        """根路径"""
        return {
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "message": "站点CMS后端API正在运行"
        }

    @app.get("/health")
    async def health_check():
        """健康检查"""
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.APP_VERSION
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
