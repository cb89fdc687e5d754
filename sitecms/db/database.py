"""
数据库连接和会话管理
"""
import logging
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from sitecms.core.config import settings

logger = logging.getLogger(__name__)

# 创建Base类
Base = declarative_base()


class Database:
    """
    持久层句柄

    由应用工厂显式创建，connect() 创建引擎和会话工厂，disconnect() 释放连接池。
    处理器通过 get_db 依赖从 app.state.db 取得会话，不直接引用全局引擎。
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    def _engine_options(self) -> dict:
        if self.is_sqlite:
            options = {"connect_args": {"check_same_thread": False}}
            # 内存库必须共享同一个连接，否则每个会话看到的都是空库
            if ":memory:" in self.url or self.url.rstrip("/").endswith("sqlite+aiosqlite:"):
                options["poolclass"] = StaticPool
            return options
        return {
            "pool_pre_ping": True,
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
        }

    async def connect(self) -> None:
        """创建引擎并验证连接可用"""
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, echo=self.echo, **self._engine_options())
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("数据库连接成功: %s", self.engine.url.render_as_string(hide_password=True))

    async def disconnect(self) -> None:
        """断开数据库连接"""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("数据库连接已断开")

    async def create_all(self) -> None:
        """按模型定义建表（已存在的表跳过）"""
        # 导入模型以注册到 Base.metadata
        import sitecms.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        import sitecms.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    def session(self) -> AsyncSession:
        """创建新会话，调用方负责关闭（推荐 async with）"""
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        return self.session_factory()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    获取数据库会话依赖
    """
    database: Database = request.app.state.db
    async with database.session() as session:
        try:
            yield session
        finally:
            await session.close()
