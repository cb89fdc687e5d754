"""
测试公共夹具：内存SQLite数据库 + ASGI 直连客户端
"""
import os

# 必须在导入 sitecms 之前设置，Settings 在导入时读取环境变量
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from typing import Dict

import httpx
import pytest_asyncio

from main import create_app
from sitecms.core.security import Identity, create_access_token, hash_password
from sitecms.db.database import Database
from sitecms.models import User

TEST_PASSWORD = "secret123"


@pytest_asyncio.fixture
async def database():
    db = Database("sqlite+aiosqlite://")
    await db.connect()
    await db.create_all()
    try:
        yield db
    finally:
        await db.disconnect()


@pytest_asyncio.fixture
async def app(database):
    return create_app(database)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def make_user(database):
    """创建用户的工厂，返回 User"""

    async def _make_user(
        username: str = "alice",
        role: str = "admin",
        status: int = 1,
        password: str = TEST_PASSWORD,
        email: str = None
    ) -> User:
        async with database.session() as session:
            user = User(
                username=username,
                email=email or f"{username}@example.com",
                password=hash_password(password),
                nickname=username.title(),
                role=role,
                status=status
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make_user


def bearer(user: User) -> Dict[str, str]:
    token = create_access_token(Identity(user_id=user.id, username=user.username, role=user.role))
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user("admin", role="admin")


@pytest_asyncio.fixture
async def admin_headers(admin) -> Dict[str, str]:
    return bearer(admin)


@pytest_asyncio.fixture
async def editor_headers(make_user) -> Dict[str, str]:
    return bearer(await make_user("editor", role="editor"))


@pytest_asyncio.fixture
async def user_headers(make_user) -> Dict[str, str]:
    return bearer(await make_user("reader", role="user"))
