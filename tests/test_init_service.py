"""
测试启动初始化
"""
from sqlalchemy import func, select

import init_data
from sitecms.core.config import settings
from sitecms.core.security import verify_password
from sitecms.db.database import Database
from sitecms.models import Setting, User
from sitecms.services.init_service import DEFAULT_SETTINGS, initialize_admin, initialize_settings


async def test_admin_created_only_when_no_users(database):
    async with database.session() as session:
        assert await initialize_admin(session) is True
        assert await initialize_admin(session) is False

        users = (await session.execute(select(User))).scalars().all()
        assert len(users) == 1
        assert users[0].username == settings.ADMIN_USERNAME
        assert users[0].role == "admin"
        assert verify_password(settings.ADMIN_PASSWORD, users[0].password)


async def test_admin_not_created_when_users_exist(database, make_user):
    await make_user("someone", role="user")
    async with database.session() as session:
        assert await initialize_admin(session) is False
        assert (await session.execute(select(func.count(User.id)))).scalar() == 1


async def test_default_settings_do_not_overwrite(database):
    async with database.session() as session:
        session.add(Setting(key="site_name", value="Custom", group="general"))
        await session.commit()

        created = await initialize_settings(session)
        assert created == len(DEFAULT_SETTINGS) - 1
        assert await initialize_settings(session) == 0

        site_name = (await session.execute(
            select(Setting.value).where(Setting.key == "site_name")
        )).scalar_one()
        assert site_name == "Custom"


async def test_init_script_reset(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'site.db'}"
    monkeypatch.setattr(init_data.settings, "DB_URL", url)

    await init_data.init_all_data()
    await init_data.init_all_data(reset=True)

    database = Database(url)
    await database.connect()
    try:
        async with database.session() as session:
            assert (await session.execute(select(func.count(User.id)))).scalar() == 1
            assert (await session.execute(select(func.count(Setting.id)))).scalar() == len(DEFAULT_SETTINGS)
    finally:
        await database.disconnect()
