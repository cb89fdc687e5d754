"""
初始化数据库：建表、创建默认管理员、写入默认设置

用法:
    python init_data.py          # 建表并写入初始数据，可重复执行
    python init_data.py --reset  # 先删除全部表再重新初始化
"""
import asyncio
import sys

from sitecms.core.config import settings
from sitecms.core.logging import setup_logging
from sitecms.db.database import Database
from sitecms.services.init_service import initialize_admin, initialize_settings


async def init_all_data(reset: bool = False):
    """建表并写入初始数据"""
    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    await database.connect()
    try:
        if reset:
            print("⚠️  删除全部数据表...")
            await database.drop_all()

        print("开始初始化数据...")
        await database.create_all()
        print("✅ 数据表已就绪")

        async with database.session() as session:
            if await initialize_admin(session):
                print(f"✅ 默认管理员账号已创建: {settings.ADMIN_USERNAME}")
            else:
                print("⚪ 已存在用户，跳过管理员初始化")

            created = await initialize_settings(session)
            print(f"✅ 默认设置: 新增 {created} 项")
    finally:
        await database.disconnect()


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(init_all_data(reset="--reset" in sys.argv[1:]))
