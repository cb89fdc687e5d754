"""
应用配置文件
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """应用配置"""

    # 应用基本配置
    APP_NAME: str = "CloudMo Site CMS"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"  # development / production / test
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 数据库配置（DB_URL 优先，否则由下面的字段拼接）
    DB_URL: Optional[str] = None
    DB_USERNAME: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "sitecms"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30  # 获取连接的超时秒数
    AUTO_CREATE_TABLES: bool = True

    # JWT配置
    SECRET_KEY: str = "sitecms-jwt-secret-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7天

    # 密码哈希
    BCRYPT_ROUNDS: int = 10

    # CORS配置
    CORS_ORIGINS: list = ["http://localhost:5173"]

    # 初始管理员
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_EMAIL: str = "admin@cloudmo.tech"

    # 对外公开的设置分组
    PUBLIC_SETTING_GROUPS: List[str] = ["general", "seo"]

    @property
    def DATABASE_URL(self) -> str:
        """获取数据库连接URL"""
        if self.DB_URL:
            return self.DB_URL
        return f"postgresql+asyncpg://{self.DB_USERNAME}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
