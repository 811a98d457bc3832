"""
应用配置
从环境变量和 .env 文件读取配置
"""
from pathlib import Path
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


DEFAULT_SEED_FILE = Path(__file__).parent / "seed" / "seed_data.yaml"


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "Hotel Server"
    DEBUG: bool = False

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./hotel_server.db"
    SQL_ECHO: bool = False

    # 日志配置
    LOG_LEVEL: str = "INFO"

    # 种子数据：启动时写入房型/床型（以及可选的演示酒店）
    SEED_ON_STARTUP: bool = True
    SEED_DEMO_DATA: bool = False
    SEED_DATA_FILE: str = str(DEFAULT_SEED_FILE)

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# 全局设置实例
settings = Settings()
