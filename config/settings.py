# config/settings.py
import os
from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
load_dotenv(os.path.join(BASE_DIR, ".env"))  # 自动加载环境变量


def _as_bool(val, default=False):
    if val is None:
        return default
    return str(val).lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    REDIS_URL = os.getenv("REDIS_URL", "redis://127.0.0.1:6379/0")

    # 存储后端：sql（默认，SQLAlchemy 键值表）/ redis
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sql").lower()
    # redis 后端下的键前缀，避免与其他应用冲突
    STORAGE_KEY_PREFIX = os.getenv("STORAGE_KEY_PREFIX", "tcm:")

    # 日志相关
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "./logs")
    LOG_JSON = os.getenv("LOG_JSON", "1") == "1"  # 是否 JSON 格式
    LOG_TO_FILE = _as_bool(os.getenv("LOG_TO_FILE", "1"), True)
    LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", 5 * 1024 * 1024))
    LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", 5))
    APP_NAME = os.getenv("APP_NAME", "test-case-manager")

    # ========= 业务约束 =========
    # 从用例列表多选创建批次时，批次名称的最大长度
    BATCH_NAME_MAX_LENGTH = int(os.getenv("BATCH_NAME_MAX_LENGTH", 50))
    # OPML 导入文件大小上限（字节）
    IMPORT_MAX_BYTES = int(os.getenv("IMPORT_MAX_BYTES", 2 * 1024 * 1024))
    # =========================================


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DEV_DATABASE_URI", "sqlite:///" + os.path.join(BASE_DIR, "tcm-dev.db")
    )


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite:///:memory:")
    STORAGE_BACKEND = "sql"
    LOG_TO_FILE = False


config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name):
    return config_map.get(config_name, DevelopmentConfig)
