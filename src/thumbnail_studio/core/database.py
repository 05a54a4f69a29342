"""
数据库连接管理 - 统一管理数据库连接
"""
from pathlib import Path

from sqlmodel import SQLModel, create_engine

from thumbnail_studio.core.config import get_settings

_settings = get_settings()

_connect_args = {}
if _settings.database_url.startswith("sqlite"):
    # FastAPI 在线程池中执行同步依赖，SQLite 需要关闭同线程检查
    _connect_args = {"check_same_thread": False}
    # 文件数据库需要先创建目录；sqlite:// 与 :memory: 为内存库
    _db_path = _settings.database_url.removeprefix("sqlite:///")
    if _db_path != _settings.database_url and _db_path and _db_path != ":memory:":
        Path(_db_path).parent.mkdir(parents=True, exist_ok=True)

# 创建全局数据库引擎
engine = create_engine(_settings.database_url, echo=False, connect_args=_connect_args)


def init_db() -> None:
    """创建所有数据表"""
    # 导入模型，确保表注册到 metadata
    from thumbnail_studio import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


__all__ = ["engine", "init_db"]
