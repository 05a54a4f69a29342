"""
测试配置
"""
import os
import sys
import pytest

# 添加 src 目录到 Python 路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

# 设置测试环境变量（必须在导入应用模块前）
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["HUGGINGFACE_API_KEY"] = "test-key"
os.environ["IMAGEKIT_PRIVATE_KEY"] = "test-key"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class FakeProvider:
    """按预设结果返回的生成能力，记录调用次数"""

    def __init__(self, name, outcome):
        self.name = name
        self.outcome = outcome
        self.calls = 0

    async def generate(self, prompt):
        self.calls += 1
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


class FakeStorage:
    """内存图床"""

    def __init__(self, url="https://ik.imagekit.io/demo/thumbnails/thumb.png", error=None):
        self.url = url
        self.error = error
        self.uploads = []

    async def upload(self, content, filename):
        self.uploads.append((content, filename))
        if self.error is not None:
            raise self.error
        return self.url


@pytest.fixture
def test_db():
    """测试数据库 fixture"""
    from sqlalchemy.pool import StaticPool
    from sqlmodel import create_engine, SQLModel
    from thumbnail_studio.models import Thumbnail  # noqa: F401

    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def thumbnail_service(test_db):
    from thumbnail_studio.services.thumbnail_service import ThumbnailService

    return ThumbnailService(engine=test_db)
