"""
缩略图记录模型
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ThumbnailStatus(str, Enum):
    """生成状态：pending 只能迁移到 succeeded 或 failed 一次"""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Thumbnail(SQLModel, table=True):
    """
    缩略图记录表

    每次生成请求对应一条记录；image_url 只在 succeeded 状态下存在
    """

    __tablename__ = "thumbnails"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True, max_length=64, description="所属用户ID")

    # 请求参数
    title: str = Field(description="视频标题")
    style: str = Field(max_length=50, description="风格")
    aspect_ratio: str = Field(default="16:9", max_length=10, description="宽高比")
    color_scheme: Optional[str] = Field(default=None, max_length=30, description="配色方案")
    user_prompt: Optional[str] = Field(default=None, description="用户补充描述")
    text_overlay: Optional[str] = Field(default=None, description="叠加文字")

    # 生成结果
    prompt_used: Optional[str] = Field(default=None, description="实际发送给模型的Prompt")
    image_url: Optional[str] = Field(default=None, description="CDN 图片地址")

    # 状态
    status: str = Field(
        default=ThumbnailStatus.PENDING.value,
        max_length=20,
        description="状态: pending/succeeded/failed",
    )

    # 时间戳
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_generating(self) -> bool:
        return self.status == ThumbnailStatus.PENDING.value

    def mark_succeeded(self, image_url: str, prompt_used: str) -> None:
        """标记生成成功，写入图片地址与最终 Prompt"""
        self._ensure_pending()
        if not image_url:
            raise ValueError("成功状态必须带有图片地址")
        self.image_url = image_url
        self.prompt_used = prompt_used
        self.status = ThumbnailStatus.SUCCEEDED.value
        self.updated_at = _utcnow()

    def mark_failed(self) -> None:
        """标记生成失败"""
        self._ensure_pending()
        self.image_url = None
        self.status = ThumbnailStatus.FAILED.value
        self.updated_at = _utcnow()

    def _ensure_pending(self) -> None:
        if self.status != ThumbnailStatus.PENDING.value:
            raise ValueError(f"记录已处于终态: {self.status}")
