"""
缩略图生成编排
"""
import asyncio
import logging
import time
from typing import Callable, Optional, Sequence

from thumbnail_studio.models.thumbnail import Thumbnail
from thumbnail_studio.services.errors import (
    GenerationError,
    NoImageGeneratedError,
    ThumbnailUploadError,
)
from thumbnail_studio.services.fallback_service import GenerationProvider, run_with_fallback
from thumbnail_studio.services.inference_service import build_default_providers
from thumbnail_studio.services.prompt_service import compose_prompt
from thumbnail_studio.services.storage_service import ImageKitStorage, get_storage
from thumbnail_studio.services.thumbnail_service import ThumbnailService, get_thumbnail_service

logger = logging.getLogger(__name__)


class GenerationService:
    """
    缩略图生成服务

    流程：创建 pending 记录 → 拼装 Prompt → 多模型降级生成 → 上传图床 → 更新记录。
    任一环节失败都会把记录标记为 failed 后再抛出 GenerationError
    """

    def __init__(
        self,
        thumbnail_service: Optional[ThumbnailService] = None,
        storage: Optional[ImageKitStorage] = None,
        provider_factory: Optional[Callable[[], Sequence[GenerationProvider]]] = None,
    ):
        self.thumbnail_service = thumbnail_service or get_thumbnail_service()
        self.storage = storage or get_storage()
        self.provider_factory = provider_factory or build_default_providers

    async def generate(
        self,
        user_id: str,
        title: str,
        style: str,
        aspect_ratio: str,
        color_scheme: Optional[str] = None,
        user_prompt: Optional[str] = None,
        text_overlay: Optional[str] = None,
    ) -> Thumbnail:
        """
        生成缩略图

        Returns:
            已完成的缩略图记录

        Raises:
            InvalidGenerationOptionError: 风格/配色/标题不合法
            NoImageGeneratedError: 所有候选模型都失败
            ThumbnailUploadError: 上传图床失败
            GenerationError: 其他异常
        """
        thumbnail_id: Optional[int] = None
        try:
            # 1. 先落库，保证每个请求都有记录可查
            thumbnail = self.thumbnail_service.create_pending(
                user_id=user_id,
                title=title,
                style=style,
                aspect_ratio=aspect_ratio,
                color_scheme=color_scheme,
                user_prompt=user_prompt,
                text_overlay=text_overlay,
            )
            thumbnail_id = thumbnail.id

            # 2. 拼装 Prompt
            prompt = compose_prompt(
                title=title,
                style=style,
                aspect_ratio=aspect_ratio,
                color_scheme=color_scheme,
                user_prompt=user_prompt,
            )

            # 3. 多模型依次尝试
            result = await run_with_fallback(self.provider_factory(), prompt)
            if not result.succeeded:
                last_error = result.last_error
                raise NoImageGeneratedError(
                    "Image generation failed on all models",
                    model=last_error.model if last_error else None,
                    status=last_error.status if last_error else None,
                    body=last_error.body if last_error else None,
                )

            # 4. 上传图床
            filename = f"thumbnail-{int(time.time() * 1000)}.png"
            try:
                image_url = await self.storage.upload(result.image.content, filename)
            except Exception as e:
                raise ThumbnailUploadError(f"Failed to upload thumbnail: {e}") from e

            # 5. 更新记录
            thumbnail = self.thumbnail_service.mark_succeeded(
                thumbnail_id,
                image_url=image_url,
                prompt_used=prompt,
            )
            logger.info(
                f"缩略图生成完成: id={thumbnail_id}, model={result.image.model}, url={image_url}"
            )
            return thumbnail

        except asyncio.CancelledError:
            logger.warning(f"缩略图生成被取消: id={thumbnail_id}")
            self._mark_failed_quietly(thumbnail_id)
            raise

        except Exception as e:
            logger.error(f"缩略图生成失败: {e}", exc_info=True)
            self._mark_failed_quietly(thumbnail_id)
            if isinstance(e, GenerationError):
                raise
            raise GenerationError(str(e) or "Thumbnail generation failed") from e

    def _mark_failed_quietly(self, thumbnail_id: Optional[int]) -> None:
        if thumbnail_id is None:
            return
        try:
            self.thumbnail_service.mark_failed(thumbnail_id)
        except Exception:
            logger.error("更新缩略图失败状态时发生异常", exc_info=True)


# 全局单例
_generation_service: Optional[GenerationService] = None


def get_generation_service() -> GenerationService:
    """获取生成服务单例"""
    global _generation_service
    if _generation_service is None:
        _generation_service = GenerationService()
    return _generation_service
