"""
多模型降级调用
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

from thumbnail_studio.services.response_classifier import (
    ClassifiedError,
    ClassifiedResponse,
    ImageResult,
)

logger = logging.getLogger(__name__)


class GenerationProvider(Protocol):
    """生成能力提供方"""

    @property
    def name(self) -> str: ...

    async def generate(self, prompt: str) -> ClassifiedResponse: ...


@dataclass
class FallbackResult:
    """降级调用结果"""
    image: Optional[ImageResult] = None
    last_error: Optional[ClassifiedError] = None
    attempts: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.image is not None


async def run_with_fallback(
    providers: Sequence[GenerationProvider],
    prompt: str,
) -> FallbackResult:
    """
    依次尝试候选模型，拿到第一张图片即返回

    - 图片：立即停止
    - 4xx（429 除外）：请求本身被拒绝，停止尝试后续模型
    - 5xx / 429 / 调用异常：记录错误，继续下一个模型
    """
    result = FallbackResult()

    for provider in providers:
        result.attempts.append(provider.name)
        try:
            outcome = await provider.generate(prompt)
        except Exception as e:
            logger.warning(f"模型 {provider.name} 调用异常: {e}")
            result.last_error = ClassifiedError(status=None, body=str(e), model=provider.name)
            continue

        if isinstance(outcome, ImageResult):
            logger.info(f"模型 {provider.name} 生成成功")
            result.image = outcome
            return result

        result.last_error = outcome
        if not outcome.retryable:
            logger.warning(
                f"模型 {provider.name} 返回不可重试错误 {outcome.status}，停止尝试: {outcome.body}"
            )
            return result

        logger.warning(f"模型 {provider.name} 返回错误 {outcome.status}，尝试下一个模型")

    logger.error(f"所有候选模型均失败，共尝试 {len(result.attempts)} 个")
    return result
