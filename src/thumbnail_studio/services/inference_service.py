"""
Hugging Face 文生图接口调用
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

import requests

from thumbnail_studio.core import get_settings
from thumbnail_studio.services.response_classifier import (
    ClassifiedResponse,
    classify_response,
)

logger = logging.getLogger(__name__)


@dataclass
class InferenceResponse:
    """原始响应：不做任何解释"""
    status_code: int
    headers: dict = field(default_factory=dict)
    content: bytes = b""


class InferenceClient:
    """文生图接口客户端"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.huggingface_api_key
        self.base_url = (base_url or settings.huggingface_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.inference_timeout

    async def text_to_image(self, model: str, prompt: str) -> InferenceResponse:
        """
        调用指定模型生成图片

        非 2xx 状态码不会抛异常，错误内容原样返回给调用方；
        网络错误与超时会抛出 requests 异常

        Args:
            model: 模型ID，如 black-forest-labs/FLUX.1-schnell
            prompt: 完整 Prompt

        Returns:
            InferenceResponse
        """
        url = f"{self.base_url}/{model}"

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        payload = {
            "inputs": prompt,
            "options": {"wait_for_model": True},
        }

        logger.info(f"调用文生图模型: {model}")

        response = await asyncio.to_thread(
            requests.post,
            url,
            headers=headers,
            json=payload,
            timeout=self.timeout,
        )

        logger.info(f"模型 {model} 返回状态码 {response.status_code}，大小 {len(response.content)} 字节")

        return InferenceResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
        )


class HuggingFaceProvider:
    """单个模型的生成能力：调用接口并分类响应"""

    def __init__(self, model: str, client: InferenceClient):
        self.model = model
        self.client = client

    @property
    def name(self) -> str:
        return self.model

    async def generate(self, prompt: str) -> ClassifiedResponse:
        response = await self.client.text_to_image(self.model, prompt)
        return classify_response(
            content=response.content,
            headers=response.headers,
            status=response.status_code,
            model=self.model,
        )


def build_default_providers(client: Optional[InferenceClient] = None) -> list[HuggingFaceProvider]:
    """按配置中的模型顺序创建候选列表"""
    client = client or InferenceClient()
    return [HuggingFaceProvider(model, client) for model in get_settings().huggingface_models]
