"""
文生图接口响应分类
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

logger = logging.getLogger(__name__)

_ERROR_FIELDS = ("error", "detail", "message")

_IMAGE_SIGNATURES = {
    b"\x89PNG\r\n\x1a\n": "png",
    b"\xff\xd8\xff": "jpeg",
    b"GIF87a": "gif",
    b"GIF89a": "gif",
}


@dataclass
class ImageResult:
    """模型返回的图片"""
    content: bytes
    model: Optional[str] = None
    image_format: Optional[str] = None


@dataclass
class ClassifiedError:
    """模型返回的错误（或调用异常）"""
    status: Optional[int]
    body: Any = None
    model: Optional[str] = None
    headers: dict = field(default_factory=dict)

    @property
    def retryable(self) -> bool:
        """4xx（限流 429 除外）说明请求本身有问题，换模型也没用"""
        if self.status is None:
            return True
        return not (400 <= self.status < 500 and self.status != 429)


ClassifiedResponse = Union[ImageResult, ClassifiedError]


def detect_image_format(content: bytes) -> Optional[str]:
    """根据文件头识别图片格式，无法识别返回 None"""
    for signature, name in _IMAGE_SIGNATURES.items():
        if content.startswith(signature):
            return name
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "webp"
    return None


def _content_type(headers: Mapping[str, str]) -> str:
    for key, value in headers.items():
        if key.lower() == "content-type":
            return value.lower()
    return ""


def _text_snippet(content: bytes, limit: int = 500) -> str:
    return content[:limit].decode("utf-8", errors="replace")


def classify_response(
    content: bytes,
    headers: Mapping[str, str],
    status: int,
    model: Optional[str] = None,
) -> ClassifiedResponse:
    """
    判断响应是图片还是错误

    依次检查：
    1. 以 { 或 [ 开头且能解析出 error/detail/message 字段 → 错误
    2. Content-Type 是 JSON → 错误
    3. 2xx 且内容非空 → 图片（文件头只用于日志，不识别也照样接受）
    4. 其余一律视为错误
    """
    headers = dict(headers or {})
    stripped = content.lstrip()

    if stripped[:1] in (b"{", b"["):
        try:
            parsed = json.loads(stripped)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict) and any(key in parsed for key in _ERROR_FIELDS):
            return ClassifiedError(status=status, body=parsed, model=model, headers=headers)

    if "json" in _content_type(headers):
        try:
            body: Any = json.loads(content) if content else None
        except ValueError:
            body = _text_snippet(content)
        return ClassifiedError(status=status, body=body, model=model, headers=headers)

    if 200 <= status < 300 and content:
        image_format = detect_image_format(content)
        if image_format is None:
            logger.warning(
                f"模型 {model} 返回的数据无法识别图片格式，仍按图片处理，前 8 字节: {content[:8]!r}"
            )
        else:
            logger.debug(f"模型 {model} 返回 {image_format} 图片，大小 {len(content)} 字节")
        return ImageResult(content=content, model=model, image_format=image_format)

    return ClassifiedError(
        status=status,
        body=_text_snippet(content) if content else None,
        model=model,
        headers=headers,
    )
