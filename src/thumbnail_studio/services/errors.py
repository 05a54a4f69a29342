"""
生成流程异常定义

每个异常自带 HTTP 状态码与响应体，API 层统一转换
"""
from typing import Any, Optional


class GenerationError(Exception):
    """生成流程通用异常"""

    status_code = 500

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def payload(self) -> dict:
        return {"message": self.message, **self.details}


class InvalidGenerationOptionError(GenerationError, ValueError):
    """调用方参数错误：未知风格/配色、空标题"""

    status_code = 400


class NoImageGeneratedError(GenerationError):
    """所有候选模型都未产出图片"""

    status_code = 502

    def __init__(
        self,
        message: str,
        model: Optional[str] = None,
        status: Optional[int] = None,
        body: Any = None,
    ):
        super().__init__(message, model=model, status=status, body=body)


class ThumbnailUploadError(GenerationError):
    """图片已生成但上传 CDN 失败"""

    status_code = 500


class StorageUploadError(Exception):
    """CDN 上传接口返回错误"""
