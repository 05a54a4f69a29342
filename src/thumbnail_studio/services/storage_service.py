"""
ImageKit 图床上传
"""
import asyncio
import base64
import logging
from typing import Optional

import requests

from thumbnail_studio.core import get_settings
from thumbnail_studio.services.errors import StorageUploadError

logger = logging.getLogger(__name__)


class ImageKitStorage:
    """ImageKit 上传客户端"""

    def __init__(self):
        settings = get_settings()
        self.private_key = settings.imagekit_private_key
        self.upload_url = settings.imagekit_upload_url
        self.folder = settings.imagekit_folder
        self.timeout = settings.upload_timeout

    async def upload(self, content: bytes, filename: str) -> str:
        """
        上传图片并返回公开访问地址

        Args:
            content: 图片字节
            filename: 文件名

        Returns:
            图片 URL
        """
        # ImageKit 只接受 multipart/form-data，字段以 (None, value) 形式发送
        fields = {
            "file": (None, base64.b64encode(content).decode("ascii")),
            "fileName": (None, filename),
            "useUniqueFileName": (None, "true"),
        }
        if self.folder:
            fields["folder"] = (None, self.folder)

        logger.info(f"上传图片到 ImageKit: {filename}，大小 {len(content)} 字节")

        try:
            # ImageKit 使用私钥作为 Basic 认证用户名，密码为空
            response = await asyncio.to_thread(
                requests.post,
                self.upload_url,
                files=fields,
                auth=(self.private_key, ""),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StorageUploadError(f"Upload request failed: {e}") from e

        if response.status_code >= 400:
            raise StorageUploadError(
                f"Upload failed with status {response.status_code}: {response.text[:200]}"
            )

        try:
            url = response.json().get("url")
        except ValueError as e:
            raise StorageUploadError("Upload response is not valid JSON") from e

        if not url:
            raise StorageUploadError("Upload response has no url")

        logger.info(f"图片上传成功: {url}")
        return url


# 全局单例
_storage: Optional[ImageKitStorage] = None


def get_storage() -> ImageKitStorage:
    """获取图床客户端单例"""
    global _storage
    if _storage is None:
        _storage = ImageKitStorage()
    return _storage
