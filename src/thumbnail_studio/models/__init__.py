"""
数据模型模块
"""
from .thumbnail import Thumbnail, ThumbnailStatus

__all__ = [
    "Thumbnail",
    "ThumbnailStatus",
]
