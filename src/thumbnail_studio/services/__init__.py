"""
服务模块
"""
from .generation_service import GenerationService, get_generation_service
from .thumbnail_service import ThumbnailService, get_thumbnail_service

__all__ = [
    "GenerationService",
    "get_generation_service",
    "ThumbnailService",
    "get_thumbnail_service",
]
