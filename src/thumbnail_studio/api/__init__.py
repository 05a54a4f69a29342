"""
API 路由模块
"""
from fastapi import APIRouter
from .thumbnails import router as thumbnails_router

# 创建主路由
api_router = APIRouter(prefix="/api")

api_router.include_router(thumbnails_router)

__all__ = ["api_router"]
