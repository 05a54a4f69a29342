"""
FastAPI 应用入口
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from thumbnail_studio.core import setup_logging, get_settings, get_logger
from thumbnail_studio.core.database import init_db
from thumbnail_studio.api import api_router

# 初始化日志
settings = get_settings()
setup_logging(settings.log_level)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    init_db()
    logger.info("🚀 缩略图生成 API 启动中...")
    yield
    logger.info("👋 缩略图生成 API 关闭")


# 创建 FastAPI 应用
app = FastAPI(
    title="缩略图生成 API",
    description="基于 Hugging Face 文生图模型的视频缩略图生成服务",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册 API 路由
app.include_router(api_router)


@app.get("/")
async def root():
    """健康检查"""
    return {"status": "ok", "message": "缩略图生成 API 运行中"}


@app.get("/health")
async def health():
    """健康检查"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    logger.info(f"启动服务: http://{settings.api_host}:{settings.api_port}")
    uvicorn.run(
        "thumbnail_studio.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
