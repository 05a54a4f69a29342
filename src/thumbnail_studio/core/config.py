"""
配置管理 - 环境变量 / .env 统一读取
"""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


DEFAULT_MODELS = [
    "black-forest-labs/FLUX.1-schnell",
    "stabilityai/stable-diffusion-xl-base-1.0",
    "runwayml/stable-diffusion-v1-5",
]


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API 配置
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = True
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # Hugging Face Inference API 配置
    # 兼容旧的 HF_TOKEN 环境变量
    huggingface_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("HUGGINGFACE_API_KEY", "HF_TOKEN"),
    )
    huggingface_base_url: str = "https://api-inference.huggingface.co/models"
    # 按优先级排列的候选模型
    huggingface_models: list[str] = Field(default_factory=lambda: list(DEFAULT_MODELS))
    inference_timeout: float = 120.0

    # ImageKit 图床配置
    imagekit_private_key: str = ""
    imagekit_upload_url: str = "https://upload.imagekit.io/api/v1/files/upload"
    imagekit_folder: str = "/thumbnails"
    upload_timeout: float = 60.0

    # 数据库配置
    database_url: str = "sqlite:///./data/thumbnail_studio.db"

    # 日志配置
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()
