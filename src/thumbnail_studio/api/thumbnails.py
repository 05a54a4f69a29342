"""
缩略图 API
"""
import logging
from typing import Literal, Optional, Union
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from thumbnail_studio.core.auth import get_current_user_id
from thumbnail_studio.models.thumbnail import Thumbnail
from thumbnail_studio.services.errors import GenerationError
from thumbnail_studio.services.generation_service import get_generation_service
from thumbnail_studio.services.prompt_service import (
    ASPECT_RATIOS,
    COLOR_SCHEME_DESCRIPTIONS,
    STYLE_PROMPTS,
)
from thumbnail_studio.services.thumbnail_service import get_thumbnail_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/thumbnails", tags=["thumbnails"])


# ============ 请求/响应模型 ============

class GenerateThumbnailRequest(BaseModel):
    """缩略图生成请求"""
    title: str = Field(min_length=1, max_length=300)
    prompt: Optional[str] = None  # 用户补充描述
    style: str
    aspect_ratio: Literal["16:9", "1:1", "9:16"] = "16:9"
    color_scheme: Optional[str] = None
    text_overlay: Union[bool, str, None] = None


class ThumbnailListResponse(BaseModel):
    """缩略图列表响应"""
    items: list[dict]
    total: int
    page: int
    limit: int


def _thumbnail_to_response(thumbnail: Thumbnail) -> dict:
    """将 Thumbnail 转换为响应字典"""
    return {
        "id": thumbnail.id,
        "user_id": thumbnail.user_id,
        "title": thumbnail.title,
        "style": thumbnail.style,
        "aspect_ratio": thumbnail.aspect_ratio,
        "color_scheme": thumbnail.color_scheme,
        "user_prompt": thumbnail.user_prompt,
        "text_overlay": thumbnail.text_overlay,
        "prompt_used": thumbnail.prompt_used,
        "image_url": thumbnail.image_url,
        "status": thumbnail.status,
        "is_generating": thumbnail.is_generating,
        "created_at": thumbnail.created_at.isoformat(),
        "updated_at": thumbnail.updated_at.isoformat(),
    }


# ============ API 接口 ============

@router.get("/options")
async def get_options():
    """可选的风格、配色与宽高比"""
    return {
        "styles": list(STYLE_PROMPTS),
        "color_schemes": list(COLOR_SCHEME_DESCRIPTIONS),
        "aspect_ratios": list(ASPECT_RATIOS),
    }


@router.post("/generate")
async def generate_thumbnail(
    request: GenerateThumbnailRequest,
    user_id: str = Depends(get_current_user_id),
):
    """
    生成缩略图

    所有模型失败返回 502，上传失败或其他异常返回 500，参数不合法返回 400
    """
    text_overlay = request.text_overlay
    if isinstance(text_overlay, bool):
        text_overlay = str(text_overlay).lower()

    try:
        thumbnail = await get_generation_service().generate(
            user_id=user_id,
            title=request.title,
            style=request.style,
            aspect_ratio=request.aspect_ratio,
            color_scheme=request.color_scheme,
            user_prompt=request.prompt,
            text_overlay=text_overlay,
        )
    except GenerationError as e:
        return JSONResponse(status_code=e.status_code, content=e.payload())
    except Exception as e:
        logger.error(f"缩略图生成接口异常: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": str(e) or "Internal server error"})

    return {"message": "Thumbnail Generated", "thumbnail": _thumbnail_to_response(thumbnail)}


@router.get("", response_model=ThumbnailListResponse)
async def list_thumbnails(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
):
    """获取当前用户的缩略图列表"""
    thumbnails, total = get_thumbnail_service().list_thumbnails(
        user_id=user_id,
        page=page,
        limit=limit,
    )
    return {
        "items": [_thumbnail_to_response(t) for t in thumbnails],
        "total": total,
        "page": page,
        "limit": limit,
    }


@router.get("/{thumbnail_id:int}")
async def get_thumbnail(
    thumbnail_id: int,
    user_id: str = Depends(get_current_user_id),
):
    """获取缩略图详情"""
    thumbnail = get_thumbnail_service().get_thumbnail(thumbnail_id, user_id)
    if not thumbnail:
        raise HTTPException(status_code=404, detail="Thumbnail not found")
    return _thumbnail_to_response(thumbnail)


@router.delete("/{thumbnail_id:int}")
async def delete_thumbnail(
    thumbnail_id: int,
    user_id: str = Depends(get_current_user_id),
):
    """删除缩略图（不存在或不属于当前用户时同样返回成功）"""
    try:
        get_thumbnail_service().delete_thumbnail(thumbnail_id, user_id)
    except Exception as e:
        logger.error(f"删除缩略图失败: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": str(e)})

    return {"message": "Thumbnail Deleted Successfully"}
