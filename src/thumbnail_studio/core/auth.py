"""
用户身份 - 会话层在网关处完成鉴权，这里只读取透传的用户ID
"""
from typing import Optional

from fastapi import Header, HTTPException


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """从 X-User-Id 请求头获取当前用户ID，缺失则返回 401"""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Not authenticated")
    return x_user_id.strip()
