"""
缩略图记录读写
"""
import logging
from typing import Optional
from sqlalchemy import Engine, func
from sqlmodel import Session, select

from thumbnail_studio.models.thumbnail import Thumbnail

logger = logging.getLogger(__name__)


class ThumbnailService:
    """缩略图记录服务"""

    def __init__(self, engine: Optional[Engine] = None):
        if engine is None:
            from thumbnail_studio.core.database import engine as default_engine
            engine = default_engine
        self.engine = engine

    def create_pending(
        self,
        user_id: str,
        title: str,
        style: str,
        aspect_ratio: str,
        color_scheme: Optional[str] = None,
        user_prompt: Optional[str] = None,
        text_overlay: Optional[str] = None,
    ) -> Thumbnail:
        """创建 pending 状态的记录"""
        with Session(self.engine) as session:
            thumbnail = Thumbnail(
                user_id=user_id,
                title=title,
                style=style,
                aspect_ratio=aspect_ratio,
                color_scheme=color_scheme,
                user_prompt=user_prompt,
                prompt_used=user_prompt,
                text_overlay=text_overlay,
            )
            session.add(thumbnail)
            session.commit()
            session.refresh(thumbnail)
            logger.debug(f"创建缩略图记录: id={thumbnail.id}, user_id={user_id}")
            return thumbnail

    def mark_succeeded(self, thumbnail_id: int, image_url: str, prompt_used: str) -> Thumbnail:
        """记录生成成功"""
        with Session(self.engine) as session:
            thumbnail = self._get_or_raise(session, thumbnail_id)
            thumbnail.mark_succeeded(image_url=image_url, prompt_used=prompt_used)
            session.add(thumbnail)
            session.commit()
            session.refresh(thumbnail)
            return thumbnail

    def mark_failed(self, thumbnail_id: int) -> Thumbnail:
        """记录生成失败"""
        with Session(self.engine) as session:
            thumbnail = self._get_or_raise(session, thumbnail_id)
            thumbnail.mark_failed()
            session.add(thumbnail)
            session.commit()
            session.refresh(thumbnail)
            return thumbnail

    def get_thumbnail(self, thumbnail_id: int, user_id: str) -> Optional[Thumbnail]:
        """获取某用户的缩略图，不属于该用户时返回 None"""
        with Session(self.engine) as session:
            statement = select(Thumbnail).where(
                Thumbnail.id == thumbnail_id,
                Thumbnail.user_id == user_id,
            )
            return session.exec(statement).first()

    def list_thumbnails(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Thumbnail], int]:
        """分页获取某用户的缩略图，按创建时间倒序"""
        with Session(self.engine) as session:
            total = session.exec(
                select(func.count()).select_from(Thumbnail).where(Thumbnail.user_id == user_id)
            ).one()

            statement = (
                select(Thumbnail)
                .where(Thumbnail.user_id == user_id)
                .order_by(Thumbnail.created_at.desc(), Thumbnail.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            return list(session.exec(statement).all()), total

    def delete_thumbnail(self, thumbnail_id: int, user_id: str) -> bool:
        """
        删除缩略图，只删除属于该用户的记录

        Returns:
            是否实际删除了记录
        """
        with Session(self.engine) as session:
            thumbnail = session.exec(
                select(Thumbnail).where(
                    Thumbnail.id == thumbnail_id,
                    Thumbnail.user_id == user_id,
                )
            ).first()
            if thumbnail is None:
                return False
            session.delete(thumbnail)
            session.commit()
            logger.info(f"删除缩略图记录: id={thumbnail_id}, user_id={user_id}")
            return True

    @staticmethod
    def _get_or_raise(session: Session, thumbnail_id: int) -> Thumbnail:
        thumbnail = session.get(Thumbnail, thumbnail_id)
        if thumbnail is None:
            raise ValueError(f"缩略图记录不存在: {thumbnail_id}")
        return thumbnail


# 全局单例
_thumbnail_service: Optional[ThumbnailService] = None


def get_thumbnail_service() -> ThumbnailService:
    """获取缩略图记录服务单例"""
    global _thumbnail_service
    if _thumbnail_service is None:
        _thumbnail_service = ThumbnailService()
    return _thumbnail_service
