"""
缩略图记录测试
"""
import pytest

from thumbnail_studio.models.thumbnail import Thumbnail, ThumbnailStatus


class TestThumbnailModel:
    """Thumbnail 状态迁移测试"""

    def test_new_record_is_pending(self):
        thumbnail = Thumbnail(user_id="u1", title="t", style="Minimalist")

        assert thumbnail.status == ThumbnailStatus.PENDING.value
        assert thumbnail.is_generating
        assert thumbnail.image_url is None

    def test_timestamps_are_timezone_aware(self):
        thumbnail = Thumbnail(user_id="u1", title="t", style="Minimalist")
        assert thumbnail.created_at.tzinfo is not None
        assert thumbnail.updated_at.tzinfo is not None

        thumbnail.mark_failed()
        assert thumbnail.updated_at.tzinfo is not None

    def test_mark_succeeded(self):
        thumbnail = Thumbnail(user_id="u1", title="t", style="Minimalist")
        thumbnail.mark_succeeded("https://cdn/x.png", "final prompt")

        assert thumbnail.status == ThumbnailStatus.SUCCEEDED.value
        assert not thumbnail.is_generating
        assert thumbnail.image_url == "https://cdn/x.png"
        assert thumbnail.prompt_used == "final prompt"

    def test_mark_failed(self):
        thumbnail = Thumbnail(user_id="u1", title="t", style="Minimalist")
        thumbnail.mark_failed()

        assert thumbnail.status == ThumbnailStatus.FAILED.value
        assert not thumbnail.is_generating
        assert thumbnail.image_url is None

    def test_success_requires_url(self):
        thumbnail = Thumbnail(user_id="u1", title="t", style="Minimalist")

        with pytest.raises(ValueError):
            thumbnail.mark_succeeded("", "prompt")
        assert thumbnail.is_generating

    def test_terminal_state_cannot_change(self):
        thumbnail = Thumbnail(user_id="u1", title="t", style="Minimalist")
        thumbnail.mark_failed()

        with pytest.raises(ValueError):
            thumbnail.mark_succeeded("https://cdn/x.png", "prompt")
        with pytest.raises(ValueError):
            thumbnail.mark_failed()


class TestThumbnailService:
    """ThumbnailService 读写测试"""

    def _create(self, service, user_id="u1", title="Title"):
        return service.create_pending(
            user_id=user_id,
            title=title,
            style="Minimalist",
            aspect_ratio="16:9",
            user_prompt="extra",
        )

    def test_create_pending(self, thumbnail_service):
        thumbnail = self._create(thumbnail_service)

        assert thumbnail.id is not None
        assert thumbnail.is_generating
        assert thumbnail.prompt_used == "extra"

    def test_mark_succeeded_persists(self, thumbnail_service):
        thumbnail = self._create(thumbnail_service)
        thumbnail_service.mark_succeeded(thumbnail.id, "https://cdn/x.png", "final")

        stored = thumbnail_service.get_thumbnail(thumbnail.id, "u1")
        assert stored.status == ThumbnailStatus.SUCCEEDED.value
        assert stored.image_url == "https://cdn/x.png"
        assert stored.prompt_used == "final"

    def test_mark_failed_persists(self, thumbnail_service):
        thumbnail = self._create(thumbnail_service)
        thumbnail_service.mark_failed(thumbnail.id)

        stored = thumbnail_service.get_thumbnail(thumbnail.id, "u1")
        assert stored.status == ThumbnailStatus.FAILED.value
        assert stored.image_url is None

    def test_mark_missing_record_raises(self, thumbnail_service):
        with pytest.raises(ValueError):
            thumbnail_service.mark_failed(123456)

    def test_get_is_owner_scoped(self, thumbnail_service):
        thumbnail = self._create(thumbnail_service, user_id="u1")

        assert thumbnail_service.get_thumbnail(thumbnail.id, "u2") is None

    def test_list_is_owner_scoped_and_paginated(self, thumbnail_service):
        for i in range(3):
            self._create(thumbnail_service, user_id="u1", title=f"t{i}")
        self._create(thumbnail_service, user_id="u2")

        items, total = thumbnail_service.list_thumbnails("u1", page=1, limit=2)
        assert total == 3
        assert len(items) == 2
        assert all(item.user_id == "u1" for item in items)
        assert items[0].title == "t2"

        items, _ = thumbnail_service.list_thumbnails("u1", page=2, limit=2)
        assert [item.title for item in items] == ["t0"]

    def test_delete_other_users_record_keeps_it(self, thumbnail_service):
        thumbnail = self._create(thumbnail_service, user_id="u1")

        assert thumbnail_service.delete_thumbnail(thumbnail.id, "u2") is False
        assert thumbnail_service.get_thumbnail(thumbnail.id, "u1") is not None

    def test_delete_own_record(self, thumbnail_service):
        thumbnail = self._create(thumbnail_service, user_id="u1")

        assert thumbnail_service.delete_thumbnail(thumbnail.id, "u1") is True
        assert thumbnail_service.get_thumbnail(thumbnail.id, "u1") is None
        assert thumbnail_service.delete_thumbnail(thumbnail.id, "u1") is False


def test_default_engine_uses_in_memory_database() -> None:
    from thumbnail_studio.core.database import engine

    assert str(engine.url) == "sqlite://"
