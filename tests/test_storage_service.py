"""
ImageKit 上传测试
"""
import asyncio
import base64
from unittest.mock import Mock

import pytest
import requests

from thumbnail_studio.services.errors import StorageUploadError
from thumbnail_studio.services.storage_service import ImageKitStorage

from conftest import PNG_BYTES


def _fake_response(status_code: int, payload=None, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def test_upload_returns_public_url(monkeypatch: pytest.MonkeyPatch) -> None:
    post = Mock(return_value=_fake_response(200, {"url": "https://ik.imagekit.io/x/thumb.png"}))
    monkeypatch.setattr("thumbnail_studio.services.storage_service.requests.post", post)

    url = asyncio.run(ImageKitStorage().upload(PNG_BYTES, "thumbnail-1.png"))

    assert url == "https://ik.imagekit.io/x/thumb.png"
    _, kwargs = post.call_args
    assert kwargs["files"]["fileName"] == (None, "thumbnail-1.png")
    assert base64.b64decode(kwargs["files"]["file"][1]) == PNG_BYTES
    assert kwargs["auth"] == ("test-key", "")


def test_upload_is_sent_as_multipart(monkeypatch: pytest.MonkeyPatch) -> None:
    post = Mock(return_value=_fake_response(200, {"url": "https://ik.imagekit.io/x/thumb.png"}))
    monkeypatch.setattr("thumbnail_studio.services.storage_service.requests.post", post)

    asyncio.run(ImageKitStorage().upload(PNG_BYTES, "thumbnail-1.png"))

    args, kwargs = post.call_args
    prepared = requests.Request(
        "POST", args[0], files=kwargs["files"], auth=kwargs["auth"]
    ).prepare()
    assert prepared.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="fileName"' in prepared.body
    assert b"thumbnail-1.png" in prepared.body


def test_upload_error_status_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "thumbnail_studio.services.storage_service.requests.post",
        Mock(return_value=_fake_response(403, text="forbidden")),
    )

    with pytest.raises(StorageUploadError, match="403"):
        asyncio.run(ImageKitStorage().upload(PNG_BYTES, "thumbnail-1.png"))


def test_upload_network_error_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "thumbnail_studio.services.storage_service.requests.post",
        Mock(side_effect=requests.ConnectionError("boom")),
    )

    with pytest.raises(StorageUploadError, match="boom"):
        asyncio.run(ImageKitStorage().upload(PNG_BYTES, "thumbnail-1.png"))


def test_upload_without_url_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "thumbnail_studio.services.storage_service.requests.post",
        Mock(return_value=_fake_response(200, {"fileId": "abc"})),
    )

    with pytest.raises(StorageUploadError, match="no url"):
        asyncio.run(ImageKitStorage().upload(PNG_BYTES, "thumbnail-1.png"))
