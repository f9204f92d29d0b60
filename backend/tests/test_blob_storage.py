import pytest

from app.services.blob_storage import LocalBlobStorage, build_jd_path
from app.utils.exceptions import BadRequestException, NotFoundException


@pytest.fixture
def storage(tmp_path) -> LocalBlobStorage:
    return LocalBlobStorage(str(tmp_path / "blobs"))


def test_jd_path_layout() -> None:
    assert build_jd_path("post-1", "jd-1") == "posts/post-1/jd-1"


async def test_put_and_get_object(storage, tmp_path) -> None:
    path = build_jd_path("post-1", "jd-1")

    await storage.put_object(path, b"%PDF-1.4 content")

    assert await storage.object_exists(path)
    assert await storage.get_object(path) == b"%PDF-1.4 content"
    assert (tmp_path / "blobs" / "posts" / "post-1" / "jd-1").read_bytes() == b"%PDF-1.4 content"


async def test_missing_object_is_not_found(storage) -> None:
    with pytest.raises(NotFoundException):
        await storage.get_object("posts/post-1/missing")


async def test_delete_object(storage) -> None:
    path = build_jd_path("post-1", "jd-1")
    await storage.put_object(path, b"data")

    assert await storage.delete_object(path) is True
    assert await storage.delete_object(path) is False
    assert not await storage.object_exists(path)


async def test_path_outside_storage_is_rejected(storage) -> None:
    with pytest.raises(BadRequestException):
        await storage.put_object("../outside", b"data")
