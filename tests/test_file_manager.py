import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from recovery_directory.shared.core.exceptions import FileTooLargeError
from recovery_directory.shared.infrastructure.storage.file_manager import FileManager, read_upload

from tests.conftest import png_bytes, png_upload
from tests.fakes import STORAGE_BASE


def make_upload_file(data: bytes, name: str = "photo.png", content_type: str = "image/png") -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=name, headers=Headers({"content-type": content_type}))


async def test_delete_file_removes_one_object(file_manager, storage):
    url = await file_manager.upload_location_image(png_upload())
    path = url[len(STORAGE_BASE):]

    await file_manager.delete_file(path)

    assert storage.objects == {}
    assert storage.deleted == [path]


async def test_delete_files_removes_every_path(file_manager, storage):
    urls = [await file_manager.upload_location_image(png_upload(f"{n}.png")) for n in range(3)]
    paths = [url[len(STORAGE_BASE):] for url in urls]

    await file_manager.delete_files(paths[:2])

    assert list(storage.objects) == [paths[2]]
    assert storage.deleted == paths[:2]


async def test_cleanup_only_touches_matching_prefix(file_manager, storage):
    kept = await file_manager.upload_location_image(png_upload())

    await file_manager.cleanup_urls([kept, "https://elsewhere.test/logo.png", None], prefix="facilities/")

    assert storage.deleted == []
    assert len(storage.objects) == 1


async def test_read_upload_stops_after_the_size_limit():
    upload = make_upload_file(b"x" * 5000)

    image = await read_upload(upload, max_size=100)

    assert image.size == 101
    assert image.content_type == "image/png"


async def test_oversized_upload_is_refused_without_full_read(storage):
    manager = FileManager(storage, max_size=100)
    image = await read_upload(make_upload_file(b"x" * 5000), max_size=100)

    with pytest.raises(FileTooLargeError):
        manager.validate_image(image)


async def test_read_upload_keeps_small_files_whole():
    data = png_bytes()
    image = await read_upload(make_upload_file(data))
    assert image.data == data
    assert image.filename == "photo.png"
