import asyncio
import io
import re
from unittest.mock import patch

import pytest
from starlette.datastructures import Headers, UploadFile

from thumbhost.modules.uploads import DiskUploadStorer
from thumbhost.modules.uploads.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    UploadStorageError,
)
from thumbhost.modules.uploads.storage import generate_filename


def _upload(data: bytes, filename="photo.jpg", content_type="image/jpeg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.parametrize(
    "original, suffix",
    [("photo.jpg", ".jpg"), ("archive.tar.PNG", ".PNG"), ("noext", ""), (None, ""), ("../../evil.jp g", "")],
)
def test_generate_filename(original, suffix):
    name = generate_filename("image", original)

    assert re.fullmatch(r"image-\d{13}-\d{1,9}" + re.escape(suffix), name)


def test_generated_names_are_unique():
    names = {generate_filename("image", "a.jpg") for _ in range(200)}

    assert len(names) == 200


def test_store_writes_bytes_and_describes_asset(upload_dir):
    storer = DiskUploadStorer(upload_dir, chunk_size=4)

    asset = asyncio.run(storer.store(_upload(b"0123456789"), "image"))

    assert asset.original_name == "photo.jpg"
    assert asset.mime_type == "image/jpeg"
    assert asset.size_bytes == 10
    assert asset.storage_path == upload_dir / asset.filename
    assert asset.storage_path.read_bytes() == b"0123456789"
    assert [p.name for p in upload_dir.iterdir()] == [asset.filename]


def test_store_creates_missing_root(tmp_path):
    root = tmp_path / "not" / "yet"
    asset = asyncio.run(DiskUploadStorer(root).store(_upload(b"x"), "image"))

    assert asset.storage_path.parent == root


def test_store_retries_on_name_collision(upload_dir):
    (upload_dir / "image-1-1.jpg").write_bytes(b"taken")
    names = iter(["image-1-1.jpg", "image-1-2.jpg"])

    with patch("thumbhost.modules.uploads.storage.generate_filename", side_effect=lambda *_: next(names)):
        asset = asyncio.run(DiskUploadStorer(upload_dir).store(_upload(b"new"), "image"))

    assert asset.filename == "image-1-2.jpg"
    assert (upload_dir / "image-1-1.jpg").read_bytes() == b"taken"


def test_store_rejects_disallowed_type(upload_dir):
    with pytest.raises(InvalidFileTypeError):
        asyncio.run(DiskUploadStorer(upload_dir).store(_upload(b"x", content_type="application/pdf"), "image"))

    assert list(upload_dir.iterdir()) == []


def test_store_rejects_oversized_upload(upload_dir):
    storer = DiskUploadStorer(upload_dir, max_bytes=2 * 1024 * 1024, chunk_size=512 * 1024)

    with pytest.raises(FileTooLargeError) as excinfo:
        asyncio.run(storer.store(_upload(b"\x00" * (2 * 1024 * 1024 + 1)), "image"))

    assert excinfo.value.details == {"maxSize": "2MB"}
    assert list(upload_dir.iterdir()) == []


def test_store_wraps_write_failures(upload_dir):
    storer = DiskUploadStorer(upload_dir)

    with patch("pathlib.Path.replace", side_effect=OSError("read-only")):
        with pytest.raises(UploadStorageError) as excinfo:
            asyncio.run(storer.store(_upload(b"abc"), "image"))

    assert excinfo.value.status_code == 500
    assert list(upload_dir.iterdir()) == []


def test_discard_removes_stored_file(upload_dir):
    storer = DiskUploadStorer(upload_dir)
    asset = asyncio.run(storer.store(_upload(b"abc"), "image"))

    storer.discard(asset)

    assert not asset.storage_path.exists()
