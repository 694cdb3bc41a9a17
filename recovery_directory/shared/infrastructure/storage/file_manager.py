# 📄 File: recovery_directory/shared/infrastructure/storage/file_manager.py

# 🧭 Purpose (Layman Explanation):
# The gatekeeper for pictures: it checks that an upload really is an image and is
# not too big, files it in the right folder, and tidies up pictures nobody uses anymore.

# 🧪 Purpose (Technical Summary):
# High-level media service over FileStorage: image validation (MIME, size, Pillow
# verify), path conventions per entity, sequential multi-upload with a progress
# callback, and best-effort cleanup restricted to an expected path prefix.

# 🔗 Dependencies:
# - PIL (Pillow): image integrity verification
# - supabase_storage: FileStorage port and Supabase implementation
# - shared.utils.validators: upload metadata checks

# 🔄 Connected Modules / Calls From:
# Called by: facility_service (photos, logos), taxonomy_service (logos),
# location_service (city images), facility/taxonomy/location upload routes

import io
import logging
import mimetypes
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from fastapi import Depends, UploadFile
from PIL import Image, UnidentifiedImageError

from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    StorageError,
)
from recovery_directory.shared.infrastructure.storage.supabase_storage import (
    FileStorage,
    SupabaseStorageClient,
)
from recovery_directory.shared.utils.helpers import random_token
from recovery_directory.shared.utils.validators import validate_image_upload

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass
class UploadedImage:
    """An image received from a client, fully read into memory."""
    filename: str
    content_type: Optional[str]
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class FileManager:
    """
    Media service for the directory.

    Object layout inside the bucket:
        facilities/{facility_id}/photos/{ms}-{token}.{ext}
        facilities/{facility_id}/logo/{ms}-{token}.{ext}
        {taxonomy_kind}/{ms}-{token}.{ext}
        locations/{ms}-{token}.{ext}
    """

    def __init__(self, storage: FileStorage, max_size: Optional[int] = None):
        self.storage = storage
        self.max_size = max_size or get_settings().MAX_IMAGE_SIZE

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_image(self, upload: UploadedImage) -> None:
        if upload.size > self.max_size:
            raise FileTooLargeError(upload.size, self.max_size)

        result = validate_image_upload(upload.content_type, upload.size, self.max_size)
        if not result.is_valid:
            raise InvalidFileTypeError(upload.content_type, message="; ".join(result.errors))

        try:
            with Image.open(io.BytesIO(upload.data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise InvalidFileTypeError(upload.content_type, message=f"Invalid image file: {e}") from e

    @staticmethod
    def _extension(upload: UploadedImage) -> str:
        suffix = Path(upload.filename or "").suffix.lower().lstrip(".")
        if suffix:
            return suffix
        guessed = mimetypes.guess_extension(upload.content_type or "") or ".jpg"
        return guessed.lstrip(".")

    def build_path(self, prefix: str, upload: UploadedImage) -> str:
        millis = int(time.time() * 1000)
        return f"{prefix.strip('/')}/{millis}-{random_token()}.{self._extension(upload)}"

    # ------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------

    async def upload_image(self, prefix: str, upload: UploadedImage) -> str:
        """Validate and store one image under prefix; returns its public URL."""
        self.validate_image(upload)
        path = self.build_path(prefix, upload)
        return await self.storage.upload(path, upload.data, upload.content_type or "image/jpeg")

    async def upload_many(
        self,
        prefix: str,
        uploads: List[UploadedImage],
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[str]:
        """
        Upload images one after another.

        Every file is validated before the first byte is sent, so a bad file in
        the batch uploads nothing. on_progress receives (completed, total).
        """
        for upload in uploads:
            self.validate_image(upload)

        urls: List[str] = []
        total = len(uploads)
        for upload in uploads:
            path = self.build_path(prefix, upload)
            urls.append(await self.storage.upload(path, upload.data, upload.content_type or "image/jpeg"))
            if on_progress:
                on_progress(len(urls), total)
        return urls

    async def upload_facility_photos(
        self, facility_id: str, uploads: List[UploadedImage], on_progress: Optional[ProgressCallback] = None
    ) -> List[str]:
        return await self.upload_many(f"facilities/{facility_id}/photos", uploads, on_progress)

    async def upload_facility_logo(self, facility_id: str, upload: UploadedImage) -> str:
        return await self.upload_image(f"facilities/{facility_id}/logo", upload)

    async def upload_taxonomy_logo(self, kind: str, upload: UploadedImage) -> str:
        return await self.upload_image(kind, upload)

    async def upload_location_image(self, upload: UploadedImage) -> str:
        return await self.upload_image("locations", upload)

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    async def delete_file(self, path: str) -> None:
        await self.storage.delete([path])

    async def delete_files(self, paths: List[str]) -> None:
        await self.storage.delete(paths)

    async def cleanup_urls(self, urls: Iterable[Optional[str]], prefix: str) -> None:
        """
        Remove stored objects behind urls whose path starts with prefix.

        URLs from elsewhere (external logos, other prefixes) are left alone.
        Failures are logged, never raised.
        """
        paths = []
        for url in urls:
            path = self.storage.path_from_url(url) if url else None
            if path and path.startswith(prefix):
                paths.append(path)
        if not paths:
            return
        try:
            await self.delete_files(paths)
        except StorageError as e:
            logger.warning(f"Storage cleanup failed for {paths}: {e.message}")


def get_file_storage() -> FileStorage:
    return SupabaseStorageClient()


def get_file_manager(storage: FileStorage = Depends(get_file_storage)) -> FileManager:
    return FileManager(storage)


async def read_upload(file: UploadFile, max_size: Optional[int] = None) -> UploadedImage:
    """
    Read a multipart upload into memory for validation and storage.

    At most one byte past max_size is read, which is enough for
    validate_image to refuse an oversized file.
    """
    limit = max_size or get_settings().MAX_IMAGE_SIZE
    data = await file.read(limit + 1)
    return UploadedImage(filename=file.filename or "", content_type=file.content_type, data=data)
