# 📄 File: recovery_directory/shared/infrastructure/storage/supabase_storage.py

# 🧭 Purpose (Layman Explanation):
# Uploads listing photos, logos and city images to cloud storage and removes
# them again when an owner or admin replaces or deletes them.

# 🧪 Purpose (Technical Summary):
# FileStorage abstraction plus its Supabase Storage implementation: upload with
# public URL resolution, batch removal, and public-URL to object-path mapping.
# Blocking SDK calls run in a worker thread.

# 🔗 Dependencies:
# - supabase: Storage client (via shared.config.supabase)
# - asyncio: offloading blocking SDK calls
# - urllib.parse: public URL parsing

# 🔄 Connected Modules / Calls From:
# Called by: shared.infrastructure.storage.file_manager (FileManager)
# Connects to: Supabase Storage bucket configured by SUPABASE_STORAGE_BUCKET

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import unquote, urlparse

from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.config.supabase import get_supabase_manager
from recovery_directory.shared.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class FileStorage(ABC):
    """Blob storage port used by the media uploader."""

    @abstractmethod
    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store bytes at path and return the public URL."""
        pass

    @abstractmethod
    async def delete(self, paths: List[str]) -> None:
        pass

    @abstractmethod
    def path_from_url(self, url: str) -> Optional[str]:
        """Object path for a URL this storage produced, or None."""
        pass


class SupabaseStorageClient(FileStorage):
    """
    Supabase Storage wrapper for directory media.

    All objects live in one public bucket; the first path segment
    (facilities/, locations/, amenities/ ...) groups them by owner entity.
    """

    def __init__(self, bucket_name: Optional[str] = None):
        settings = get_settings()
        self.bucket_name = bucket_name or settings.SUPABASE_STORAGE_BUCKET
        self._public_marker = f"/storage/v1/object/public/{self.bucket_name}/"

    def _bucket(self):
        return get_supabase_manager().get_storage_bucket(self.bucket_name)

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        try:
            bucket = self._bucket()
            await asyncio.to_thread(
                bucket.upload,
                path=path,
                file=data,
                file_options={
                    "content-type": content_type,
                    "cache-control": "3600",
                    "upsert": "false",
                },
            )
            public_url = bucket.get_public_url(path)
        except Exception as e:
            logger.error(f"File upload failed for {path}: {e}")
            raise StorageError(f"Upload failed: {e}", path=path) from e

        logger.info(f"File uploaded successfully: {path}")
        return public_url

    async def delete(self, paths: List[str]) -> None:
        if not paths:
            return
        try:
            await asyncio.to_thread(self._bucket().remove, list(paths))
        except Exception as e:
            logger.error(f"File deletion failed for {paths}: {e}")
            raise StorageError(f"Delete failed: {e}", path=",".join(paths)) from e
        logger.info(f"Deleted {len(paths)} file(s) from storage")

    def path_from_url(self, url: str) -> Optional[str]:
        if not url:
            return None
        try:
            parsed = urlparse(url)
        except ValueError:
            return None
        marker_at = parsed.path.find(self._public_marker)
        if marker_at < 0:
            return None
        return unquote(parsed.path[marker_at + len(self._public_marker):]) or None
