import logging
from typing import Optional

from supabase import Client, create_client

from rehearsal.core.settings import settings
from rehearsal.shared.exceptions import UpstreamFailureError

logger = logging.getLogger(__name__)


class StorageService:
    """
    Supabase storage service for video and screenshot files.

    Files are never streamed through the API: clients upload directly with a
    signed upload URL and play back through a signed (or public) URL.
    """

    def __init__(self, client: Optional[Client] = None) -> None:
        if client is None:
            if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
                raise ValueError(
                    "Supabase configuration is required for storage service"
                )
            client = create_client(
                settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY
            )

        self.client: Client = client
        self.video_bucket = settings.VIDEO_BUCKET
        self.screenshot_bucket = settings.SCREENSHOT_BUCKET

    async def create_signed_upload_url(self, bucket: str, path: str) -> dict[str, str]:
        """
        Create a signed URL the client can upload a file to.

        Args:
            bucket: Bucket name
            path: Object path inside the bucket

        Returns:
            Dict with "path", "signed_url" and "token"

        Raises:
            UpstreamFailureError: If the storage call fails
        """
        try:
            result = self.client.storage.from_(bucket).create_signed_upload_url(path)
        except Exception as e:
            logger.error(f"Signed upload URL failed for {bucket}/{path}: {e}")
            raise UpstreamFailureError(str(e))

        signed_url = result.get("signed_url") or result.get("signedUrl")
        if not signed_url:
            raise UpstreamFailureError("Storage did not return an upload URL")

        return {
            "path": path,
            "signed_url": str(signed_url),
            "token": str(result.get("token") or ""),
        }

    async def create_signed_url(
        self, bucket: str, path: str, expires_in: Optional[int] = None
    ) -> str:
        """
        Get a signed URL for reading a private file.

        Args:
            bucket: Bucket name
            path: Object path inside the bucket
            expires_in: URL lifetime in seconds (default: SIGNED_URL_EXPIRES_IN)

        Returns:
            Signed URL for file access

        Raises:
            UpstreamFailureError: If URL generation fails
        """
        try:
            result = self.client.storage.from_(bucket).create_signed_url(
                path, expires_in or settings.SIGNED_URL_EXPIRES_IN
            )
        except Exception as e:
            logger.error(f"Signed URL failed for {bucket}/{path}: {e}")
            raise UpstreamFailureError(str(e))

        signed_url = result.get("signedURL") or result.get("signedUrl")
        if not signed_url:
            raise UpstreamFailureError("Storage did not return a signed URL")
        return str(signed_url)

    def get_public_url(self, bucket: str, path: str) -> str:
        """
        Get the public URL for a file in a public bucket.

        Args:
            bucket: Bucket name
            path: Object path inside the bucket

        Returns:
            Public URL string
        """
        result = self.client.storage.from_(bucket).get_public_url(path)
        if isinstance(result, dict):
            return str(result.get("publicURL") or result.get("publicUrl") or "")
        return str(result)

    async def remove_files(self, bucket: str, paths: list[str]) -> bool:
        """
        Delete files from a bucket.

        Args:
            bucket: Bucket name
            paths: Object paths to delete

        Returns:
            True if deletion was requested (or there was nothing to delete)

        Raises:
            UpstreamFailureError: If deletion fails
        """
        if not paths:
            return True

        try:
            self.client.storage.from_(bucket).remove(paths)
        except Exception as e:
            logger.error(f"Failed to delete {len(paths)} file(s) from {bucket}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(f"Deleted {len(paths)} file(s) from bucket {bucket}")
        return True


# Global storage service instance
storage_service = (
    StorageService()
    if (settings.SUPABASE_URL and settings.SUPABASE_SERVICE_ROLE_KEY)
    else None
)


async def get_storage() -> StorageService:
    """Storage dependency for FastAPI dependency injection."""
    if storage_service is None:
        raise UpstreamFailureError("Storage is not configured")
    return storage_service


async def get_optional_storage() -> Optional[StorageService]:
    """Storage dependency for cleanup paths that must work without storage."""
    return storage_service
