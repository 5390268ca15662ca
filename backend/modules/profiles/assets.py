"""
Asset store implementations for profile pictures.
"""

import logging

import httpx
from supabase import Client, StorageException

from .exceptions import AssetStoreError
from .interfaces import IAssetStore

logger = logging.getLogger(__name__)


class InMemoryAssetStore(IAssetStore):
    """
    Asset store that keeps bytes in memory.

    For testing and development. Use SupabaseAssetStore for production.
    """

    def __init__(self, bucket: str = "profiles"):
        self._bucket = bucket
        self._objects: dict[str, tuple[bytes, str]] = {}

    async def put(self, key: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        self._objects[key] = (bytes(data), content_type)

    async def get_retrieval_url(self, key: str) -> str:
        if key not in self._objects:
            raise AssetStoreError(f"No stored photo at {key}", key)
        return f"memory://{self._bucket}/{key}"

    def get(self, key: str) -> tuple[bytes, str]:
        """Get the stored bytes and content type (for tests)."""
        return self._objects[key]

    def __contains__(self, key: str) -> bool:
        return key in self._objects


class SupabaseAssetStore(IAssetStore):
    """Asset store backed by a Supabase Storage bucket."""

    def __init__(self, supabase_client: Client, bucket: str = "profiles"):
        """
        Initialize with Supabase client.

        Args:
            supabase_client: Supabase client instance
            bucket: Storage bucket holding the assets
        """
        self._client = supabase_client
        self._bucket = bucket

    def _storage(self):
        return self._client.storage.from_(self._bucket)

    async def put(self, key: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        try:
            self._storage().upload(
                key,
                data,
                {"content-type": content_type, "upsert": "true"},
            )
        except (StorageException, httpx.HTTPError) as e:
            logger.error(f"Upload of {self._bucket}/{key} failed: {e}")
            raise AssetStoreError(f"Failed to upload photo: {e}", key) from e

        logger.debug(f"Uploaded {len(data)} bytes to {self._bucket}/{key}")

    async def get_retrieval_url(self, key: str) -> str:
        try:
            return self._storage().get_public_url(key)
        except (StorageException, httpx.HTTPError) as e:
            raise AssetStoreError(f"Failed to upload photo: {e}", key) from e
