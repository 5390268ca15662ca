"""
Profile store implementations.

Provides both in-memory (for testing) and Supabase-backed (for production)
implementations of IProfileStore.
"""

import logging
from datetime import datetime
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError
from supabase import Client, PostgrestAPIError

from shared.repository import BaseRepository
from .exceptions import ProfileNotFoundError, ProfileStoreError
from .interfaces import IProfileStore
from .models import Profile

logger = logging.getLogger(__name__)


def serialize_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Convert field values into JSON-compatible values for storage."""
    serialized: dict[str, Any] = {}
    for key, value in fields.items():
        if isinstance(value, datetime):
            serialized[key] = value.isoformat()
        elif isinstance(value, BaseModel):
            serialized[key] = value.model_dump(mode="json")
        elif isinstance(value, (set, frozenset)):
            serialized[key] = sorted(value)
        else:
            serialized[key] = value
    return serialized


def _map_to_profile(row: dict[str, Any]) -> Profile:
    # Columns left NULL fall back to the model defaults
    return Profile.model_validate({k: v for k, v in row.items() if v is not None})


class InMemoryProfileStore(IProfileStore):
    """
    Profile store with in-memory documents.

    For testing and development. Use SupabaseProfileStore for production.
    Documents are kept in their serialized form, as a remote store would.
    """

    def __init__(self):
        self._documents: dict[str, dict[str, Any]] = {}

    async def create(self, user_id: str, profile: Profile) -> None:
        document = profile.to_document()
        document["user_id"] = user_id
        self._documents[user_id] = document

    async def get(self, user_id: str) -> Profile:
        document = self._documents.get(user_id)
        if document is None:
            raise ProfileNotFoundError(user_id)
        try:
            return _map_to_profile(document)
        except PydanticValidationError as e:
            raise ProfileStoreError(f"Failed to load profile: {e}") from e

    async def update_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        document = self._documents.setdefault(user_id, {"user_id": user_id})
        document.update(serialize_fields(fields))

    async def exists(self, user_id: str) -> bool:
        return user_id in self._documents

    def clear(self) -> None:
        """Drop every document (for tests)."""
        self._documents.clear()


class SupabaseProfileStore(BaseRepository[Profile], IProfileStore):
    """
    Profile store backed by a Supabase (PostgREST) table.

    One row per user, keyed by ``user_id``. Nested ``stats`` and the
    ``badges`` set are stored as JSON columns.
    """

    def __init__(self, supabase_client: Client, table: str = "users"):
        """
        Initialize with Supabase client.

        Args:
            supabase_client: Supabase client instance
            table: Name of the profiles table
        """
        super().__init__(supabase_client, table, key_column="user_id")

    def _map_row(self, row: dict[str, Any]) -> Profile:
        return _map_to_profile(row)

    async def create(self, user_id: str, profile: Profile) -> None:
        document = profile.to_document()
        document["user_id"] = user_id
        try:
            self._table().insert(document).execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.error(f"Failed to create profile for user {user_id}: {e}")
            raise ProfileStoreError(f"Failed to create profile: {e}") from e

    async def get(self, user_id: str) -> Profile:
        try:
            row = self._select_one(user_id)
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.error(f"Failed to load profile for user {user_id}: {e}")
            raise ProfileStoreError(f"Failed to load profile: {e}") from e

        if row is None:
            raise ProfileNotFoundError(user_id)

        try:
            return self._map_row(row)
        except PydanticValidationError as e:
            raise ProfileStoreError(f"Failed to load profile: {e}") from e

    async def update_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        payload = serialize_fields(fields)
        payload["user_id"] = user_id
        try:
            # default_to_null=False keeps the columns we don't send
            self._table().upsert(
                payload,
                on_conflict="user_id",
                default_to_null=False,
            ).execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.error(f"Failed to update profile for user {user_id}: {e}")
            raise ProfileStoreError(f"Failed to update profile: {e}") from e

    async def exists(self, user_id: str) -> bool:
        try:
            return self._select_one(user_id, columns="user_id") is not None
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.warning(f"Profile existence check failed for user {user_id}: {e}")
            return False
