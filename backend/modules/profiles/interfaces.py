"""
Profiles module interfaces.

The reconcilers depend on IProfileStore and IAssetStore, not on a concrete
database or bucket. Callers of the profile reconciler depend on
IProfileReconciler.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from shared.observable import Observable

from .models import Profile, ProfileOutcome


@runtime_checkable
class IProfileStore(Protocol):
    """
    Interface for the remote profile document store.

    Documents are keyed by the owning identity's ID.
    """

    async def create(self, user_id: str, profile: Profile) -> None:
        """
        Write a new profile document.

        Raises:
            ProfileStoreError: If the write fails
        """
        ...

    async def get(self, user_id: str) -> Profile:
        """
        Read a profile document.

        Raises:
            ProfileNotFoundError: If no document exists
            ProfileStoreError: If the read fails for any other reason
        """
        ...

    async def update_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        """
        Merge the given fields into the document, creating it if absent.

        Fields not named in ``fields`` are left untouched.

        Raises:
            ProfileStoreError: If the write fails
        """
        ...

    async def exists(self, user_id: str) -> bool:
        """
        Check whether a document exists.

        Never raises: any failure is reported as False.
        """
        ...


@runtime_checkable
class IAssetStore(Protocol):
    """Interface for binary asset storage (profile pictures)."""

    async def put(self, key: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        """
        Store or replace the asset under ``key``.

        Raises:
            AssetStoreError: If the upload fails
        """
        ...

    async def get_retrieval_url(self, key: str) -> str:
        """
        Get a stable URL the asset can be downloaded from.

        Raises:
            AssetStoreError: If the URL cannot be produced
        """
        ...


@runtime_checkable
class IProfileReconciler(Protocol):
    """
    Interface for loading and editing the signed-in user's profile.

    Each operation returns exactly one outcome and also publishes it on
    ``state``.
    """

    state: Observable[ProfileOutcome]
    profile: Observable[Optional[Profile]]
    busy: Observable[bool]

    async def load(self, user_id: str) -> ProfileOutcome:
        ...

    async def load_current(self) -> ProfileOutcome:
        ...

    async def update(self, name: str, bio: str, campus: str) -> ProfileOutcome:
        ...

    async def upload_picture(self, data: bytes, content_type: str = "image/jpeg") -> ProfileOutcome:
        ...
