"""
Profiles module.

The user's profile document, its remote and asset stores, and the
reconciler that edits it.

Public API:
- IProfileStore, IAssetStore, IProfileReconciler: Interfaces
- Profile, ProfileStats: Document models
- ProfileOutcome and its variants: Reconciler results
- ProfileStoreError, ProfileNotFoundError, AssetStoreError: Exceptions
- ProfileReconciler: The reconciler
- In-memory and Supabase store implementations
"""

from .interfaces import IAssetStore, IProfileReconciler, IProfileStore
from .models import (
    Loaded,
    PictureUploaded,
    Profile,
    ProfileFailed,
    ProfileIdle,
    ProfileInvalidInput,
    ProfileOutcome,
    ProfileOutcomeType,
    ProfileStats,
    Updated,
    picture_key,
)
from .exceptions import AssetStoreError, ProfileNotFoundError, ProfileStoreError
from .store import InMemoryProfileStore, SupabaseProfileStore
from .assets import InMemoryAssetStore, SupabaseAssetStore
from .service import ProfileReconciler

__all__ = [
    # Interfaces
    "IProfileStore",
    "IAssetStore",
    "IProfileReconciler",
    # Models
    "Profile",
    "ProfileStats",
    "picture_key",
    # Outcomes
    "ProfileOutcome",
    "ProfileOutcomeType",
    "ProfileIdle",
    "Loaded",
    "Updated",
    "PictureUploaded",
    "ProfileFailed",
    "ProfileInvalidInput",
    # Exceptions
    "ProfileStoreError",
    "ProfileNotFoundError",
    "AssetStoreError",
    # Implementations
    "InMemoryProfileStore",
    "SupabaseProfileStore",
    "InMemoryAssetStore",
    "SupabaseAssetStore",
    "ProfileReconciler",
]
