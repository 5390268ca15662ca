"""
Dependency wiring for the SkillSwap backend.

This module provides the "container" that wires together all module
implementations. Each module exposes its collaborators through interfaces,
and this file picks the concrete implementations from settings: in-memory
for development and tests, Supabase for production.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings
from shared.logging import setup_logging

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import ISessionReconciler
    from modules.identity.interfaces import IIdentityProvider
    from modules.profiles.interfaces import IAssetStore, IProfileReconciler, IProfileStore
    from modules.session_cache.interfaces import ISessionCache


class ServiceContainer:
    """
    Container for all collaborator and reconciler instances.

    Instances are created lazily on first access and cached. Both
    reconcilers share the same identity provider, stores and session cache.
    Use reset() to clear all cached instances for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        setup_logging(self._settings.log_level)

        self._identity_provider: "IIdentityProvider | None" = None
        self._profile_store: "IProfileStore | None" = None
        self._asset_store: "IAssetStore | None" = None
        self._session_cache: "ISessionCache | None" = None
        self._session_reconciler: "ISessionReconciler | None" = None
        self._profile_reconciler: "IProfileReconciler | None" = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def uses_supabase(self) -> bool:
        return self._settings.backend == "supabase"

    @property
    def identity_provider(self) -> "IIdentityProvider":
        """Get the identity provider instance."""
        if self._identity_provider is None:
            if self.uses_supabase:
                from modules.identity.provider import SupabaseIdentityProvider
                from shared.database import get_supabase_client
                self._identity_provider = SupabaseIdentityProvider(get_supabase_client())
            else:
                from modules.identity.provider import InMemoryIdentityProvider
                self._identity_provider = InMemoryIdentityProvider()
        return self._identity_provider

    @property
    def profile_store(self) -> "IProfileStore":
        """Get the profile store instance."""
        if self._profile_store is None:
            if self.uses_supabase:
                from modules.profiles.store import SupabaseProfileStore
                from shared.database import get_supabase_client
                self._profile_store = SupabaseProfileStore(
                    get_supabase_client(),
                    table=self._settings.profiles_table,
                )
            else:
                from modules.profiles.store import InMemoryProfileStore
                self._profile_store = InMemoryProfileStore()
        return self._profile_store

    @property
    def asset_store(self) -> "IAssetStore":
        """Get the profile picture store instance."""
        if self._asset_store is None:
            if self.uses_supabase:
                from modules.profiles.assets import SupabaseAssetStore
                from shared.database import get_supabase_client
                self._asset_store = SupabaseAssetStore(
                    get_supabase_client(),
                    bucket=self._settings.profile_pictures_bucket,
                )
            else:
                from modules.profiles.assets import InMemoryAssetStore
                self._asset_store = InMemoryAssetStore(
                    bucket=self._settings.profile_pictures_bucket,
                )
        return self._asset_store

    @property
    def session_cache(self) -> "ISessionCache":
        """
        Get the session cache instance.

        The Supabase backend persists the cache to a file so a restart
        keeps the user signed in; the memory backend does not.
        """
        if self._session_cache is None:
            if self.uses_supabase:
                from modules.session_cache.cache import FileSessionCache
                self._session_cache = FileSessionCache(self._settings.session_cache_path)
            else:
                from modules.session_cache.cache import InMemorySessionCache
                self._session_cache = InMemorySessionCache()
        return self._session_cache

    @property
    def session_reconciler(self) -> "ISessionReconciler":
        """Get the session reconciler instance."""
        if self._session_reconciler is None:
            from modules.auth.service import SessionReconciler
            self._session_reconciler = SessionReconciler(
                identity_provider=self.identity_provider,
                profile_store=self.profile_store,
                session_cache=self.session_cache,
            )
        return self._session_reconciler

    @property
    def profile_reconciler(self) -> "IProfileReconciler":
        """Get the profile reconciler instance."""
        if self._profile_reconciler is None:
            from modules.profiles.service import ProfileReconciler
            self._profile_reconciler = ProfileReconciler(
                profile_store=self.profile_store,
                asset_store=self.asset_store,
                session_cache=self.session_cache,
            )
        return self._profile_reconciler

    def reset(self) -> None:
        """
        Reset all cached instances.

        This is primarily for testing - allows tests to get fresh
        instances with different settings or mock dependencies.
        """
        self._identity_provider = None
        self._profile_store = None
        self._asset_store = None
        self._session_cache = None
        self._session_reconciler = None
        self._profile_reconciler = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    instances. Primarily used for testing.
    """
    global _container
    _container = None


def get_session_reconciler() -> "ISessionReconciler":
    """Get the session reconciler from the container."""
    return get_container().session_reconciler


def get_profile_reconciler() -> "IProfileReconciler":
    """Get the profile reconciler from the container."""
    return get_container().profile_reconciler
