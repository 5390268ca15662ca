"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
in-memory collaborators and reconcilers wired to them.
"""

import pytest

from app.dependencies import reset_container
from modules.auth.service import SessionReconciler
from modules.identity.provider import InMemoryIdentityProvider
from modules.profiles.assets import InMemoryAssetStore
from modules.profiles.service import ProfileReconciler
from modules.profiles.store import InMemoryProfileStore
from modules.session_cache.cache import InMemorySessionCache
from shared.config import get_settings
from shared.database import reset_client_cache


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, the Supabase client and the container."""
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "u1"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "asha@uni.edu"


@pytest.fixture
def identity_provider(test_user_id: str) -> InMemoryIdentityProvider:
    """In-memory provider that hands out a fixed user ID."""
    return InMemoryIdentityProvider(id_factory=lambda: test_user_id)


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def asset_store() -> InMemoryAssetStore:
    return InMemoryAssetStore()


@pytest.fixture
def session_cache() -> InMemorySessionCache:
    return InMemorySessionCache()


@pytest.fixture
def session_reconciler(identity_provider, profile_store, session_cache) -> SessionReconciler:
    return SessionReconciler(
        identity_provider=identity_provider,
        profile_store=profile_store,
        session_cache=session_cache,
    )


@pytest.fixture
def profile_reconciler(profile_store, asset_store, session_cache) -> ProfileReconciler:
    return ProfileReconciler(
        profile_store=profile_store,
        asset_store=asset_store,
        session_cache=session_cache,
    )
