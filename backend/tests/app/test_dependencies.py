"""Tests for the service container."""

from unittest.mock import MagicMock, patch

import pytest

from app.dependencies import (
    ServiceContainer,
    get_container,
    get_profile_reconciler,
    get_session_reconciler,
    reset_container,
)
from modules.auth import Authenticated, ISessionReconciler, SessionReconciler, SignedUp
from modules.identity import InMemoryIdentityProvider, SupabaseIdentityProvider
from modules.profiles import (
    IProfileReconciler,
    InMemoryAssetStore,
    InMemoryProfileStore,
    ProfileReconciler,
    SupabaseAssetStore,
    SupabaseProfileStore,
    Updated,
)
from modules.session_cache import FileSessionCache, InMemorySessionCache
from shared.config import Settings


class TestMemoryBackend:
    def setup_method(self):
        self.container = ServiceContainer(Settings(_env_file=None, backend="memory"))

    def test_builds_in_memory_collaborators(self):
        assert isinstance(self.container.identity_provider, InMemoryIdentityProvider)
        assert isinstance(self.container.profile_store, InMemoryProfileStore)
        assert isinstance(self.container.asset_store, InMemoryAssetStore)
        assert isinstance(self.container.session_cache, InMemorySessionCache)

    def test_reconcilers_share_collaborators(self):
        session = self.container.session_reconciler
        profile = self.container.profile_reconciler

        assert isinstance(session, SessionReconciler)
        assert isinstance(profile, ProfileReconciler)
        assert session._cache is profile._cache
        assert session._profiles is profile._profiles

    def test_instances_are_cached(self):
        assert self.container.session_reconciler is self.container.session_reconciler
        assert self.container.profile_store is self.container.profile_store

    def test_reset(self):
        first = self.container.session_reconciler
        self.container.reset()
        assert self.container.session_reconciler is not first

    @pytest.mark.asyncio
    async def test_sign_up_then_edit_profile(self):
        session = self.container.session_reconciler
        profile = self.container.profile_reconciler

        outcome = await session.sign_up("Asha", "asha@uni.edu", "Secret123", "Secret123")
        assert isinstance(outcome, SignedUp)

        assert await profile.update("Asha K", "Chess", "North") == Updated()
        assert profile.profile.value.name == "Asha K"
        assert session.restore_session() == Authenticated(user_id=outcome.user_id)


class TestSupabaseBackend:
    @patch("shared.database.get_supabase_client")
    def test_builds_supabase_collaborators(self, mock_get_client, tmp_path):
        client = MagicMock()
        mock_get_client.return_value = client
        settings = Settings(
            _env_file=None,
            backend="supabase",
            profiles_table="profiles_v2",
            profile_pictures_bucket="avatars",
            session_cache_path=str(tmp_path / "session.json"),
        )
        container = ServiceContainer(settings)

        assert isinstance(container.identity_provider, SupabaseIdentityProvider)
        assert isinstance(container.profile_store, SupabaseProfileStore)
        assert container.profile_store.table_name == "profiles_v2"
        assert isinstance(container.asset_store, SupabaseAssetStore)
        assert isinstance(container.session_cache, FileSessionCache)
        assert container.session_cache.path == tmp_path / "session.json"


class TestContainerSingleton:
    def test_get_container_is_cached(self):
        assert get_container() is get_container()

    def test_reset_container(self):
        first = get_container()
        reset_container()
        assert get_container() is not first

    def test_reconciler_getters(self):
        assert isinstance(get_session_reconciler(), ISessionReconciler)
        assert isinstance(get_profile_reconciler(), IProfileReconciler)
        assert get_session_reconciler() is get_container().session_reconciler
