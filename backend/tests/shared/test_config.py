"""Tests for shared/config.py."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.app_name == "SkillSwap"
        assert settings.app_version == "0.1.0"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.backend == "memory"
        assert settings.profiles_table == "users"
        assert settings.profile_pictures_bucket == "profiles"
        assert settings.session_cache_path == "~/.skillswap/session.json"

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "LOG_LEVEL": "debug"}):
            settings = Settings(_env_file=None)

        assert settings.debug is True
        assert settings.log_level == "debug"

    def test_loads_supabase_config_from_env(self):
        with patch.dict(os.environ, {
            "BACKEND": "supabase",
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_ANON_KEY": "test-anon-key",
        }):
            settings = Settings(_env_file=None)

        assert settings.backend == "supabase"
        assert settings.supabase_url == "https://test.supabase.co"
        assert settings.supabase_anon_key == "test-anon-key"

    def test_rejects_unknown_backend(self):
        with patch.dict(os.environ, {"BACKEND": "firebase"}):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)


class TestGetSettings:
    def test_returns_settings_instance(self):
        assert isinstance(get_settings(), Settings)

    def test_is_cached(self):
        assert get_settings() is get_settings()
