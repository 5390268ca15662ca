"""
Client factory for Supabase.

The identity provider, profile store and asset store adapters all share one
client so that the auth session established at sign-in is the one used for
row-level-security checks on the profile table and storage bucket.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

# Module-level client cache
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get the shared Supabase client, creating it on first use.

    Returns:
        Supabase client configured with the project's anon key

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_ANON_KEY is not set
    """
    global _client

    if _client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


def reset_client_cache() -> None:
    """
    Reset the cached client.

    Useful for testing or when configuration changes.
    """
    global _client
    _client = None
