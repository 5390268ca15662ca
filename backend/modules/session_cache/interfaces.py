"""
Session cache interface.

Unlike the remote contracts this one is synchronous: every call is local
and durable by the time it returns.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import SessionCacheEntry


@runtime_checkable
class ISessionCache(Protocol):
    """Interface for the local, single-user session cache."""

    def save(
        self,
        user_id: str,
        name: str,
        email: str,
        profile_complete: Optional[bool] = None,
    ) -> None:
        """
        Record a signed-in user and mark the cache logged in, in one write.

        When ``profile_complete`` is None the existing flag survives only if
        ``user_id`` is unchanged.
        """
        ...

    def clear(self) -> None:
        """Forget everything, including the logged-in flag."""
        ...

    def is_logged_in(self) -> bool:
        ...

    def get_user_id(self) -> Optional[str]:
        ...

    def get_name(self) -> Optional[str]:
        ...

    def get_email(self) -> Optional[str]:
        ...

    def set_profile_complete(self, complete: bool) -> None:
        ...

    def is_profile_complete(self) -> bool:
        ...

    def update_name(self, name: str, profile_complete: Optional[bool] = None) -> None:
        """
        Replace the cached display name, leaving every other field.

        A given ``profile_complete`` is written in the same update.
        """
        ...

    def snapshot(self) -> Optional[SessionCacheEntry]:
        """Get the whole cached record, or None when empty."""
        ...
