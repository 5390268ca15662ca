"""
Profiles module exceptions.
"""

from typing import Any, Optional

from shared.exceptions import ExternalServiceError, NotFoundError


class ProfileStoreError(ExternalServiceError):
    """Raised when the profile document store cannot complete a call."""

    def __init__(
        self,
        message: str,
        code: str = "PROFILE_STORE_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, service="profile_store", code=code, details=details)


class ProfileNotFoundError(ProfileStoreError, NotFoundError):
    """Raised when no profile document exists for a user."""

    def __init__(self, user_id: str):
        super().__init__(
            "User profile not found.",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )
        self.user_id = user_id


class AssetStoreError(ExternalServiceError):
    """Raised when a binary asset cannot be stored or located."""

    def __init__(self, message: str, key: str):
        super().__init__(
            message,
            service="asset_store",
            code="ASSET_STORE_ERROR",
            details={"key": key},
        )
        self.key = key
