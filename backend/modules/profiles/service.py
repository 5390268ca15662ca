"""
Profile reconciler implementation.

Loads and edits the signed-in user's profile document, keeping the remote
store, the asset store and the local session cache in step.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from shared.exceptions import ExternalServiceError
from shared.observable import Observable, busy_scope
from modules.session_cache import ISessionCache
from modules.validation import FieldViolation, validate_profile_update

from .interfaces import IAssetStore, IProfileReconciler, IProfileStore
from .models import (
    Loaded,
    PictureUploaded,
    Profile,
    ProfileFailed,
    ProfileIdle,
    ProfileInvalidInput,
    ProfileOutcome,
    Updated,
    picture_key,
)

logger = logging.getLogger(__name__)

NOT_LOGGED_IN_MESSAGE = "User not logged in"


class ProfileReconciler(IProfileReconciler):
    """
    Profile reconciler.

    Every public operation returns one ProfileOutcome and publishes it on
    ``state``. ``profile`` holds the last successfully loaded profile and
    is never cleared by a failed load.
    """

    def __init__(
        self,
        profile_store: IProfileStore,
        asset_store: IAssetStore,
        session_cache: ISessionCache,
    ):
        """
        Initialize the profile reconciler.

        Args:
            profile_store: Remote profile document store
            asset_store: Storage for profile pictures
            session_cache: Local cache holding the signed-in user ID
        """
        self._profiles = profile_store
        self._assets = asset_store
        self._cache = session_cache

        self.state: Observable[ProfileOutcome] = Observable(ProfileIdle())
        self.profile: Observable[Optional[Profile]] = Observable(None)
        self.busy: Observable[bool] = Observable(False)
        self.violations: Observable[list[FieldViolation]] = Observable([])

    def _finish(self, outcome: ProfileOutcome) -> ProfileOutcome:
        self.state.set(outcome)
        return outcome

    def _fail(self, message: str) -> ProfileOutcome:
        return self._finish(ProfileFailed(message=message))

    async def load(self, user_id: str) -> ProfileOutcome:
        """
        Fetch a profile and make it the current one.

        Args:
            user_id: ID of the profile owner

        Returns:
            Loaded on success, ProfileFailed otherwise
        """
        with busy_scope(self.busy):
            try:
                profile = await self._profiles.get(user_id)
            except ExternalServiceError as e:
                logger.info(f"Profile load for user {user_id} failed: {e.message}")
                return self._fail(e.message)

            self.profile.set(profile)
            return self._finish(Loaded(profile=profile))

    async def load_current(self) -> ProfileOutcome:
        """Load the profile of the user in the session cache."""
        user_id = self._cache.get_user_id()
        if not user_id:
            return self._fail(NOT_LOGGED_IN_MESSAGE)
        return await self.load(user_id)

    async def update(self, name: str, bio: str, campus: str) -> ProfileOutcome:
        """
        Validate and write the editable profile fields.

        Only name, bio, campus and last_active_at are written; other fields
        of the document are kept. Campus is passed through unvalidated.

        Returns:
            Updated, ProfileInvalidInput or ProfileFailed
        """
        violations = validate_profile_update(name, bio)
        self.violations.set(violations)
        if violations:
            return ProfileInvalidInput(violations=violations)

        user_id = self._cache.get_user_id()
        if not user_id:
            return self._fail(NOT_LOGGED_IN_MESSAGE)

        clean_name = name.strip()
        fields = {
            "name": clean_name,
            "bio": bio.strip(),
            "campus": campus.strip(),
            "last_active_at": datetime.now(timezone.utc),
        }

        with busy_scope(self.busy):
            try:
                await self._profiles.update_fields(user_id, fields)
            except ExternalServiceError as e:
                logger.warning(f"Profile update for user {user_id} failed: {e.message}")
                return self._fail(e.message)

            # The upsert creates the document when it was missing
            self._cache.update_name(clean_name, profile_complete=True)

            outcome = self._finish(Updated())
            await self._refresh(user_id)
            return outcome

    async def upload_picture(self, data: bytes, content_type: str = "image/jpeg") -> ProfileOutcome:
        """
        Store a new profile picture and point the profile at it.

        Args:
            data: Encoded image bytes
            content_type: MIME type recorded with the asset

        Returns:
            PictureUploaded with the retrieval URL, or ProfileFailed
        """
        user_id = self._cache.get_user_id()
        if not user_id:
            return self._fail(NOT_LOGGED_IN_MESSAGE)

        key = picture_key(user_id)

        with busy_scope(self.busy):
            try:
                await self._assets.put(key, data, content_type)
                url = await self._assets.get_retrieval_url(key)
            except ExternalServiceError as e:
                logger.warning(f"Picture upload for user {user_id} failed: {e.message}")
                return self._fail(e.message)

            try:
                await self._profiles.update_fields(user_id, {"profile_picture_url": url})
            except ExternalServiceError as e:
                logger.warning(
                    f"Picture stored at {key} but profile {user_id} was not updated: {e.message}"
                )
                return self._fail(e.message)

            outcome = self._finish(PictureUploaded(url=url))
            await self._refresh(user_id)
            return outcome

    async def touch_last_active(self) -> bool:
        """
        Record activity for the cached user. Best effort.

        Returns:
            True if the timestamp was written
        """
        user_id = self._cache.get_user_id()
        if not user_id:
            return False
        try:
            await self._profiles.update_fields(
                user_id, {"last_active_at": datetime.now(timezone.utc)}
            )
        except ExternalServiceError as e:
            logger.warning(f"Could not update last_active_at for user {user_id}: {e.message}")
            return False
        return True

    def clear_errors(self) -> None:
        """Drop field violations and return to idle."""
        self.violations.set([])
        self.state.set(ProfileIdle())

    async def _refresh(self, user_id: str) -> None:
        # Silent: publishes the new profile but never a new outcome
        try:
            self.profile.set(await self._profiles.get(user_id))
        except ExternalServiceError as e:
            logger.warning(f"Profile refresh for user {user_id} failed: {e.message}")
