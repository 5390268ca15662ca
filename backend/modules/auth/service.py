"""
Session reconciler implementation.

Coordinates the identity provider, the profile store and the local session
cache for sign-in, sign-up, verification, password reset and logout.
"""

import logging
from typing import Optional

from shared.observable import Observable, busy_scope
from modules.identity import IIdentityProvider, IdentityProviderError, ProviderErrorKind
from modules.identity.exceptions import PROVIDER_ERROR_MESSAGES
from modules.profiles import IProfileStore, Profile, ProfileNotFoundError, ProfileStoreError
from modules.session_cache import ISessionCache
from modules.validation import (
    FieldViolation,
    validate_password_reset,
    validate_sign_in,
    validate_sign_up,
)

from .interfaces import ISessionReconciler
from .models import (
    AuthFailed,
    AuthOutcome,
    Authenticated,
    EmailNotVerified,
    Idle,
    InvalidInput,
    PasswordResetSent,
    ProfileIncomplete,
    SignedUp,
    VerificationEmailSent,
)

logger = logging.getLogger(__name__)


class SessionReconciler(ISessionReconciler):
    """
    Session reconciler.

    The cache is only marked logged in after the provider has accepted the
    credentials, and a verified email is required before the profile store
    is consulted on sign-in. Failures of the profile store or the
    verification email during sign-up never undo the created account.
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        profile_store: IProfileStore,
        session_cache: ISessionCache,
    ):
        """
        Initialize the session reconciler.

        Args:
            identity_provider: External authentication service
            profile_store: Remote profile document store
            session_cache: Local cache of the signed-in user
        """
        self._provider = identity_provider
        self._profiles = profile_store
        self._cache = session_cache

        self.state: Observable[AuthOutcome] = Observable(Idle())
        self.busy: Observable[bool] = Observable(False)
        self.violations: Observable[list[FieldViolation]] = Observable([])

    def _finish(self, outcome: AuthOutcome) -> AuthOutcome:
        self.state.set(outcome)
        return outcome

    def _reject(self, violations: list[FieldViolation]) -> Optional[AuthOutcome]:
        self.violations.set(violations)
        if violations:
            return InvalidInput(violations=violations)
        return None

    def _failed(self, error: IdentityProviderError) -> AuthOutcome:
        return self._finish(AuthFailed(message=error.message))

    # -------------------------------------------------------------------------
    # Sign-in / sign-up
    # -------------------------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> AuthOutcome:
        """
        Sign in and classify the account.

        Args:
            email: Raw email input, trimmed before use
            password: Raw password input

        Returns:
            Authenticated when the profile exists (or its existence could
            not be determined), ProfileIncomplete when it is missing,
            EmailNotVerified, AuthFailed or InvalidInput
        """
        rejected = self._reject(validate_sign_in(email, password))
        if rejected is not None:
            return rejected

        with busy_scope(self.busy):
            try:
                identity = await self._provider.sign_in(email.strip(), password)
            except IdentityProviderError as e:
                logger.info(f"Sign-in rejected: {e.kind.value}")
                if e.kind == ProviderErrorKind.EMAIL_NOT_VERIFIED:
                    return self._finish(EmailNotVerified())
                return self._failed(e)

            if not identity.email_verified:
                logger.info(f"Sign-in for user {identity.id} blocked until email is verified")
                return self._finish(EmailNotVerified())

            try:
                profile = await self._profiles.get(identity.id)
            except ProfileNotFoundError:
                logger.info(f"User {identity.id} signed in without a profile")
                self._cache.save(identity.id, "", identity.email, profile_complete=False)
                return self._finish(ProfileIncomplete(user_id=identity.id))
            except ProfileStoreError as e:
                logger.warning(
                    f"Profile lookup failed for user {identity.id}, continuing signed in: {e.message}"
                )
                self._cache.save(identity.id, "", identity.email)
                return self._finish(Authenticated(user_id=identity.id))

            self._cache.save(
                identity.id, profile.name, profile.email or identity.email, profile_complete=True
            )
            logger.info(f"User {identity.id} signed in")
            return self._finish(Authenticated(user_id=identity.id))

    async def sign_up(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> AuthOutcome:
        """
        Create an account, then best-effort its profile and verification email.

        Returns:
            SignedUp once the identity exists, AuthFailed if the provider
            refused, InvalidInput if any field is invalid
        """
        rejected = self._reject(validate_sign_up(name, email, password, confirm_password))
        if rejected is not None:
            return rejected

        clean_name = name.strip()
        clean_email = email.strip()

        with busy_scope(self.busy):
            try:
                identity = await self._provider.sign_up(clean_email, password)
            except IdentityProviderError as e:
                logger.info(f"Sign-up rejected: {e.kind.value}")
                return self._failed(e)

            created = await self._create_profile(
                Profile.new(user_id=identity.id, email=clean_email, name=clean_name)
            )
            await self._send_verification_email(identity.id)

            self._cache.save(identity.id, clean_name, clean_email, profile_complete=created)
            logger.info(f"User {identity.id} signed up (profile created: {created})")
            return self._finish(SignedUp(user_id=identity.id))

    async def _create_profile(self, profile: Profile) -> bool:
        try:
            await self._profiles.create(profile.user_id, profile)
        except ProfileStoreError as e:
            logger.warning(f"Profile creation failed for user {profile.user_id}: {e.message}")
            return False
        return True

    async def _send_verification_email(self, user_id: str) -> bool:
        try:
            await self._provider.send_verification_email()
        except IdentityProviderError as e:
            logger.warning(f"Verification email for user {user_id} not sent: {e.kind.value}")
            return False
        return True

    # -------------------------------------------------------------------------
    # Email verification and password reset
    # -------------------------------------------------------------------------

    async def resend_verification_email(self) -> AuthOutcome:
        """Send the verification email again to the current identity."""
        if self._provider.current_identity() is None:
            return self._finish(
                AuthFailed(message=PROVIDER_ERROR_MESSAGES[ProviderErrorKind.NO_USER_SIGNED_IN])
            )

        with busy_scope(self.busy):
            try:
                await self._provider.send_verification_email()
            except IdentityProviderError as e:
                return self._failed(e)
            return self._finish(VerificationEmailSent())

    async def check_email_verification(self) -> AuthOutcome:
        """
        Reload the current identity and report whether it is verified.

        The provider is always asked; a previously seen flag is never reused.
        """
        if self._provider.current_identity() is None:
            return self._finish(
                AuthFailed(message=PROVIDER_ERROR_MESSAGES[ProviderErrorKind.NO_USER_SIGNED_IN])
            )

        with busy_scope(self.busy):
            try:
                identity = await self._provider.reload()
            except IdentityProviderError as e:
                return self._failed(e)

            if not identity.email_verified:
                return self._finish(EmailNotVerified())

            self._cache.save(identity.id, self._cache.get_name() or "", identity.email)
            logger.info(f"User {identity.id} verified their email")
            return self._finish(Authenticated(user_id=identity.id))

    async def send_password_reset(self, email: str) -> AuthOutcome:
        rejected = self._reject(validate_password_reset(email))
        if rejected is not None:
            return rejected

        with busy_scope(self.busy):
            try:
                await self._provider.send_password_reset(email.strip())
            except IdentityProviderError as e:
                return self._failed(e)
            return self._finish(PasswordResetSent())

    # -------------------------------------------------------------------------
    # Session lifecycle
    # -------------------------------------------------------------------------

    async def logout(self) -> AuthOutcome:
        """
        Sign out and clear the local cache.

        Always succeeds locally; a provider failure is only logged.
        """
        try:
            await self._provider.sign_out()
        except Exception as e:
            logger.warning(f"Provider sign-out failed, clearing local session anyway: {e}")

        self._cache.clear()
        self.violations.set([])
        return self._finish(Idle())

    def restore_session(self) -> AuthOutcome:
        """
        Decide the start screen from the cache alone. No network call.

        Returns:
            Authenticated with the cached user ID when the cache says
            logged in, Idle otherwise
        """
        user_id = self._cache.get_user_id()
        if self._cache.is_logged_in() and user_id:
            return self._finish(Authenticated(user_id=user_id))
        return self._finish(Idle())

    def is_signed_in(self) -> bool:
        """Whether the provider has a current identity."""
        return self._provider.current_identity() is not None

    def current_user_id(self) -> Optional[str]:
        identity = self._provider.current_identity()
        return identity.id if identity else None

    def clear_errors(self) -> None:
        """Drop field violations and return to idle."""
        self.violations.set([])
        self.state.set(Idle())

