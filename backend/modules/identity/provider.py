"""
Identity provider implementations.

Provides both in-memory (for testing and local development) and
Supabase-backed (for production) implementations of IIdentityProvider.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx
from supabase import (
    AuthError,
    AuthRetryableError,
    AuthSessionMissingError,
    AuthWeakPasswordError,
    Client,
)

from .exceptions import IdentityProviderError, ProviderErrorKind
from .interfaces import IIdentityProvider
from .models import Identity

logger = logging.getLogger(__name__)


# Supabase Auth error codes we can classify precisely
_AUTH_CODE_KINDS: dict[str, ProviderErrorKind] = {
    "user_already_exists": ProviderErrorKind.EMAIL_TAKEN,
    "email_exists": ProviderErrorKind.EMAIL_TAKEN,
    "weak_password": ProviderErrorKind.WEAK_PASSWORD,
    "email_address_invalid": ProviderErrorKind.INVALID_EMAIL_FORMAT,
    "validation_failed": ProviderErrorKind.INVALID_EMAIL_FORMAT,
    "invalid_credentials": ProviderErrorKind.BAD_CREDENTIALS,
    "user_not_found": ProviderErrorKind.NO_SUCH_USER,
    "email_not_confirmed": ProviderErrorKind.EMAIL_NOT_VERIFIED,
    "over_request_rate_limit": ProviderErrorKind.RATE_LIMITED,
    "over_email_send_rate_limit": ProviderErrorKind.RATE_LIMITED,
    "session_not_found": ProviderErrorKind.NO_USER_SIGNED_IN,
    "request_timeout": ProviderErrorKind.NETWORK,
}


def classify_message(message: Optional[str]) -> ProviderErrorKind:
    """Best-effort classification of an unstructured provider message."""
    upper = (message or "").upper()
    if "NETWORK" in upper:
        return ProviderErrorKind.NETWORK
    if "TOO_MANY_REQUESTS" in upper or "RATE LIMIT" in upper:
        return ProviderErrorKind.RATE_LIMITED
    if "INVALID_LOGIN" in upper or "INVALID LOGIN" in upper:
        return ProviderErrorKind.BAD_CREDENTIALS
    return ProviderErrorKind.UNKNOWN


def classify_auth_error(error: AuthError) -> ProviderErrorKind:
    """Map a Supabase Auth exception to a ProviderErrorKind."""
    if isinstance(error, AuthSessionMissingError):
        return ProviderErrorKind.NO_USER_SIGNED_IN
    if isinstance(error, AuthWeakPasswordError):
        return ProviderErrorKind.WEAK_PASSWORD
    if isinstance(error, AuthRetryableError):
        return ProviderErrorKind.NETWORK

    kind = _AUTH_CODE_KINDS.get(error.code or "")
    if kind is not None:
        return kind

    if getattr(error, "status", None) == 429:
        return ProviderErrorKind.RATE_LIMITED

    return classify_message(error.message)


def _to_provider_error(error: AuthError) -> IdentityProviderError:
    kind = classify_auth_error(error)
    logger.debug(f"Supabase auth error code={error.code!r} classified as {kind.value}")
    return IdentityProviderError(kind, error.message)


def _to_network_error(error: httpx.HTTPError) -> IdentityProviderError:
    logger.warning(f"Supabase auth transport failure: {error!r}")
    return IdentityProviderError(ProviderErrorKind.NETWORK, str(error))


def _to_identity(user: Any) -> Identity:
    return Identity(
        id=str(user.id),
        email=user.email or "",
        email_verified=user.email_confirmed_at is not None,
    )


@dataclass
class _Account:
    id: str
    email: str
    password: str
    email_verified: bool = False

    def to_identity(self) -> Identity:
        return Identity(id=self.id, email=self.email, email_verified=self.email_verified)


class InMemoryIdentityProvider(IIdentityProvider):
    """
    Identity provider with in-memory accounts.

    For testing and development. Use SupabaseIdentityProvider for production.
    Like a real client SDK, ``current_identity`` returns the snapshot taken
    at the last sign-in or reload, so verification done "elsewhere" (see
    ``verify_email``) is only visible after ``reload``.
    """

    MIN_PASSWORD_LENGTH = 6

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        """
        Args:
            id_factory: Optional callable producing new user IDs.
                        Defaults to random UUIDs.
        """
        self._accounts: dict[str, _Account] = {}
        self._current: Optional[Identity] = None
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

        # Outbox of emails "sent", for assertions in tests
        self.verification_emails: list[str] = []
        self.password_reset_emails: list[str] = []

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    async def sign_up(self, email: str, password: str) -> Identity:
        """Create an account and sign it in."""
        key = self._key(email)
        if "@" not in key:
            raise IdentityProviderError(ProviderErrorKind.INVALID_EMAIL_FORMAT)
        if key in self._accounts:
            raise IdentityProviderError(ProviderErrorKind.EMAIL_TAKEN)
        if len(password) < self.MIN_PASSWORD_LENGTH:
            raise IdentityProviderError(ProviderErrorKind.WEAK_PASSWORD)

        account = _Account(id=self._id_factory(), email=email.strip(), password=password)
        self._accounts[key] = account
        self._current = account.to_identity()
        return self._current

    async def sign_in(self, email: str, password: str) -> Identity:
        """Check credentials and sign the account in."""
        account = self._accounts.get(self._key(email))
        if account is None:
            raise IdentityProviderError(ProviderErrorKind.NO_SUCH_USER)
        if account.password != password:
            raise IdentityProviderError(ProviderErrorKind.BAD_CREDENTIALS)

        self._current = account.to_identity()
        return self._current

    async def sign_out(self) -> None:
        self._current = None

    async def send_password_reset(self, email: str) -> None:
        account = self._accounts.get(self._key(email))
        if account is None:
            raise IdentityProviderError(ProviderErrorKind.NO_SUCH_USER)
        self.password_reset_emails.append(account.email)

    async def send_verification_email(self) -> None:
        if self._current is None:
            raise IdentityProviderError(ProviderErrorKind.NO_USER_SIGNED_IN)
        self.verification_emails.append(self._current.email)

    async def reload(self) -> Identity:
        if self._current is None:
            raise IdentityProviderError(ProviderErrorKind.NO_USER_SIGNED_IN)
        account = self._accounts[self._key(self._current.email)]
        self._current = account.to_identity()
        return self._current

    def current_identity(self) -> Optional[Identity]:
        return self._current

    def verify_email(self, email: str) -> None:
        """Simulate the user clicking the verification link."""
        account = self._accounts.get(self._key(email))
        if account is None:
            raise IdentityProviderError(ProviderErrorKind.NO_SUCH_USER)
        account.email_verified = True


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Identity provider backed by Supabase Auth.

    Uses the synchronous Supabase client; the session it establishes is
    shared with the profile and asset stores built from the same client.
    """

    def __init__(self, supabase_client: Client):
        """
        Initialize with Supabase client.

        Args:
            supabase_client: Supabase client instance
        """
        self._client = supabase_client

    async def sign_up(self, email: str, password: str) -> Identity:
        try:
            response = self._client.auth.sign_up({"email": email, "password": password})
        except AuthError as e:
            raise _to_provider_error(e) from e
        except httpx.HTTPError as e:
            raise _to_network_error(e) from e

        user = response.user
        if user is None:
            raise IdentityProviderError(
                ProviderErrorKind.UNKNOWN, "Account creation failed. Please try again."
            )
        # With email confirmation enabled, Supabase hides existing accounts
        # behind a user that has no identities.
        if user.identities == []:
            raise IdentityProviderError(ProviderErrorKind.EMAIL_TAKEN)

        return _to_identity(user)

    async def sign_in(self, email: str, password: str) -> Identity:
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            raise _to_provider_error(e) from e
        except httpx.HTTPError as e:
            raise _to_network_error(e) from e

        if response.user is None:
            raise IdentityProviderError(ProviderErrorKind.UNKNOWN, "Login failed. Please try again.")
        return _to_identity(response.user)

    async def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except AuthError as e:
            logger.warning(f"Supabase sign-out failed, local session dropped anyway: {e.message}")
        except httpx.HTTPError as e:
            logger.warning(f"Supabase sign-out failed, local session dropped anyway: {e!r}")

    async def send_password_reset(self, email: str) -> None:
        try:
            self._client.auth.reset_password_for_email(email)
        except AuthError as e:
            raise _to_provider_error(e) from e
        except httpx.HTTPError as e:
            raise _to_network_error(e) from e

    async def send_verification_email(self) -> None:
        identity = self.current_identity()
        if identity is None:
            raise IdentityProviderError(ProviderErrorKind.NO_USER_SIGNED_IN)

        try:
            self._client.auth.resend({"type": "signup", "email": identity.email})
        except AuthError as e:
            raise _to_provider_error(e) from e
        except httpx.HTTPError as e:
            raise _to_network_error(e) from e

    async def reload(self) -> Identity:
        try:
            response = self._client.auth.get_user()
        except AuthError as e:
            raise _to_provider_error(e) from e
        except httpx.HTTPError as e:
            raise _to_network_error(e) from e

        if response is None or response.user is None:
            raise IdentityProviderError(ProviderErrorKind.NO_USER_SIGNED_IN)
        return _to_identity(response.user)

    def current_identity(self) -> Optional[Identity]:
        try:
            session = self._client.auth.get_session()
        except AuthError as e:
            logger.warning(f"Could not read Supabase session: {e.message}")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Could not read Supabase session: {e!r}")
            return None

        if session is None or session.user is None:
            return None
        return _to_identity(session.user)
