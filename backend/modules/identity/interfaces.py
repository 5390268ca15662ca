"""
Identity provider interface.

The session reconciler depends on IIdentityProvider, not on Supabase. This
enables testing with mocks and swapping the authentication backend.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import Identity


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface for an external email + password authentication service.

    All remote calls raise IdentityProviderError on failure.
    """

    async def sign_up(self, email: str, password: str) -> Identity:
        """
        Create a new account and make it the current identity.

        Raises:
            IdentityProviderError: WEAK_PASSWORD, INVALID_EMAIL_FORMAT,
                EMAIL_TAKEN, NETWORK or UNKNOWN
        """
        ...

    async def sign_in(self, email: str, password: str) -> Identity:
        """
        Check credentials and make the account the current identity.

        Raises:
            IdentityProviderError: NO_SUCH_USER, BAD_CREDENTIALS, NETWORK,
                EMAIL_NOT_VERIFIED or UNKNOWN
        """
        ...

    async def sign_out(self) -> None:
        """Forget the current identity. Must not fail observably."""
        ...

    async def send_password_reset(self, email: str) -> None:
        """
        Send a password reset email.

        Raises:
            IdentityProviderError: NO_SUCH_USER, NETWORK or UNKNOWN
        """
        ...

    async def send_verification_email(self) -> None:
        """
        Send an email-verification message to the current identity.

        Raises:
            IdentityProviderError: NO_USER_SIGNED_IN or any transport kind
        """
        ...

    async def reload(self) -> Identity:
        """
        Re-read the current identity from the provider.

        This is the only way to observe a fresh ``email_verified`` value.

        Raises:
            IdentityProviderError: NO_USER_SIGNED_IN or any transport kind
        """
        ...

    def current_identity(self) -> Optional[Identity]:
        """
        Get the locally known current identity without a network call.

        Returns:
            The signed-in Identity, or None
        """
        ...
